import io
import json

import pytest

import cli


def run(monkeypatch, capsys, payload, argv=()):
    text = payload if isinstance(payload, str) else json.dumps(payload)
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    code = cli.main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_named_sites(monkeypatch, capsys):
    code, out, _ = run(monkeypatch, capsys, {
        "sites": {"A": [0, 0], "B": [10, 0], "C": [5, 10]},
        "amplitudes": {"C": 2, "A": 2, "B": 2},
        "initial_guess": [5, 5],
        "cfg": {"scale": 25.0},
    })
    assert code == 0
    sol = json.loads(out)
    assert sol["x"] == pytest.approx(5.0, abs=1e-4)
    assert sol["y"] == pytest.approx(3.75, abs=1e-4)
    assert sol["status"] > 0


def test_list_sites(monkeypatch, capsys):
    code, out, _ = run(monkeypatch, capsys, {
        "sites": [[0, 0], [10, 0]],
        "amplitudes": [100, 1],
        "initial_guess": [5, 0],
    })
    assert code == 0
    assert abs(json.loads(out)["x"]) < 1.0


def test_invalid_input_exits_2(monkeypatch, capsys):
    code, out, err = run(monkeypatch, capsys, {
        "sites": [[0, 0], [10, 0], [5, 10]],
        "amplitudes": [1, 0, 1],
        "initial_guess": [5, 5],
    })
    assert code == 2
    assert out == ""
    assert "InvalidInput" in err


@pytest.mark.parametrize("payload", [
    "{not json",
    {"sites": [[0, 0]], "initial_guess": [0, 0]},
    {"sites": [[0, 0]], "amplitudes": [1], "initial_guess": [0, 0], "cfg": {"tolerance": 1}},
])
def test_bad_request_exits_1(monkeypatch, capsys, payload):
    code, _, err = run(monkeypatch, capsys, payload)
    assert code == 1
    assert "bad request" in err


@pytest.mark.parametrize("cfg", [
    {"max_nfev": 0},
    {"xtol": 0, "ftol": 0, "gtol": 0},
    {"scale": "1"},
])
def test_bad_solver_settings_exit_2(monkeypatch, capsys, cfg):
    code, out, err = run(monkeypatch, capsys, {
        "sites": [[0, 0], [10, 0], [5, 10]],
        "amplitudes": [2, 2, 2],
        "initial_guess": [5, 5],
        "cfg": cfg,
    })
    assert code == 2
    assert out == ""
    assert "InvalidInput" in err


def test_extreme_amplitude_exits_2(monkeypatch, capsys):
    code, _, err = run(monkeypatch, capsys, {
        "sites": [[0, 0], [10, 0], [5, 10]],
        "amplitudes": [1e-200, 1, 1],
        "initial_guess": [5, 5],
    })
    assert code == 2
    assert "InvalidInput" in err
