import numpy as np
import pytest

pytest.importorskip("matplotlib")

from matplotlib.patches import Circle

from trilateration.contracts import EstimatedPosition
from trilateration.errors import InvalidInput
from trilateration.plotting import plot_estimate

SITES = [(0.0, 0.0), (10.0, 0.0), (5.0, 10.0)]
AMPS = [2.0, 2.0, 2.0]
POS = EstimatedPosition(x=5.0, y=3.75)


def test_two_panels_with_one_circle_per_site():
    fig = plot_estimate(SITES, AMPS, POS, scale=25.0)
    left, right = fig.axes
    circles = [p for p in left.patches if isinstance(p, Circle)]
    assert len(circles) == 3
    assert all(c.radius == pytest.approx(6.25) for c in circles)
    assert right.get_title() == "Trilaterated spatial location"
    assert right.get_ylabel() == "Depth (µm)"


def test_waveforms_are_drawn_on_their_sites():
    waveforms = np.sin(np.linspace(0, 2 * np.pi, 30))[None, :].repeat(3, axis=0)
    fig = plot_estimate(SITES, AMPS, POS, waveforms=waveforms)
    right = fig.axes[1]
    # one line per waveform plus the estimate marker
    assert len(right.lines) == 4
    xs = right.lines[1].get_xdata()
    assert xs.mean() == pytest.approx(10.0, abs=0.2)


def test_waveform_rows_must_match_sites():
    with pytest.raises(InvalidInput):
        plot_estimate(SITES, AMPS, POS, waveforms=np.zeros((2, 30)))
    with pytest.raises(InvalidInput):
        plot_estimate(SITES, AMPS[:2], POS)
