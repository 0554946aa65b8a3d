import sys, json, logging
from trilateration.contracts import Site, SolverConfig
from trilateration.errors import TrilaterationError
from trilateration.solver import estimate_position

def load_request(data: dict):
    # expected format:
    # {
    #   "sites": {"A":[0,0], "B":[10,0], "C":[5,10]},  # or [[0,0],[10,0],[5,10]]
    #   "amplitudes": {"A":2, "B":2, "C":2},           # or [2,2,2], same order as sites
    #   "initial_guess": [5,5],
    #   "cfg": {"scale":1000.0, "max_nfev":200}
    # }
    raw_sites = data["sites"]
    if isinstance(raw_sites, dict):
        sites = [Site(id=k, xy=tuple(v)) for k, v in raw_sites.items()]
        amps = data["amplitudes"]
        amplitudes = [amps[s.id] for s in sites] if isinstance(amps, dict) else amps
    else:
        sites = [Site(id=str(i), xy=tuple(v)) for i, v in enumerate(raw_sites)]
        amplitudes = data["amplitudes"]
    cfg = SolverConfig(**data.get("cfg", {}))
    return sites, amplitudes, data["initial_guess"], cfg

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if "-v" in argv or "--verbose" in argv:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        sites, amplitudes, guess, cfg = load_request(json.load(sys.stdin))
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        print(f"bad request: {e!r}", file=sys.stderr)
        return 1
    try:
        sol = estimate_position(sites, amplitudes, guess, cfg)
    except TrilaterationError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 2
    print(json.dumps(sol.__dict__, ensure_ascii=False, indent=2))
    return 0

if __name__ == "__main__":
    sys.exit(main())
