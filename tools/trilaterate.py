import argparse
import json
import logging
import sys
from typing import List, Tuple

from trilateration.contracts import SolverConfig
from trilateration.errors import TrilaterationError
from trilateration.solver import estimate_position


def parse_sites(s: str) -> List[Tuple[float, float]]:
    # format: "0,0 10,0 5,10"
    out: List[Tuple[float, float]] = []
    for token in s.strip().split():
        x_str, y_str = token.split(",", 1)
        out.append((float(x_str), float(y_str)))
    return out


def parse_floats(s: str) -> List[float]:
    # format: "2,2,2"
    return [float(v) for v in s.split(",") if v.strip()]


def main() -> None:
    ap = argparse.ArgumentParser(description="Estimate source position from per-site amplitudes")
    ap.add_argument("--sites", required=True, help="e.g. '0,0 10,0 5,10'")
    ap.add_argument("--amps", required=True, help="e.g. '2,2,2' (same order as --sites)")
    ap.add_argument("--guess", required=True, help="initial position, e.g. '5,5'")
    ap.add_argument("--scale", type=float, default=1000.0, help="k in d = k * a^-2 (default 1000)")
    ap.add_argument("--max-nfev", type=int, default=None, help="solver evaluation budget")
    ap.add_argument("--plot", help="write a figure to this path (needs matplotlib)")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        sites = parse_sites(args.sites)
        amps = parse_floats(args.amps)
        guess = parse_floats(args.guess)
    except ValueError as e:
        print(f"[!] bad argument: {e}", file=sys.stderr)
        sys.exit(1)

    cfg = SolverConfig(scale=args.scale, max_nfev=args.max_nfev)
    try:
        sol = estimate_position(sites, amps, guess, cfg)
    except TrilaterationError as e:
        print(f"[!] {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(2)

    if args.plot:
        from trilateration.plotting import plot_estimate
        plot_estimate(sites, amps, sol, scale=args.scale).savefig(args.plot, dpi=120)

    print(json.dumps({"x": sol.x, "y": sol.y, "cost": sol.cost, "nfev": sol.nfev,
                      "status": sol.status}))


if __name__ == "__main__":
    main()
