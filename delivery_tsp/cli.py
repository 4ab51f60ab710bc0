import argparse
import json
import random
import sys
import time
from pathlib import Path
from typing import List, Sequence

from delivery_tsp.data import example_stops, load_stops, validate_stops
from delivery_tsp.evaluation import Timing, default_solvers, relative_gaps, run_comparison, timed_solve
from delivery_tsp.solvers.base import Stop


ALGORITHMS = ["nearest-neighbor", "2-opt", "genetic"]


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def fail(msg: str) -> None:
    print(f"error: {msg}", file=sys.stderr)
    raise SystemExit(2)


def _read_stops(args) -> List[Stop]:
    try:
        if args.example:
            stops = example_stops()
        elif args.input:
            stops = load_stops(Path(args.input))
        else:
            fail("pass --input PATH or --example")
        stops = validate_stops(stops)
    except (FileNotFoundError, ValueError) as exc:
        fail(str(exc))
    if len(stops) < 2:
        fail("add at least 2 delivery stops")
    return stops


def _build_solvers(args):
    rng = random.Random(args.seed)
    try:
        return default_solvers(
            max_iterations=args.iterations,
            population_size=args.population_size,
            generations=args.generations,
            rng=rng,
            max_runtime=args.max_runtime,
        )
    except ValueError as exc:
        fail(str(exc))


def _print_timings(timings: Sequence[Timing], as_json: bool) -> None:
    if as_json:
        payload = []
        for t in timings:
            entry = t.result.to_dict()
            entry["runtime"] = t.runtime
            payload.append(entry)
        print(json.dumps(payload, indent=2))
        return
    gaps = relative_gaps([t.result for t in timings])
    for t, gap in zip(timings, gaps):
        r = t.result
        print(
            f"{r.algorithm:<17} distance={r.distance:8.2f} km improvement={r.improvement:6.2f}% "
            f"duration={r.duration_minutes:4d} min gap={gap:5.1f}% runtime={t.runtime:.3f}s"
        )
    best = timings[0].result
    print("route: " + " -> ".join(stop.label for stop in best.stops))


def solve(args) -> None:
    stops = _read_stops(args)
    solver = next(s for s in _build_solvers(args) if s.name == args.algorithm)
    if not args.json:
        log(f"solving {len(stops)} stops with {solver.name}")
    timing = timed_solve(solver, stops)
    if not args.json:
        log(f"done in {timing.runtime:.3f}s")
    _print_timings([timing], args.json)


def compare(args) -> None:
    stops = _read_stops(args)
    if not args.json:
        log(f"comparing {', '.join(ALGORITHMS)} on {len(stops)} stops (parallel={args.parallel})")
    timings = run_comparison(stops, _build_solvers(args), parallel=args.parallel)
    if not args.json:
        log(f"best: {timings[0].solver_name} at {timings[0].result.distance:.2f} km")
    _print_timings(timings, args.json)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input", help="Stop file (.json, .csv or TSPLIB GEO .tsp)")
    parser.add_argument("--example", action="store_true", help="Use the built-in NYC sample stops")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the genetic search")
    parser.add_argument("--iterations", type=int, default=100, help="2-opt pass cap")
    parser.add_argument("--population-size", type=int, default=50)
    parser.add_argument("--generations", type=int, default=100)
    parser.add_argument("--max-runtime", type=float, default=None, help="Per-solver time budget in seconds")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Delivery route optimizer")
    subparsers = parser.add_subparsers(dest="command", required=True)

    solve_parser = subparsers.add_parser("solve", help="Optimize the route with one algorithm")
    solve_parser.add_argument("--algorithm", choices=ALGORITHMS, default="2-opt")
    _add_common(solve_parser)
    solve_parser.set_defaults(func=solve)

    compare_parser = subparsers.add_parser("compare", help="Run all algorithms and rank them by distance")
    compare_parser.add_argument("--parallel", action="store_true", help="Run the algorithms on worker threads")
    _add_common(compare_parser)
    compare_parser.set_defaults(func=compare)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
