import random

from delivery_tsp.data import random_stops
from delivery_tsp.evaluation import default_solvers, relative_gaps, run_comparison


def main():
    rng = random.Random(7)
    stops = random_stops(25, rng=rng)
    solvers = default_solvers(population_size=30, generations=50, rng=rng)
    timings = run_comparison(stops, solvers, parallel=True)
    gaps = relative_gaps([t.result for t in timings])
    for t, gap in zip(timings, gaps):
        r = t.result
        print(
            f"{r.algorithm}: distance={r.distance:.2f} km improvement={r.improvement:.1f}% "
            f"gap={gap:.1f}% runtime={t.runtime:.2f}s"
        )


if __name__ == "__main__":
    main()
