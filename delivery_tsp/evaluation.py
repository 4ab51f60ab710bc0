import concurrent.futures
import random
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .evolutionary import GeneticConfig, GeneticSolver
from .solvers.base import OptimizationResult, Solver, Stop
from .solvers.heuristics import NearestNeighborSolver, TwoOptSolver


@dataclass
class Timing:
    result: OptimizationResult
    runtime: float
    solver_name: str


def timed_solve(solver: Solver, stops: Sequence[Stop]) -> Timing:
    start = time.perf_counter()
    result = solver.solve(stops)
    runtime = time.perf_counter() - start
    return Timing(result=result, runtime=runtime, solver_name=solver.name)


def default_solvers(
    max_iterations: int = 100,
    population_size: int = 50,
    generations: int = 100,
    rng: Optional[random.Random] = None,
    max_runtime: Optional[float] = None,
) -> List[Solver]:
    # Order matters: it breaks ties between equal distances after sorting.
    return [
        TwoOptSolver(max_iterations=max_iterations, max_runtime=max_runtime),
        GeneticSolver(
            GeneticConfig(
                population_size=population_size,
                generations=generations,
                max_runtime=max_runtime,
            ),
            rng=rng,
        ),
        NearestNeighborSolver(),
    ]


def run_comparison(
    stops: Sequence[Stop],
    solvers: Sequence[Solver],
    parallel: bool = False,
) -> List[Timing]:
    """
    Run every solver on the same stops and return the timings sorted by route
    distance, shortest first. Solvers share no state, so ``parallel`` simply
    hands each one to its own worker thread.
    """
    stops = list(stops)
    if parallel:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, len(solvers))) as ex:
            futures = [ex.submit(timed_solve, solver, stops) for solver in solvers]
            timings = [f.result() for f in futures]
    else:
        timings = [timed_solve(solver, stops) for solver in solvers]
    return sorted(timings, key=lambda t: t.result.distance)


def compare_algorithms(
    stops: Sequence[Stop],
    parallel: bool = False,
    rng: Optional[random.Random] = None,
    max_iterations: int = 100,
    population_size: int = 50,
    generations: int = 100,
) -> List[OptimizationResult]:
    solvers = default_solvers(
        max_iterations=max_iterations,
        population_size=population_size,
        generations=generations,
        rng=rng,
    )
    return [t.result for t in run_comparison(stops, solvers, parallel=parallel)]


def relative_gaps(results: Sequence[OptimizationResult]) -> List[float]:
    """Percentage by which each route is longer than the shortest one."""
    if not results:
        return []
    best = min(r.distance for r in results)
    gaps = []
    for r in results:
        if r.distance <= 0.0:
            gaps.append(0.0)
        else:
            gaps.append((r.distance - best) / r.distance * 100.0)
    return gaps
