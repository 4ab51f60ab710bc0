import dataclasses
import time
from typing import Optional, Sequence

import networkx as nx

from .base import OptimizationResult, Solver, Stop, Tour, improvement_over
from .distance import distance_graph, index_tour_distance, tour_distance


def nearest_neighbor_tour(graph: nx.Graph, start: int = 0) -> Tour:
    tour = [start]
    # Ordered list rather than a set so ties resolve the same way every run.
    unvisited = [node for node in graph.nodes() if node != start]
    current = start
    while unvisited:
        best_pos = 0
        best_dist = float("inf")
        for pos, node in enumerate(unvisited):
            dist = graph[current][node]["weight"]
            if dist < best_dist:
                best_dist = dist
                best_pos = pos
        current = unvisited.pop(best_pos)
        tour.append(current)
    return tour


def two_opt_tour(
    graph: nx.Graph,
    tour: Tour,
    max_iter: int = 100,
    max_runtime: Optional[float] = None,
) -> Tour:
    """
    Edge-exchange local search. Each accepted move reverses ``tour[i+1..j]`` in
    place and the scan carries on over the updated tour. The closing edge takes
    part through ``d = tour[(j + 1) % n]``.
    """
    best = tour[:]
    n = len(best)
    if n < 4:
        return best
    deadline = None if max_runtime is None else time.perf_counter() + max_runtime
    it = 0
    improved = True
    while improved and it < max_iter:
        if deadline is not None and time.perf_counter() > deadline:
            break
        improved = False
        it += 1
        for i in range(n - 2):
            for j in range(i + 2, n):
                a = best[i]
                b = best[i + 1]
                c = best[j]
                d = best[(j + 1) % n]
                current = graph[a][b]["weight"] + graph[c][d]["weight"]
                exchanged = graph[a][c]["weight"] + graph[b][d]["weight"]
                if exchanged < current:
                    best[i + 1 : j + 1] = reversed(best[i + 1 : j + 1])
                    improved = True
    return best


def nearest_neighbor(stops: Sequence[Stop]) -> OptimizationResult:
    stops = list(stops)
    if len(stops) < 2:
        return OptimizationResult(
            stops=stops, distance=0.0, improvement=0.0, algorithm=NearestNeighborSolver.name
        )
    graph = distance_graph(stops)
    tour = nearest_neighbor_tour(graph, start=0)
    ordered = [stops[i] for i in tour]
    return OptimizationResult(
        stops=ordered,
        distance=tour_distance(ordered),
        improvement=0.0,
        algorithm=NearestNeighborSolver.name,
    )


def two_opt(
    stops: Sequence[Stop],
    max_iterations: int = 100,
    max_runtime: Optional[float] = None,
) -> OptimizationResult:
    stops = list(stops)
    if len(stops) < 4:
        return dataclasses.replace(nearest_neighbor(stops), algorithm=TwoOptSolver.name)
    graph = distance_graph(stops)
    seed = nearest_neighbor_tour(graph, start=0)
    baseline = index_tour_distance(graph, seed)
    tour = two_opt_tour(graph, seed, max_iter=max_iterations, max_runtime=max_runtime)
    ordered = [stops[i] for i in tour]
    distance = tour_distance(ordered)
    return OptimizationResult(
        stops=ordered,
        distance=distance,
        improvement=improvement_over(baseline, distance),
        algorithm=TwoOptSolver.name,
    )


class NearestNeighborSolver(Solver):
    name = "nearest-neighbor"

    def solve(self, stops: Sequence[Stop]) -> OptimizationResult:
        return nearest_neighbor(stops)


class TwoOptSolver(Solver):
    name = "2-opt"

    def __init__(self, max_iterations: int = 100, max_runtime: Optional[float] = None):
        self.max_iterations = max_iterations
        self.max_runtime = max_runtime

    def solve(self, stops: Sequence[Stop]) -> OptimizationResult:
        return two_opt(stops, max_iterations=self.max_iterations, max_runtime=self.max_runtime)
