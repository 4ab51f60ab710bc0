import dataclasses
import random
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import torch

from .solvers.base import OptimizationResult, Solver, Stop, Tour, improvement_over
from .solvers.distance import distance_graph, distance_matrix, index_tour_distance, tour_distance
from .solvers.genome import order_crossover, random_chromosome, swap_mutation, tournament_select
from .solvers.heuristics import nearest_neighbor


@dataclass
class GeneticConfig:
    population_size: int = 50
    generations: int = 100
    mutation_rate: float = 0.1
    fitness_offset: float = 0.1
    # Off by default: the best tour of a generation may be lost in the next one.
    elitism: bool = False
    max_runtime: Optional[float] = None
    random_seed: Optional[int] = None
    use_torch: bool = True

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError("population_size must be at least 1.")
        if self.generations < 0:
            raise ValueError("generations must be non-negative.")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must lie in [0, 1].")


def _tour_lengths_torch(dist: torch.Tensor, population: Sequence[Tour]) -> List[float]:
    idx = torch.tensor(population, dtype=torch.long, device=dist.device)
    return dist[idx, idx.roll(-1, dims=1)].sum(dim=1).tolist()


class GeneticSearch:
    """
    Generational GA over index permutations: 2-way tournament selection, order
    crossover and swap mutation, with the whole population replaced each
    generation.
    """

    def __init__(self, config: GeneticConfig, stops: Sequence[Stop], rng: random.Random = None):
        self.cfg = config
        self.stops = list(stops)
        self.graph = distance_graph(self.stops)
        self.rng = rng or random.Random(config.random_seed)
        self.dist_mat = None
        if config.use_torch:
            self.dist_mat = torch.from_numpy(distance_matrix(self.stops))
        n = len(self.stops)
        self.population: List[Tour] = [
            random_chromosome(n, self.rng) for _ in range(config.population_size)
        ]
        self.generation = 0

    def distances(self) -> List[float]:
        # The torch batch sums matrix entries, which may differ from tour_distance
        # in the last ulp; near-tied tournaments can resolve differently.
        if self.dist_mat is not None and len(self.stops) >= 2:
            return _tour_lengths_torch(self.dist_mat, self.population)
        return [index_tour_distance(self.graph, chrom) for chrom in self.population]

    def fitness(self) -> List[float]:
        return [1.0 / (d + self.cfg.fitness_offset) for d in self.distances()]

    def step(self) -> None:
        fitness = self.fitness()
        new_pop: List[Tour] = []
        if self.cfg.elitism:
            elite = max(range(len(fitness)), key=fitness.__getitem__)
            new_pop.append(self.population[elite][:])
        while len(new_pop) < self.cfg.population_size:
            parent1 = tournament_select(self.population, fitness, self.rng)
            parent2 = tournament_select(self.population, fitness, self.rng)
            child = order_crossover(parent1, parent2, self.rng)
            if self.rng.random() < self.cfg.mutation_rate:
                swap_mutation(child, self.rng)
            new_pop.append(child)
        self.population = new_pop
        self.generation += 1

    def run(self) -> None:
        deadline = None
        if self.cfg.max_runtime is not None:
            deadline = time.perf_counter() + self.cfg.max_runtime
        for _ in range(self.cfg.generations):
            if deadline is not None and time.perf_counter() > deadline:
                break
            self.step()

    def best(self) -> Tuple[Tour, float]:
        # Exact sequential lengths for the final pick; first minimum wins.
        best_tour = None
        best_dist = float("inf")
        for chrom in self.population:
            dist = index_tour_distance(self.graph, chrom)
            if dist < best_dist:
                best_dist = dist
                best_tour = chrom
        return best_tour, best_dist


def genetic_algorithm(
    stops: Sequence[Stop],
    population_size: int = 50,
    generations: int = 100,
    rng: random.Random = None,
    config: GeneticConfig = None,
) -> OptimizationResult:
    stops = list(stops)
    if len(stops) < 4:
        return dataclasses.replace(nearest_neighbor(stops), algorithm=GeneticSolver.name)
    if config is None:
        config = GeneticConfig(population_size=population_size, generations=generations)
    search = GeneticSearch(config, stops, rng=rng)
    search.run()
    tour, _ = search.best()
    ordered = [stops[i] for i in tour]
    distance = tour_distance(ordered)
    baseline = nearest_neighbor(stops).distance
    return OptimizationResult(
        stops=ordered,
        distance=distance,
        improvement=improvement_over(baseline, distance),
        algorithm=GeneticSolver.name,
    )


class GeneticSolver(Solver):
    name = "genetic"

    def __init__(self, config: GeneticConfig = None, rng: random.Random = None):
        self.config = config or GeneticConfig()
        self.rng = rng

    def solve(self, stops: Sequence[Stop]) -> OptimizationResult:
        return genetic_algorithm(stops, rng=self.rng, config=self.config)
