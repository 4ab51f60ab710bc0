"""
Permutation operators for the genetic search. A chromosome is a list of stop
indices. Parents are never modified; every operator that produces a new
chromosome writes into a freshly allocated list.
"""

import random
from typing import List, Sequence

from .base import Tour


def random_chromosome(n: int, rng: random.Random) -> Tour:
    """Fisher-Yates shuffle of ``range(n)``."""
    chromosome = list(range(n))
    for j in range(n - 1, 0, -1):
        k = rng.randrange(j + 1)
        chromosome[j], chromosome[k] = chromosome[k], chromosome[j]
    return chromosome


def tournament_select(
    population: Sequence[Tour], fitness: Sequence[float], rng: random.Random
) -> Tour:
    # Two-way tournament; the first draw only wins when strictly fitter.
    idx1 = rng.randrange(len(population))
    idx2 = rng.randrange(len(population))
    if fitness[idx1] > fitness[idx2]:
        return population[idx1]
    return population[idx2]


def order_crossover(parent1: Sequence[int], parent2: Sequence[int], rng: random.Random) -> Tour:
    """
    OX1: keep ``parent1[a..b]`` in place, then fill the remaining slots starting
    after ``b`` with the genes of ``parent2`` in their wrapped order, skipping
    genes the child already holds.
    """
    size = len(parent1)
    start = rng.randrange(size)
    end = rng.randrange(size)
    a, b = (start, end) if start < end else (end, start)

    child: List[int] = [-1] * size
    child[a : b + 1] = parent1[a : b + 1]
    present = set(child[a : b + 1])

    child_idx = (b + 1) % size
    parent2_idx = (b + 1) % size
    while child_idx != a:
        gene = parent2[parent2_idx]
        if gene not in present:
            child[child_idx] = gene
            present.add(gene)
            child_idx = (child_idx + 1) % size
        parent2_idx = (parent2_idx + 1) % size
    return child


def swap_mutation(chromosome: Tour, rng: random.Random) -> Tour:
    i = rng.randrange(len(chromosome))
    j = rng.randrange(len(chromosome))
    chromosome[i], chromosome[j] = chromosome[j], chromosome[i]
    return chromosome


def is_permutation(chromosome: Sequence[int], n: int) -> bool:
    return len(chromosome) == n and sorted(chromosome) == list(range(n))
