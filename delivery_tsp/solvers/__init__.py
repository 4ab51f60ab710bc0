from .base import OptimizationResult, Solver, Stop, Tour, improvement_over
from .distance import (
    EARTH_RADIUS_KM,
    distance_graph,
    distance_matrix,
    great_circle_distance,
    index_tour_distance,
    tour_distance,
)
from .genome import order_crossover, random_chromosome, swap_mutation, tournament_select
from .heuristics import (
    NearestNeighborSolver,
    TwoOptSolver,
    nearest_neighbor,
    nearest_neighbor_tour,
    two_opt,
    two_opt_tour,
)

__all__ = [
    "OptimizationResult",
    "Solver",
    "Stop",
    "Tour",
    "improvement_over",
    "EARTH_RADIUS_KM",
    "distance_graph",
    "distance_matrix",
    "great_circle_distance",
    "index_tour_distance",
    "tour_distance",
    "order_crossover",
    "random_chromosome",
    "swap_mutation",
    "tournament_select",
    "NearestNeighborSolver",
    "TwoOptSolver",
    "nearest_neighbor",
    "nearest_neighbor_tour",
    "two_opt",
    "two_opt_tour",
]
