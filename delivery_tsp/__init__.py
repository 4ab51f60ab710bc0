"""
Delivery route optimization: nearest-neighbour, 2-opt and genetic TSP solvers
over great-circle distances between stops.
"""

__all__ = [
    "cli",
    "data",
    "evaluation",
    "evolutionary",
]
