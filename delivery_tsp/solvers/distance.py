"""
Great-circle distances between stops and cyclic tour lengths.
"""

import math
from typing import Sequence

import networkx as nx
import numpy as np

from .base import Stop


EARTH_RADIUS_KM = 6371.0


def great_circle_distance(a: Stop, b: Stop) -> float:
    """Haversine distance in kilometers between two stops."""
    lat_a = math.radians(a.lat)
    lat_b = math.radians(b.lat)
    dlat = lat_b - lat_a
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat_a) * math.cos(lat_b) * math.sin(dlng / 2) ** 2
    # Rounding can push h a hair outside [0, 1].
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def tour_distance(stops: Sequence[Stop]) -> float:
    n = len(stops)
    if n < 2:
        return 0.0
    dist = 0.0
    for i in range(n):
        dist += great_circle_distance(stops[i], stops[(i + 1) % n])
    return float(dist)


def index_tour_distance(graph: nx.Graph, tour: Sequence[int]) -> float:
    n = len(tour)
    if n < 2:
        return 0.0
    dist = 0.0
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += graph[a][b]["weight"]
    return float(dist)


def distance_matrix(stops: Sequence[Stop]) -> np.ndarray:
    """
    Pairwise haversine distances (km) as a symmetric n x n array with a zero
    diagonal.
    """
    lat = np.radians(np.array([s.lat for s in stops], dtype=np.float64))
    lng = np.radians(np.array([s.lng for s in stops], dtype=np.float64))
    dlat = lat[None, :] - lat[:, None]
    dlng = lng[None, :] - lng[:, None]
    h = np.sin(dlat / 2) ** 2 + np.cos(lat)[:, None] * np.cos(lat)[None, :] * np.sin(dlng / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    mat = 2 * EARTH_RADIUS_KM * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    np.fill_diagonal(mat, 0.0)
    return mat


def distance_graph(stops: Sequence[Stop]) -> nx.Graph:
    """
    Complete graph over stop indices 0..n-1 weighted by great-circle distance.
    Node order follows the input order.
    """
    graph = nx.Graph()
    for idx, stop in enumerate(stops):
        graph.add_node(idx, stop=stop)
    for i in range(len(stops)):
        for j in range(i + 1, len(stops)):
            graph.add_edge(i, j, weight=great_circle_distance(stops[i], stops[j]))
    return graph
