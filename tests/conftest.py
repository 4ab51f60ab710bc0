"""Pytest configuration and shared fixtures."""
import random

import pytest

from delivery_tsp.data import example_stops, random_stops
from delivery_tsp.solvers.base import Stop


class ScriptedRandom(random.Random):
    """Random source whose ``randrange`` and ``random`` replay a fixed list of values."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def randrange(self, *args, **kwargs):
        return self.values.pop(0)

    def random(self):
        return self.values.pop(0)


def ids(stops):
    return [s.id for s in stops]


def canonical_cycle(labels):
    """Same value for every rotation and reflection of a cycle."""
    labels = list(labels)
    if not labels:
        return ()
    forms = []
    for seq in (labels, labels[::-1]):
        k = seq.index(min(seq))
        forms.append(tuple(seq[k:] + seq[:k]))
    return min(forms)


@pytest.fixture
def unit_square():
    return [
        Stop(id="a", lat=0.0, lng=0.0),
        Stop(id="b", lat=0.0, lng=1.0),
        Stop(id="c", lat=1.0, lng=1.0),
        Stop(id="d", lat=1.0, lng=0.0),
    ]


@pytest.fixture
def nyc_stops():
    return example_stops()


@pytest.fixture
def city_stops():
    return random_stops(15, rng=random.Random(42))
