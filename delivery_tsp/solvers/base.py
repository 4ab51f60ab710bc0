import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Sequence


Tour = List[int]


@dataclass(frozen=True)
class Stop:
    id: str
    lat: float
    lng: float
    name: str = field(default="", compare=False)

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass
class OptimizationResult:
    stops: List[Stop]
    distance: float
    improvement: float
    algorithm: str = ""

    @property
    def duration_minutes(self) -> int:
        # Rough driving estimate: 3 minutes per km.
        return int(round(self.distance * 3))

    def to_dict(self) -> Dict:
        return {
            "algorithm": self.algorithm,
            "distance": self.distance,
            "improvement": self.improvement,
            "duration_minutes": self.duration_minutes,
            "stops": [asdict(stop) for stop in self.stops],
        }


def improvement_over(baseline: float, distance: float) -> float:
    if baseline <= 0.0 or math.isclose(baseline, 0.0):
        return 0.0
    return (baseline - distance) / baseline * 100.0


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self, stops: Sequence[Stop]) -> OptimizationResult:
        raise NotImplementedError
