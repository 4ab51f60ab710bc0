import csv
import json
import random
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import tsplib95
from tsplib95.utils import parse_degrees

from .solvers.base import Stop


# (south, west, north, east) in degrees.
NYC_BBOX: Tuple[float, float, float, float] = (40.55, -74.05, 40.90, -73.75)

EXAMPLE_STOPS = [
    {"id": "1", "name": "Post Office", "lat": 40.7505, "lng": -73.9934},
    {"id": "2", "name": "Coffee Shop", "lat": 40.7081, "lng": -73.9565},
    {"id": "3", "name": "Retail Store", "lat": 40.7580, "lng": -73.9855},
    {"id": "4", "name": "Distribution Center", "lat": 40.7505, "lng": -73.9776},
    {"id": "5", "name": "Restaurant", "lat": 40.6629, "lng": -73.9776},
]


def _stop_from_record(record: Dict) -> Stop:
    try:
        return Stop(
            id=str(record["id"]),
            lat=float(record["lat"]),
            lng=float(record["lng"]),
            name=str(record.get("name") or ""),
        )
    except KeyError as exc:
        raise ValueError(f"Stop record is missing field {exc.args[0]!r}: {record}") from exc
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Stop record has a malformed field: {record}") from exc


def load_json_stops(path: Path) -> List[Stop]:
    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = data.get("stops", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must hold a list of stops or an object with a \"stops\" list.")
    return [_stop_from_record(item) for item in data]


def load_csv_stops(path: Path) -> List[Stop]:
    with path.open("r", newline="") as f:
        return [_stop_from_record(row) for row in csv.DictReader(f)]


def load_tsplib_stops(path: Path) -> List[Stop]:
    problem = tsplib95.load(str(path))
    if problem.edge_weight_type != "GEO":
        raise ValueError(
            f"{path} uses EDGE_WEIGHT_TYPE {problem.edge_weight_type}; only GEO instances "
            "carry latitude/longitude coordinates."
        )
    stops = []
    for node, coords in sorted(problem.node_coords.items()):
        lat, lng = coords[0], coords[1]
        stops.append(
            Stop(
                id=str(node),
                lat=parse_degrees(float(lat)),
                lng=parse_degrees(float(lng)),
                name=f"{problem.name}:{node}",
            )
        )
    return stops


LOADERS = {
    ".json": load_json_stops,
    ".csv": load_csv_stops,
    ".tsp": load_tsplib_stops,
}


def load_stops(path: Path) -> List[Stop]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No stop file at {path}")
    loader = LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ValueError(
            f"Unsupported stop file {path.name}; expected one of {', '.join(sorted(LOADERS))}."
        )
    return loader(path)


def validate_stops(stops: Iterable[Stop]) -> List[Stop]:
    stops = list(stops)
    seen = set()
    for stop in stops:
        if stop.id in seen:
            raise ValueError(f"Duplicate stop id {stop.id!r}")
        seen.add(stop.id)
        if not -90.0 <= stop.lat <= 90.0:
            raise ValueError(f"Stop {stop.id!r} has latitude {stop.lat} outside [-90, 90]")
        if not -180.0 <= stop.lng <= 180.0:
            raise ValueError(f"Stop {stop.id!r} has longitude {stop.lng} outside [-180, 180]")
    return stops


def example_stops() -> List[Stop]:
    return [_stop_from_record(item) for item in EXAMPLE_STOPS]


def random_stops(
    n: int,
    rng: Optional[random.Random] = None,
    bbox: Tuple[float, float, float, float] = NYC_BBOX,
) -> List[Stop]:
    rng = rng or random.Random()
    south, west, north, east = bbox
    return [
        Stop(id=f"stop-{i + 1}", lat=rng.uniform(south, north), lng=rng.uniform(west, east))
        for i in range(n)
    ]
