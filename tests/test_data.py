import json
import random

import pytest

from delivery_tsp.data import (
    NYC_BBOX,
    example_stops,
    load_stops,
    random_stops,
    validate_stops,
)
from delivery_tsp.solvers.base import Stop


GEO_INSTANCE = """NAME: tiny
TYPE: TSP
COMMENT: three stops around lower Manhattan
DIMENSION: 3
EDGE_WEIGHT_TYPE: GEO
NODE_COORD_SECTION
1 40.45 -73.59
2 40.42 -73.57
3 40.39 -73.58
EOF
"""

EUC_INSTANCE = """NAME: flat
TYPE: TSP
DIMENSION: 2
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 3 4
EOF
"""


def test_load_json_list(tmp_path):
    path = tmp_path / "stops.json"
    path.write_text(
        json.dumps(
            [
                {"id": "a", "lat": 40.75, "lng": -73.99, "name": "Depot"},
                {"id": 2, "lat": "40.70", "lng": "-73.95"},
            ]
        )
    )
    stops = load_stops(path)
    assert stops == [Stop(id="a", lat=40.75, lng=-73.99), Stop(id="2", lat=40.70, lng=-73.95)]
    assert stops[0].label == "Depot"
    assert stops[1].label == "2"


def test_load_json_object(tmp_path):
    path = tmp_path / "stops.json"
    path.write_text(json.dumps({"stops": [{"id": "x", "lat": 1.0, "lng": 2.0}]}))
    assert load_stops(path) == [Stop(id="x", lat=1.0, lng=2.0)]


def test_load_json_missing_field(tmp_path):
    path = tmp_path / "stops.json"
    path.write_text(json.dumps([{"id": "x", "lat": 1.0}]))
    with pytest.raises(ValueError, match="lng"):
        load_stops(path)


def test_load_csv(tmp_path):
    path = tmp_path / "stops.csv"
    path.write_text("id,lat,lng,name\n1,40.7505,-73.9934,Post Office\n2,40.7081,-73.9565,\n")
    stops = load_stops(path)
    assert [s.id for s in stops] == ["1", "2"]
    assert stops[0].name == "Post Office"
    assert stops[1].name == ""
    assert stops[1].lat == pytest.approx(40.7081)


def test_load_tsplib_geo(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(GEO_INSTANCE)
    stops = load_stops(path)
    assert [s.id for s in stops] == ["1", "2", "3"]
    # 40 deg 45 min -> 40.75, -73 deg 59 min -> -73.9833...
    assert stops[0].lat == pytest.approx(40.75)
    assert stops[0].lng == pytest.approx(-73.0 - 59.0 / 60.0)
    assert stops[2].lat == pytest.approx(40.65)
    assert stops[0].name == "tiny:1"


def test_load_tsplib_rejects_planar_instances(tmp_path):
    path = tmp_path / "flat.tsp"
    path.write_text(EUC_INSTANCE)
    with pytest.raises(ValueError, match="GEO"):
        load_stops(path)


def test_load_unknown_suffix(tmp_path):
    path = tmp_path / "stops.txt"
    path.write_text("")
    with pytest.raises(ValueError, match="Unsupported"):
        load_stops(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_stops(tmp_path / "nope.json")


def test_validate_stops_accepts_examples(nyc_stops):
    assert validate_stops(nyc_stops) == nyc_stops


@pytest.mark.parametrize(
    "stops,message",
    [
        ([Stop(id="a", lat=0, lng=0), Stop(id="a", lat=1, lng=1)], "Duplicate"),
        ([Stop(id="a", lat=91, lng=0)], "latitude"),
        ([Stop(id="a", lat=0, lng=-180.5)], "longitude"),
    ],
)
def test_validate_stops_rejects(stops, message):
    with pytest.raises(ValueError, match=message):
        validate_stops(stops)


def test_example_stops():
    stops = example_stops()
    assert len(stops) == 5
    assert stops[0].name == "Post Office"
    assert len({s.id for s in stops}) == 5


def test_random_stops_within_bbox_and_reproducible():
    south, west, north, east = NYC_BBOX
    stops = random_stops(50, rng=random.Random(1))
    assert stops == random_stops(50, rng=random.Random(1))
    assert len({s.id for s in stops}) == 50
    for s in stops:
        assert south <= s.lat <= north
        assert west <= s.lng <= east


def test_load_json_null_coordinate(tmp_path):
    path = tmp_path / "stops.json"
    path.write_text(json.dumps([{"id": "1", "lat": None, "lng": 1.0}]))
    with pytest.raises(ValueError, match="malformed"):
        load_stops(path)


def test_load_json_rejects_non_list_payload(tmp_path):
    path = tmp_path / "stops.json"
    path.write_text(json.dumps("40.7,-73.9"))
    with pytest.raises(ValueError, match="list of stops"):
        load_stops(path)
    path.write_text(json.dumps({"stops": {"id": "1", "lat": 1.0, "lng": 2.0}}))
    with pytest.raises(ValueError, match="list of stops"):
        load_stops(path)


def test_load_csv_short_row(tmp_path):
    path = tmp_path / "stops.csv"
    path.write_text("id,lat,lng\n1,40.75,-73.99\n2,40.8\n")
    with pytest.raises(ValueError, match="malformed"):
        load_stops(path)


def test_load_csv_non_numeric_coordinate(tmp_path):
    path = tmp_path / "stops.csv"
    path.write_text("id,lat,lng\n1,north,-73.99\n")
    with pytest.raises(ValueError, match="malformed"):
        load_stops(path)
