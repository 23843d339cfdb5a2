"""
Parking map tests

Validates:
    - Manifest loading (YAML and dict)
    - Lane/spot resolution and every NotFound condition
    - Malformed manifests are rejected without partial registration
"""

import json

import pytest

from openspace_roi.logging_utils import RoiLogger
from openspace_roi.parking_map import Lane, ParkingMap
from openspace_roi.roi import MapResolutionError, ParkingSpot

from conftest import DEMO_MAP


def _map(**kwargs):
    return ParkingMap(RoiLogger("ParkingMapTest", console_output=False), **kwargs)


def _loaded_map():
    parking_map = _map()
    assert parking_map.load_from_manifest(DEMO_MAP), "Demo map failed to load"
    return parking_map


def test_demo_manifest_loads() -> None:
    parking_map = _loaded_map()
    assert parking_map.lane_ids == ["lane_east", "lane_service"]
    assert parking_map.parking_space_ids == ["spot_north", "spot_south"]

    lane = parking_map.get_lane("lane_east")
    assert lane.path.length == pytest.approx(80.0)
    assert lane.parking_space_ids == frozenset({"spot_south", "spot_north"})


def test_resolve_returns_spot_and_path() -> None:
    spot, path = _loaded_map().resolve("lane_east", "spot_south")
    assert isinstance(spot, ParkingSpot)
    assert spot.left_top.to_tuple() == (0.0, 0.0)
    assert path.get_road_left_width(10.0) == pytest.approx(3.5)


@pytest.mark.parametrize("lane_id,parking_id", [
    ("lane_missing", "spot_south"),   # unknown lane
    ("lane_service", "spot_south"),   # lane without overlaps
    ("lane_east", "spot_missing"),    # unknown spot
])
def test_resolve_not_found(lane_id, parking_id) -> None:
    with pytest.raises(MapResolutionError):
        _loaded_map().resolve(lane_id, parking_id)


def test_resolve_spot_not_on_lane() -> None:
    """A known spot that the lane does not overlap is not resolvable."""
    parking_map = _loaded_map()
    parking_map.register_parking_space(
        ParkingSpot.from_dict({
            "spot_id": "spot_far",
            "polygon": [[0, 50], [2, 50], [2, 45], [0, 45]],
        })
    )
    with pytest.raises(MapResolutionError):
        parking_map.resolve("lane_east", "spot_far")


def test_missing_manifest_returns_false(tmp_path) -> None:
    parking_map = _map()
    assert not parking_map.load_from_manifest(tmp_path / "nope.yaml")
    assert parking_map.logger.get_error_count() == 1


def test_json_manifest(tmp_path) -> None:
    manifest = {
        "lanes": [{
            "lane_id": "l1",
            "centerline": [[0, 0], [20, 0]],
            "left_width": [3.0, 4.0],
            "right_width": 3.0,
            "parking_spaces": ["s1"],
        }],
        "parking_spaces": [{
            "spot_id": "s1",
            "polygon": [[5, -5], [7.5, -5], [7.5, -1], [5, -1]],
        }],
    }
    path = tmp_path / "map.json"
    path.write_text(json.dumps(manifest))

    parking_map = _map(max_lateral_distance=2.0)
    assert parking_map.load_from_manifest(path)
    lane = parking_map.get_lane("l1")
    assert lane.path.max_lateral_distance == 2.0
    assert lane.path.get_road_left_width(10.0) == pytest.approx(3.5)


def test_malformed_manifest_registers_nothing() -> None:
    """A 3-corner spot rejects the whole manifest."""
    parking_map = _map()
    ok = parking_map.load_from_dict({
        "lanes": [{"lane_id": "l1", "centerline": [[0, 0], [10, 0]]}],
        "parking_spaces": [{"spot_id": "bad", "polygon": [[0, 0], [1, 0], [1, 1]]}],
    })
    assert not ok
    assert parking_map.lane_ids == []
    assert parking_map.parking_space_ids == []


def test_duplicate_ids_rejected() -> None:
    parking_map = _loaded_map()
    lane = parking_map.get_lane("lane_east")
    assert not parking_map.register_lane(lane)
    assert not parking_map.register_parking_space(parking_map.get_parking_space("spot_south"))


def test_lane_round_trip() -> None:
    lane = _loaded_map().get_lane("lane_east")
    again = Lane.from_dict(lane.to_dict())
    assert again.lane_id == lane.lane_id
    assert again.parking_space_ids == lane.parking_space_ids
    assert again.path.length == pytest.approx(lane.path.length)


def test_non_convex_spot_rejected() -> None:
    with pytest.raises(ValueError):
        ParkingSpot.from_dict({
            "spot_id": "dart",
            "polygon": [[0, 0], [2, 1], [4, 0], [2, 3]],
        })


def test_non_mapping_manifest_rejected(tmp_path) -> None:
    """A YAML list at the top level is reported, not raised."""
    path = tmp_path / "list.yaml"
    path.write_text("- lane_id: a\n")

    parking_map = _map()
    assert not parking_map.load_from_manifest(path)
    assert parking_map.lane_ids == []
    assert parking_map.logger.get_error_count() == 1


def test_duplicate_ids_in_manifest_rejected() -> None:
    """Repeated spot IDs fail the whole load instead of keeping the first."""
    spot = {"spot_id": "s", "polygon": [[0, -5], [2.5, -5], [2.5, 0], [0, 0]]}
    parking_map = _map()
    ok = parking_map.load_from_dict({
        "lanes": [{"lane_id": "l1", "centerline": [[0, 1], [20, 1]], "parking_spaces": ["s"]}],
        "parking_spaces": [spot, dict(spot, polygon=[[5, -5], [7.5, -5], [7.5, 0], [5, 0]])],
    })
    assert not ok
    assert parking_map.lane_ids == []
    assert parking_map.parking_space_ids == []


def test_manifest_ids_clashing_with_registry_rejected() -> None:
    parking_map = _loaded_map()
    ok = parking_map.load_from_dict({
        "lanes": [{"lane_id": "lane_new", "centerline": [[0, 0], [10, 0]]}],
        "parking_spaces": [{
            "spot_id": "spot_south",
            "polygon": [[0, 20], [2, 20], [2, 25], [0, 25]],
        }],
    })
    assert not ok
    assert "lane_new" not in parking_map.lane_ids
    assert parking_map.get_parking_space("spot_south").left_top.to_tuple() == (0.0, 0.0)
