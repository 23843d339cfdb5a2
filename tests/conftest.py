"""
Shared scenarios for the ROI test suite.

Reference layout (map frame):
- lane_east runs along +x at y = 1, road width 3.5 on both sides
- spot_south: x in [0, 2.5], y in [-5, 0], right of the lane (l = -1)
- spot_north: the mirror image of spot_south across y = 1 (l = +1)
"""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from openspace_roi.geometry import Vec2d
from openspace_roi.reference_path import ReferencePath
from openspace_roi.roi import ParkingSpot

PROJECT_ROOT = Path(__file__).parent.parent
DEMO_MAP = PROJECT_ROOT / "configs" / "maps" / "demo_lot.yaml"
ROI_CONFIG = PROJECT_ROOT / "configs" / "open_space_roi.yaml"


def make_spot(spot_id, corners):
    return ParkingSpot(spot_id, tuple(Vec2d(x, y) for x, y in corners))


def make_east_path(max_lateral_distance=None):
    return ReferencePath(
        [(-40.0, 1.0), (0.0, 1.0), (40.0, 1.0)],
        3.5, 3.5,
        max_lateral_distance=max_lateral_distance,
    )


def transform_spot(spot, angle, offset):
    """Rigidly rotate a spot about the map origin, then shift it."""
    return ParkingSpot(spot.spot_id, tuple(c.rotate(angle) + offset for c in spot.corners))


def transform_path(path, angle, offset, left=3.5, right=3.5):
    return ReferencePath([p.rotate(angle) + offset for p in path.points], left, right)


@pytest.fixture
def east_path():
    return make_east_path()


@pytest.fixture
def spot_south():
    return make_spot("spot_south", [(0.0, -5.0), (2.5, -5.0), (2.5, 0.0), (0.0, 0.0)])


@pytest.fixture
def spot_north():
    return make_spot("spot_north", [(2.5, 7.0), (0.0, 7.0), (0.0, 2.0), (2.5, 2.0)])


def assert_points_close(actual, expected, tol=1e-9, label=""):
    assert len(actual) == len(expected), \
        f"{label}: expected {len(expected)} points, got {len(actual)}"
    for a, e in zip(actual, expected):
        e = e if isinstance(e, Vec2d) else Vec2d(*e)
        assert a.is_close(e, tol), f"{label}: {a.to_tuple()} != {e.to_tuple()}"


def angle_close(a, b, tol=1e-9):
    return abs(math.remainder(a - b, 2 * math.pi)) <= tol
