"""
Geometry primitive tests

Vector arithmetic, angle wrapping and the polygon predicates the ROI
properties are checked with.
"""

import math

import pytest

from openspace_roi.geometry import (
    Vec2d,
    is_convex_polygon,
    is_simple_polygon,
    normalize_angle,
    point_in_polygon,
    segments_intersect,
)

SQUARE = [Vec2d(0, 0), Vec2d(2, 0), Vec2d(2, 2), Vec2d(0, 2)]


def test_vector_arithmetic() -> None:
    """Add, subtract, scale, cross and dot behave like plain 2D vectors."""
    a = Vec2d(1.0, 2.0)
    b = Vec2d(3.0, -1.0)
    assert a + b == Vec2d(4.0, 1.0)
    assert a - b == Vec2d(-2.0, 3.0)
    assert a * 2 == Vec2d(2.0, 4.0)
    assert -a == Vec2d(-1.0, -2.0)
    assert a.dot(b) == pytest.approx(1.0)
    assert a.cross(b) == pytest.approx(-7.0)
    assert Vec2d(3.0, 4.0).length() == pytest.approx(5.0)


def test_rotation_and_angle() -> None:
    """Rotation is counter-clockwise; angle is atan2(y, x)."""
    rotated = Vec2d(1.0, 0.0).rotate(math.pi / 2)
    assert rotated.is_close(Vec2d(0.0, 1.0)), f"Unexpected rotation {rotated}"
    assert Vec2d(0.0, -5.0).angle() == pytest.approx(-math.pi / 2)
    assert Vec2d.from_angle(math.pi, 2.0).is_close(Vec2d(-2.0, 0.0))


def test_from_sequence_rejects_bad_length() -> None:
    with pytest.raises(ValueError):
        Vec2d.from_sequence([1.0, 2.0, 3.0])


@pytest.mark.parametrize("angle,expected", [
    (0.0, 0.0),
    (math.pi / 2, math.pi / 2),
    (3 * math.pi / 2, -math.pi / 2),
    (-3 * math.pi / 2, math.pi / 2),
    (math.pi, -math.pi),
])
def test_normalize_angle(angle, expected) -> None:
    """Angles wrap into [-pi, pi)."""
    assert normalize_angle(angle) == pytest.approx(expected)


def test_point_in_polygon_boundary_handling() -> None:
    """Edge points are inside only when the boundary is included."""
    assert point_in_polygon(Vec2d(1, 1), SQUARE)
    assert point_in_polygon(Vec2d(2, 1), SQUARE, include_boundary=True)
    assert not point_in_polygon(Vec2d(2, 1), SQUARE, include_boundary=False)
    assert point_in_polygon(Vec2d(0, 0), SQUARE)
    assert not point_in_polygon(Vec2d(3, 1), SQUARE)


def test_segments_intersect() -> None:
    assert segments_intersect(Vec2d(0, 0), Vec2d(2, 2), Vec2d(0, 2), Vec2d(2, 0))
    assert segments_intersect(Vec2d(0, 0), Vec2d(2, 0), Vec2d(2, 0), Vec2d(3, 1))
    # Collinear but disjoint
    assert not segments_intersect(Vec2d(0, 0), Vec2d(1, 0), Vec2d(2, 0), Vec2d(3, 0))


def test_simple_polygon_detection() -> None:
    """A square is simple; a bow-tie and a folded-back polygon are not."""
    assert is_simple_polygon(SQUARE)
    bow_tie = [Vec2d(0, 0), Vec2d(2, 2), Vec2d(2, 0), Vec2d(0, 2)]
    assert not is_simple_polygon(bow_tie)
    folded = [Vec2d(0, 0), Vec2d(3, 0), Vec2d(1, 0), Vec2d(1, 2)]
    assert not is_simple_polygon(folded)
    assert not is_simple_polygon(SQUARE[:2])


def test_convexity() -> None:
    assert is_convex_polygon(SQUARE)
    assert is_convex_polygon(list(reversed(SQUARE)))
    dart = [Vec2d(0, 0), Vec2d(2, 1), Vec2d(4, 0), Vec2d(2, 3)]
    assert not is_convex_polygon(dart)
