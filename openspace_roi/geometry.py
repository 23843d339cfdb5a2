#==============================================================================
# OpenSpaceROI - Planar Geometry
#==============================================================================
# File: geometry.py
# Description: 2D vectors, angle helpers and polygon predicates
# Date: October 2026
#==============================================================================

import math
from dataclasses import dataclass
from typing import Sequence


MATH_EPSILON = 1e-10


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians to [-pi, pi)."""
    a = math.fmod(angle + math.pi, 2.0 * math.pi)
    if a < 0.0:
        a += 2.0 * math.pi
    return a - math.pi


@dataclass(frozen=True)
class Vec2d:
    """Immutable 2D vector."""
    x: float
    y: float
    
    def __add__(self, other: "Vec2d") -> "Vec2d":
        return Vec2d(self.x + other.x, self.y + other.y)
    
    def __sub__(self, other: "Vec2d") -> "Vec2d":
        return Vec2d(self.x - other.x, self.y - other.y)
    
    def __mul__(self, factor: float) -> "Vec2d":
        return Vec2d(self.x * factor, self.y * factor)
    
    def __neg__(self) -> "Vec2d":
        return Vec2d(-self.x, -self.y)
    
    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vec2d":
        return cls(length * math.cos(angle), length * math.sin(angle))
    
    @classmethod
    def from_sequence(cls, data: Sequence[float]) -> "Vec2d":
        if len(data) != 2:
            raise ValueError(f"Expected an (x, y) pair, got {list(data)}")
        return cls(float(data[0]), float(data[1]))
    
    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}
    
    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)
    
    def length(self) -> float:
        return math.hypot(self.x, self.y)
    
    def angle(self) -> float:
        """Heading of the vector, atan2(y, x)."""
        return math.atan2(self.y, self.x)
    
    def dot(self, other: "Vec2d") -> float:
        return self.x * other.x + self.y * other.y
    
    def cross(self, other: "Vec2d") -> float:
        return self.x * other.y - self.y * other.x
    
    def distance_to(self, other: "Vec2d") -> float:
        return (self - other).length()
    
    def rotate(self, angle: float) -> "Vec2d":
        """Rotate counter-clockwise about the origin."""
        c, s = math.cos(angle), math.sin(angle)
        return Vec2d(self.x * c - self.y * s, self.x * s + self.y * c)
    
    def is_close(self, other: "Vec2d", tol: float = 1e-9) -> bool:
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol


# ========================================
# POLYGON PREDICATES
# ========================================

def _orientation(a: Vec2d, b: Vec2d, c: Vec2d) -> float:
    return (b - a).cross(c - a)


def _on_segment(p: Vec2d, a: Vec2d, b: Vec2d, tol: float = 1e-9) -> bool:
    if abs(_orientation(a, b, p)) > tol * max(1.0, (b - a).length()):
        return False
    return (
        min(a.x, b.x) - tol <= p.x <= max(a.x, b.x) + tol and
        min(a.y, b.y) - tol <= p.y <= max(a.y, b.y) + tol
    )


def _side(a: Vec2d, b: Vec2d, p: Vec2d, tol: float = 1e-9) -> int:
    """-1/0/+1 side of p relative to line a-b; within tol of the line is 0."""
    turn = _orientation(a, b, p)
    if abs(turn) <= tol * max(1.0, (b - a).length()):
        return 0
    return 1 if turn > 0 else -1


def segments_intersect(a1: Vec2d, a2: Vec2d, b1: Vec2d, b2: Vec2d) -> bool:
    """Check if closed segments a1-a2 and b1-b2 share at least one point."""
    d1 = _side(b1, b2, a1)
    d2 = _side(b1, b2, a2)
    d3 = _side(a1, a2, b1)
    d4 = _side(a1, a2, b2)

    if d1 * d2 < 0 and d3 * d4 < 0:
        return True
    
    return (
        _on_segment(a1, b1, b2) or _on_segment(a2, b1, b2) or
        _on_segment(b1, a1, a2) or _on_segment(b2, a1, a2)
    )


def point_in_polygon(point: Vec2d, vertices: Sequence[Vec2d],
                     include_boundary: bool = True) -> bool:
    """
    Ray-casting point-in-polygon test.
    
    Points lying on an edge count as inside only when include_boundary is set.
    """
    n = len(vertices)
    for i in range(n):
        if _on_segment(point, vertices[i], vertices[(i + 1) % n]):
            return include_boundary
    
    inside = False
    x, y = point.x, point.y
    j = n - 1
    for i in range(n):
        xi, yi = vertices[i].x, vertices[i].y
        xj, yj = vertices[j].x, vertices[j].y
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


def is_simple_polygon(vertices: Sequence[Vec2d]) -> bool:
    """
    Check that a closed polygon has no self-intersections.
    
    Adjacent edges may only share their common vertex; non-adjacent
    edges may not touch at all.
    """
    n = len(vertices)
    if n < 3:
        return False
    
    edges = [(vertices[i], vertices[(i + 1) % n]) for i in range(n)]
    for i in range(n):
        a1, a2 = edges[i]
        if a1.is_close(a2):
            return False
        for j in range(i + 1, n):
            b1, b2 = edges[j]
            adjacent = j == i + 1 or (i == 0 and j == n - 1)
            if adjacent:
                # Shared vertex only; reject edges folding back onto each other
                shared = a2 if j == i + 1 else a1
                other_a = a1 if j == i + 1 else a2
                other_b = b2 if j == i + 1 else b1
                if _on_segment(other_b, *edges[i]) and not other_b.is_close(shared):
                    return False
                if _on_segment(other_a, *edges[j]) and not other_a.is_close(shared):
                    return False
                continue
            if segments_intersect(a1, a2, b1, b2):
                return False
    return True


def is_convex_polygon(vertices: Sequence[Vec2d]) -> bool:
    """Check that vertices form a convex polygon in either winding order."""
    n = len(vertices)
    if n < 3:
        return False
    
    sign = 0
    for i in range(n):
        turn = _orientation(vertices[i], vertices[(i + 1) % n], vertices[(i + 2) % n])
        if abs(turn) <= MATH_EPSILON:
            continue
        current = 1 if turn > 0 else -1
        if sign == 0:
            sign = current
        elif current != sign:
            return False
    return sign != 0
