"""
Reference Path

Arc-length parameterized lane centerline with road widths.

A path is a polyline. Station s runs from 0 at the first point to
``length`` at the last; lateral offset l is positive to the left of the
direction of travel.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .geometry import Vec2d


@dataclass(frozen=True)
class PathPoint:
    """Position and heading on the path."""
    x: float
    y: float
    heading: float
    
    @property
    def position(self) -> Vec2d:
        return Vec2d(self.x, self.y)
    
    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "heading": self.heading}


class ReferencePath:
    """
    Polyline reference path with per-point left/right road widths.
    
    Widths may be a single value or one value per point; they are
    interpolated linearly in s. Queries outside [0, length] are clamped
    to the path ends.
    """
    
    def __init__(
        self,
        points: Sequence[Sequence[float]] | Sequence[Vec2d],
        left_widths: float | Sequence[float],
        right_widths: float | Sequence[float],
        max_lateral_distance: Optional[float] = None,
    ):
        xy = np.array(
            [p.to_tuple() if isinstance(p, Vec2d) else tuple(p) for p in points],
            dtype=float,
        )
        if xy.ndim != 2 or xy.shape[0] < 2 or xy.shape[1] != 2:
            raise ValueError("Reference path needs at least 2 (x, y) points")
        
        deltas = np.diff(xy, axis=0)
        seg_lengths = np.hypot(deltas[:, 0], deltas[:, 1])
        if np.any(seg_lengths <= 0.0):
            raise ValueError("Reference path contains repeated consecutive points")
        
        self._xy = xy
        self._seg_lengths = seg_lengths
        self._unit = deltas / seg_lengths[:, None]
        self._headings = np.arctan2(self._unit[:, 1], self._unit[:, 0])
        self._accumulated_s = np.concatenate(([0.0], np.cumsum(seg_lengths)))
        self._left_widths = self._broadcast_widths(left_widths, "left_widths")
        self._right_widths = self._broadcast_widths(right_widths, "right_widths")
        self.max_lateral_distance = max_lateral_distance
    
    def _broadcast_widths(self, widths: float | Sequence[float], name: str) -> np.ndarray:
        values = np.broadcast_to(np.asarray(widths, dtype=float), (len(self._xy),))
        if np.any(values < 0.0):
            raise ValueError(f"{name} must be non-negative")
        return values.copy()
    
    @property
    def length(self) -> float:
        return float(self._accumulated_s[-1])
    
    @property
    def num_points(self) -> int:
        return len(self._xy)
    
    @property
    def points(self) -> list[Vec2d]:
        return [Vec2d(float(x), float(y)) for x, y in self._xy]
    
    def _segment_index(self, s: float) -> int:
        index = int(np.searchsorted(self._accumulated_s, s, side="right")) - 1
        return min(max(index, 0), len(self._seg_lengths) - 1)
    
    def get_smooth_point(self, s: float) -> PathPoint:
        """Interpolated position at station s, with the heading of its segment."""
        s = min(max(s, 0.0), self.length)
        i = self._segment_index(s)
        offset = s - self._accumulated_s[i]
        x, y = self._xy[i] + self._unit[i] * offset
        return PathPoint(float(x), float(y), float(self._headings[i]))
    
    def get_road_left_width(self, s: float) -> float:
        return float(np.interp(s, self._accumulated_s, self._left_widths))
    
    def get_road_right_width(self, s: float) -> float:
        return float(np.interp(s, self._accumulated_s, self._right_widths))
    
    def get_projection(
        self,
        point: Vec2d,
        max_lateral_distance: Optional[float] = None,
    ) -> Optional[tuple[float, float]]:
        """
        Project a point onto the path.
        
        Args:
            point: Point in map coordinates
            max_lateral_distance: Overrides the path's own reach when set
        
        Returns:
            (s, l) of the nearest path location, or None when the foot
            point falls beyond either end of the path or the point is
            farther than max_lateral_distance from it.
        """
        q = np.array([point.x, point.y], dtype=float)
        rel = q - self._xy[:-1]
        along = np.einsum("ij,ij->i", rel, self._unit)
        clamped = np.clip(along, 0.0, self._seg_lengths)
        feet = self._xy[:-1] + self._unit * clamped[:, None]
        distances = np.hypot(*(q - feet).T)
        i = int(np.argmin(distances))
        
        # First and last segments extend past the path ends
        proj = float(along[i])
        if i > 0:
            proj = max(proj, 0.0)
        if i < len(self._seg_lengths) - 1:
            proj = min(proj, float(self._seg_lengths[i]))
        
        s = float(self._accumulated_s[i]) + proj
        u = self._unit[i]
        l = float(u[0] * rel[i, 1] - u[1] * rel[i, 0])
        
        tol = 1e-9
        if s < -tol or s > self.length + tol:
            return None
        reach = max_lateral_distance if max_lateral_distance is not None else self.max_lateral_distance
        if reach is not None and abs(l) > reach:
            return None
        return s, l
    
    def heading_at(self, s: float) -> float:
        return self.get_smooth_point(s).heading
    
    def to_dict(self) -> dict:
        return {
            "centerline": [[float(x), float(y)] for x, y in self._xy],
            "left_width": self._left_widths.tolist(),
            "right_width": self._right_widths.tolist(),
            "max_lateral_distance": self.max_lateral_distance,
        }
    
    @classmethod
    def straight(
        cls,
        start: Vec2d,
        heading: float,
        length: float,
        left_width: float,
        right_width: float,
        max_lateral_distance: Optional[float] = None,
    ) -> "ReferencePath":
        """Two-point path from start along heading."""
        end = start + Vec2d(math.cos(heading), math.sin(heading)) * length
        return cls([start, end], left_width, right_width, max_lateral_distance)
