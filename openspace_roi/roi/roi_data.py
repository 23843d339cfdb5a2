"""
ROI Data Structures

Immutable data classes for the inputs and outputs of one ROI query.
Nothing here is mutated after construction.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Sequence

from ..geometry import Vec2d, is_convex_polygon, point_in_polygon
from .roi_types import SpotSide


@dataclass(frozen=True)
class ParkingSpot:
    """
    Four-corner parking spot polygon.
    
    Corners are ordered as seen with the spot opening upward:
    0 = left-down, 1 = right-down, 2 = right-top, 3 = left-top.
    The top corners are the ones next to the road.
    """
    spot_id: str
    corners: tuple[Vec2d, Vec2d, Vec2d, Vec2d]
    
    def __post_init__(self):
        object.__setattr__(self, "corners", tuple(self.corners))
        if len(self.corners) != 4:
            raise ValueError(
                f"Parking spot '{self.spot_id}' needs 4 corners, got {len(self.corners)}"
            )
        if not is_convex_polygon(self.corners):
            raise ValueError(f"Parking spot '{self.spot_id}' is not a convex polygon")
    
    @property
    def left_down(self) -> Vec2d:
        return self.corners[0]
    
    @property
    def right_down(self) -> Vec2d:
        return self.corners[1]
    
    @property
    def right_top(self) -> Vec2d:
        return self.corners[2]
    
    @property
    def left_top(self) -> Vec2d:
        return self.corners[3]
    
    def contains_point(self, point: Vec2d, include_boundary: bool = True) -> bool:
        return point_in_polygon(point, self.corners, include_boundary)
    
    def to_dict(self) -> dict:
        return {
            "spot_id": self.spot_id,
            "polygon": [list(c.to_tuple()) for c in self.corners],
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "ParkingSpot":
        return cls(
            spot_id=str(data["spot_id"]),
            corners=tuple(Vec2d.from_sequence(p) for p in data["polygon"]),
        )


@dataclass(frozen=True)
class LocalFrame:
    """
    Frame the ROI is expressed in: translated to origin, rotated by rotation.
    
    The identity frame is the map frame.
    """
    origin: Vec2d
    rotation: float
    
    @classmethod
    def identity(cls) -> "LocalFrame":
        return cls(Vec2d(0.0, 0.0), 0.0)
    
    def to_local(self, point: Vec2d) -> Vec2d:
        return (point - self.origin).rotate(-self.rotation)
    
    def to_map(self, point: Vec2d) -> Vec2d:
        return point.rotate(self.rotation) + self.origin
    
    def to_dict(self) -> dict:
        return {"origin": self.origin.to_dict(), "rotation": self.rotation}


@dataclass(frozen=True)
class RoiKeyPoints:
    """
    The points every ROI output is built from.
    
    start/end are the path stations longitudinal_range before and after
    the spot center. The *_left/*_right points sit at the full road width;
    the *_near points sit exactly |l| from the path on the spot's side.
    """
    left_top: Vec2d
    left_down: Vec2d
    right_top: Vec2d
    right_down: Vec2d
    start_left: Vec2d
    start_right: Vec2d
    end_left: Vec2d
    end_right: Vec2d
    start_near: Vec2d
    end_near: Vec2d
    
    def transformed(self, frame: LocalFrame) -> "RoiKeyPoints":
        """Express every point in the given frame."""
        return replace(self, **{
            f.name: frame.to_local(getattr(self, f.name)) for f in fields(self)
        })
    
    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name).to_dict() for f in fields(self)}


@dataclass(frozen=True)
class XYBoundary:
    """Axis-aligned extent of the ROI in the rotated frame."""
    x_min: float
    x_max: float
    y_min: float
    y_max: float
    
    @property
    def is_valid(self) -> bool:
        return self.x_min < self.x_max and self.y_min < self.y_max
    
    def contains_point(self, point: Vec2d, tol: float = 1e-9) -> bool:
        return (
            self.x_min - tol <= point.x <= self.x_max + tol and
            self.y_min - tol <= point.y <= self.y_max + tol
        )
    
    def to_list(self) -> list[float]:
        return [self.x_min, self.x_max, self.y_min, self.y_max]
    
    def to_dict(self) -> dict:
        return {
            "x_min": self.x_min,
            "x_max": self.x_max,
            "y_min": self.y_min,
            "y_max": self.y_max,
        }


@dataclass(frozen=True)
class BoundaryChains:
    """
    The four sides of the ROI polygon, each an ordered polyline.
    
    Concatenated left -> down -> right -> up they close the polygon;
    consecutive chains share their joining point.
    """
    left: tuple[Vec2d, ...]
    down: tuple[Vec2d, ...]
    right: tuple[Vec2d, ...]
    up: tuple[Vec2d, ...]
    
    NAMES = ("left", "down", "right", "up")
    
    def as_list(self) -> list[tuple[Vec2d, ...]]:
        return [self.left, self.down, self.right, self.up]
    
    def polygon(self) -> list[Vec2d]:
        """Vertices of the closed ROI polygon without repeated joints."""
        vertices: list[Vec2d] = []
        for chain in self.as_list():
            for point in chain:
                if not vertices or not vertices[-1].is_close(point):
                    vertices.append(point)
        if len(vertices) > 1 and vertices[0].is_close(vertices[-1]):
            vertices.pop()
        return vertices
    
    def point_count(self) -> int:
        return sum(len(chain) for chain in self.as_list())
    
    def to_dict(self) -> dict:
        return {
            name: [list(p.to_tuple()) for p in chain]
            for name, chain in zip(self.NAMES, self.as_list())
        }


@dataclass(frozen=True)
class BoundaryBox:
    """Oriented rectangle standing in for one boundary chain."""
    center: Vec2d
    heading: float
    length: float
    width: float
    
    def __post_init__(self):
        if self.length <= 0 or self.width <= 0:
            raise ValueError(
                f"Box dimensions must be positive: length={self.length}, width={self.width}"
            )
    
    def corners(self) -> list[Vec2d]:
        """Corners counter-clockwise from front-right."""
        half_length = Vec2d.from_angle(self.heading, self.length / 2)
        half_width = Vec2d(
            math.sin(self.heading) * self.width / 2,
            -math.cos(self.heading) * self.width / 2,
        )
        c = self.center
        return [
            c + half_length + half_width,
            c + half_length - half_width,
            c - half_length - half_width,
            c - half_length + half_width,
        ]
    
    def to_list(self) -> list[float]:
        """[center_x, center_y, length, width]"""
        return [self.center.x, self.center.y, self.length, self.width]
    
    def to_dict(self) -> dict:
        return {
            "center": self.center.to_dict(),
            "heading": self.heading,
            "length": self.length,
            "width": self.width,
            "corners": [list(p.to_tuple()) for p in self.corners()],
        }


@dataclass(frozen=True)
class EndPose:
    """Target pose inside the spot, in the rotated frame."""
    x: float
    y: float
    heading: float
    velocity: float = 0.0
    
    @property
    def position(self) -> Vec2d:
        return Vec2d(self.x, self.y)
    
    def to_list(self) -> list[float]:
        return [self.x, self.y, self.heading, self.velocity]
    
    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "heading": self.heading, "velocity": self.velocity}


@dataclass(frozen=True)
class OpenSpaceRoi:
    """Complete ROI geometry for one (lane, parking spot) query."""
    parking_spot: ParkingSpot
    frame: LocalFrame
    spot_side: SpotSide
    spot_heading: float
    xy_boundary: XYBoundary
    rotated_chains: BoundaryChains
    unrotated_chains: BoundaryChains
    boxes: tuple[BoundaryBox, BoundaryBox, BoundaryBox, BoundaryBox]
    end_pose: EndPose
    
    def to_map_frame(self, points: Sequence[Vec2d]) -> list[Vec2d]:
        """Map rotated-frame points back to absolute coordinates."""
        return [self.frame.to_map(p) for p in points]
    
    def to_dict(self) -> dict:
        return {
            "parking_spot": self.parking_spot.to_dict(),
            "frame": self.frame.to_dict(),
            "spot_side": self.spot_side.value,
            "spot_heading": self.spot_heading,
            "xy_boundary": self.xy_boundary.to_dict(),
            "rotated_boundary": self.rotated_chains.to_dict(),
            "unrotated_boundary": self.unrotated_chains.to_dict(),
            "boundary_boxes": {
                name: box.to_dict()
                for name, box in zip(BoundaryChains.NAMES, self.boxes)
            },
            "end_pose": self.end_pose.to_dict(),
        }
