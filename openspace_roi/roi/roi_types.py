"""
ROI Type Definitions

Closed enumerations for the case splits of the ROI computation and the
failure taxonomy. Every branch in the assembler and end-pose resolver
dispatches on one of these.
"""

from enum import Enum
from typing import Optional

from ..geometry import MATH_EPSILON


class SpotSide(Enum):
    """
    Side of the reference path the parking spot lies on.
    
    Decided by the sign of the left-top corner's lateral offset:
    - RIGHT: l < 0
    - LEFT: l >= 0
    """
    RIGHT = "right"
    LEFT = "left"
    
    @classmethod
    def from_lateral_offset(cls, l: float) -> "SpotSide":
        return cls.RIGHT if l < 0 else cls.LEFT


class SpotOrientation(Enum):
    """
    Direction the spot extends from its opening, in the rotated frame.
    
    FACING_UP: heading of left_top -> left_down is above MATH_EPSILON
    FACING_DOWN: anything else
    """
    FACING_UP = "facing_up"
    FACING_DOWN = "facing_down"
    
    @classmethod
    def from_heading(cls, heading: float) -> "SpotOrientation":
        return cls.FACING_UP if heading > MATH_EPSILON else cls.FACING_DOWN


class ParkingDirection(Enum):
    """
    INWARD: final heading matches the way the vehicle entered (nose-in)
    OUTWARD: final heading reversed (nose-out)
    """
    INWARD = "inward"
    OUTWARD = "outward"
    
    @classmethod
    def from_flag(cls, parking_inwards: bool) -> "ParkingDirection":
        return cls.INWARD if parking_inwards else cls.OUTWARD


class RoiFailure(Enum):
    """Reasons an ROI query produces no output."""
    PROJECTION_FAILURE = "projection_failure"
    MAP_RESOLUTION_FAILURE = "map_resolution_failure"
    DEGENERATE_BOUNDARY_COUNT = "degenerate_boundary_count"
    INVALID_XY_BOUNDARY = "invalid_xy_boundary"


class RoiError(RuntimeError):
    """Base error of the ROI computation."""
    failure: Optional[RoiFailure] = None
    suggested_fix = ""


class ProjectionError(RoiError):
    """A spot top corner cannot be projected onto the reference path."""
    failure = RoiFailure.PROJECTION_FAILURE
    suggested_fix = (
        "Check that the lane runs alongside the parking spot "
        "or raise max_lateral_distance"
    )


class MapResolutionError(RoiError, LookupError):
    """Lane or parking spot not found, or they do not overlap."""
    failure = RoiFailure.MAP_RESOLUTION_FAILURE
    suggested_fix = "Check lane_id/parking_id against the map manifest"


class DegenerateBoundaryError(RoiError):
    """Assembly did not produce exactly four boundary chains."""
    failure = RoiFailure.DEGENERATE_BOUNDARY_COUNT
    suggested_fix = "Inspect the parking spot polygon for duplicate corners"


class InvalidBoundaryError(RoiError):
    """The XY boundary is empty or inverted."""
    failure = RoiFailure.INVALID_XY_BOUNDARY
    suggested_fix = (
        "Shorten longitudinal_range so the path does not turn back "
        "within the ROI"
    )
