"""
End-Pose Resolver

Target pose of the vehicle inside the parking spot, in the rotated frame.

x is the middle of the spot opening. y sits a quarter or three quarters
of the way between the spot's top and bottom edges, looked up from
(orientation, parking direction). The fractions are tuned by hand, not
derived from vehicle dimensions.
"""

import math
from typing import Optional

from ..geometry import Vec2d, normalize_angle
from ..logging_utils import RoiLogger
from .roi_data import EndPose, RoiKeyPoints
from .roi_types import ParkingDirection, SpotOrientation


# (anchor corner, fraction of the way toward the other corner)
END_POSE_Y_TABLE: dict[tuple[SpotOrientation, ParkingDirection], tuple[str, float]] = {
    (SpotOrientation.FACING_UP, ParkingDirection.INWARD): ("left_top", 0.25),
    (SpotOrientation.FACING_UP, ParkingDirection.OUTWARD): ("left_top", 0.75),
    (SpotOrientation.FACING_DOWN, ParkingDirection.INWARD): ("left_down", 0.75),
    (SpotOrientation.FACING_DOWN, ParkingDirection.OUTWARD): ("left_down", 0.25),
}


def spot_heading(points: RoiKeyPoints) -> float:
    """Heading from the spot opening toward its back, left_top -> left_down."""
    return (points.left_down - points.left_top).angle()


def _end_y(points: RoiKeyPoints, orientation: SpotOrientation,
           direction: ParkingDirection) -> float:
    anchor_name, fraction = END_POSE_Y_TABLE[(orientation, direction)]
    anchor: Vec2d = getattr(points, anchor_name)
    other = points.left_down if anchor_name == "left_top" else points.left_top
    return anchor.y + fraction * (other.y - anchor.y)


def resolve_end_pose(points: RoiKeyPoints, direction: ParkingDirection) -> EndPose:
    """
    Compute the end pose from rotated key points.

    Args:
        points: Key points in the rotated frame
        direction: Inward (nose-in) or outward (nose-out) parking

    Returns:
        EndPose with zero velocity
    """
    heading = spot_heading(points)
    orientation = SpotOrientation.from_heading(heading)

    x = (points.left_top.x + points.right_top.x) / 2
    y = _end_y(points, orientation, direction)

    if direction == ParkingDirection.INWARD:
        final_heading = heading
    else:
        final_heading = normalize_angle(heading + math.pi)

    return EndPose(x=x, y=y, heading=final_heading, velocity=0.0)


class EndPoseResolver:
    """Logs and resolves end poses for an ROI query."""

    MODULE_NAME = "EndPoseResolver"

    def __init__(self, logger: Optional[RoiLogger] = None):
        self.logger = logger or RoiLogger(self.MODULE_NAME)

    def resolve(self, points: RoiKeyPoints, parking_inwards: bool) -> EndPose:
        direction = ParkingDirection.from_flag(parking_inwards)
        pose = resolve_end_pose(points, direction)
        self.logger.log_output("end pose", direction=direction.value, **pose.to_dict())
        return pose
