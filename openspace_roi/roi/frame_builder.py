"""
ROI Frame Builder

Projects the parking spot onto the reference path, picks the road
stretch around it, and sets up the local frame the ROI is expressed in.

Local frame:
- origin: the spot's left-top corner (map coordinates)
- rotation: path heading at the spot's longitudinal center

Road-edge points are the path stations offset by the road width along
heading +/- pi/2 (left = +pi/2, right = -pi/2).
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..geometry import Vec2d
from ..logging_utils import RoiLogger
from ..reference_path import PathPoint, ReferencePath
from .roi_data import LocalFrame, ParkingSpot, RoiKeyPoints
from .roi_types import ProjectionError, SpotSide


@dataclass(frozen=True)
class RoiFrame:
    """Frame plus key points for one spot/path pair."""
    frame: LocalFrame
    map_points: RoiKeyPoints
    spot_side: SpotSide
    left_top_s: float
    left_top_l: float
    right_top_s: float
    right_top_l: float
    center_s: float
    start_s: float
    end_s: float

    @property
    def rotated_points(self) -> RoiKeyPoints:
        return self.map_points.transformed(self.frame)

    def to_dict(self) -> dict:
        return {
            "frame": self.frame.to_dict(),
            "spot_side": self.spot_side.value,
            "left_top_sl": [self.left_top_s, self.left_top_l],
            "right_top_sl": [self.right_top_s, self.right_top_l],
            "center_s": self.center_s,
            "start_s": self.start_s,
            "end_s": self.end_s,
        }


def edge_point(station: PathPoint, offset: float, side: SpotSide) -> Vec2d:
    """Point offset from a path station perpendicular to its heading."""
    normal = station.heading + (math.pi / 2 if side == SpotSide.LEFT else -math.pi / 2)
    return station.position + Vec2d.from_angle(normal, offset)


class FrameBuilder:
    """
    Builds the local frame and key points of an ROI query.

    Usage:
        builder = FrameBuilder()
        roi_frame = builder.build(spot, path, longitudinal_range=10.0)
    """

    MODULE_NAME = "FrameBuilder"

    def __init__(self, logger: Optional[RoiLogger] = None):
        self.logger = logger or RoiLogger(self.MODULE_NAME)

    def _project(self, path: ReferencePath, spot: ParkingSpot, corner_name: str,
                 max_lateral_distance: Optional[float]) -> tuple[float, float]:
        corner = getattr(spot, corner_name)
        projection = path.get_projection(corner, max_lateral_distance)
        if projection is None:
            self.logger.error(
                "Failed to project parking spot corner onto reference path",
                reason=f"{corner_name} {corner.to_tuple()} has no valid projection",
                suggested_fix=ProjectionError.suggested_fix,
                spot_id=spot.spot_id,
            )
            raise ProjectionError(
                f"Parking spot '{spot.spot_id}' {corner_name} corner "
                f"{corner.to_tuple()} does not project onto the reference path"
            )
        return projection

    def build(self, spot: ParkingSpot, path: ReferencePath,
              longitudinal_range: float,
              max_lateral_distance: Optional[float] = None) -> RoiFrame:
        """
        Compute the local frame and the ROI key points.

        Args:
            spot: Target parking spot
            path: Reference path next to the spot
            longitudinal_range: Road kept on each side of the spot center (meters)
            max_lateral_distance: Projection reach, overriding the path's own

        Returns:
            RoiFrame with key points in map coordinates

        Raises:
            ProjectionError: If either top corner does not project onto the path
        """
        self.logger.log_input("parking spot", spot_id=spot.spot_id,
                              longitudinal_range=longitudinal_range)

        left_top_s, left_top_l = self._project(path, spot, "left_top", max_lateral_distance)
        right_top_s, right_top_l = self._project(path, spot, "right_top", max_lateral_distance)

        center_s = (left_top_s + right_top_s) / 2
        start_s = center_s - longitudinal_range
        end_s = center_s + longitudinal_range
        if start_s < 0 or end_s > path.length:
            self.logger.warning(
                "ROI stretch exceeds reference path, clamping to path ends",
                start_s=start_s, end_s=end_s, path_length=path.length,
            )

        start_point = path.get_smooth_point(start_s)
        end_point = path.get_smooth_point(end_s)
        spot_side = SpotSide.from_lateral_offset(left_top_l)
        near_offset = abs(left_top_l)

        map_points = RoiKeyPoints(
            left_top=spot.left_top,
            left_down=spot.left_down,
            right_top=spot.right_top,
            right_down=spot.right_down,
            start_left=edge_point(start_point, path.get_road_left_width(start_s), SpotSide.LEFT),
            start_right=edge_point(start_point, path.get_road_right_width(start_s), SpotSide.RIGHT),
            end_left=edge_point(end_point, path.get_road_left_width(end_s), SpotSide.LEFT),
            end_right=edge_point(end_point, path.get_road_right_width(end_s), SpotSide.RIGHT),
            start_near=edge_point(start_point, near_offset, spot_side),
            end_near=edge_point(end_point, near_offset, spot_side),
        )

        frame = LocalFrame(
            origin=spot.left_top,
            rotation=path.get_smooth_point(center_s).heading,
        )

        roi_frame = RoiFrame(
            frame=frame,
            map_points=map_points,
            spot_side=spot_side,
            left_top_s=left_top_s,
            left_top_l=left_top_l,
            right_top_s=right_top_s,
            right_top_l=right_top_l,
            center_s=center_s,
            start_s=start_s,
            end_s=end_s,
        )
        self.logger.log_output("local frame", **roi_frame.to_dict())
        return roi_frame
