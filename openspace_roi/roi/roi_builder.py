"""
Open-Space ROI Builder

Runs one ROI query end to end:

    FrameBuilder -> BoundaryAssembler -> build_boundary_boxes
                 +-> EndPoseResolver

FAIL-FAST:
Any failure aborts the query. The caller receives an RoiResult with
success=False, the failure kind, the reason and a suggested fix, and no
ROI geometry at all.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import RoiConfig
from ..logging_utils import RoiLogger
from ..reference_path import ReferencePath
from .boundary_assembler import BoundaryAssembler
from .boundary_boxer import build_boundary_boxes
from .end_pose import EndPoseResolver, spot_heading
from .frame_builder import FrameBuilder
from .roi_data import LocalFrame, OpenSpaceRoi, ParkingSpot
from .roi_types import RoiError, RoiFailure, SpotOrientation


@dataclass(frozen=True)
class RoiResult:
    """Outcome of an ROI query. roi is set only on success."""
    success: bool
    roi: Optional[OpenSpaceRoi] = None
    failure: Optional[RoiFailure] = None
    failure_reason: Optional[str] = None
    suggested_fix: Optional[str] = None

    @classmethod
    def from_error(cls, error: RoiError) -> "RoiResult":
        return cls(
            success=False,
            failure=error.failure,
            failure_reason=str(error),
            suggested_fix=error.suggested_fix or None,
        )

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "roi": self.roi.to_dict() if self.roi else None,
            "failure": self.failure.value if self.failure else None,
            "failure_reason": self.failure_reason,
            "suggested_fix": self.suggested_fix,
        }


class OpenSpaceRoiBuilder:
    """
    Computes open-space parking ROIs.

    Holds no per-query state; one builder can serve any number of queries.

    Usage:
        builder = OpenSpaceRoiBuilder(RoiConfig(longitudinal_range=10.0))
        result = builder.build(spot, path)
        if result.success:
            boxes = result.roi.boxes
    """

    MODULE_NAME = "OpenSpaceRoiBuilder"

    def __init__(self, config: Optional[RoiConfig] = None,
                 logger: Optional[RoiLogger] = None):
        self.config = config or RoiConfig()
        self.logger = logger or RoiLogger(self.MODULE_NAME)
        self.frame_builder = FrameBuilder(self.logger)
        self.assembler = BoundaryAssembler(self.logger)
        self.end_pose_resolver = EndPoseResolver(self.logger)
        self.logger.log_init(**self.config.to_dict())

    def compute(self, spot: ParkingSpot, path: ReferencePath,
                config: Optional[RoiConfig] = None) -> OpenSpaceRoi:
        """
        Compute the ROI, raising on failure.

        Args:
            spot: Target parking spot
            path: Reference path the spot is reached from
            config: Overrides the builder's config for this call

        Raises:
            RoiError: ProjectionError, DegenerateBoundaryError or InvalidBoundaryError
        """
        config = config or self.config

        roi_frame = self.frame_builder.build(
            spot, path, config.longitudinal_range, config.max_lateral_distance
        )
        rotated_points = roi_frame.rotated_points

        rotated_chains = self.assembler.assemble(roi_frame, roi_frame.frame)
        unrotated_chains = self.assembler.assemble(roi_frame, LocalFrame.identity())
        xy_boundary = self.assembler.xy_boundary(roi_frame)

        heading = spot_heading(rotated_points)
        boxes = build_boundary_boxes(rotated_chains, SpotOrientation.from_heading(heading))
        end_pose = self.end_pose_resolver.resolve(rotated_points, config.parking_inwards)

        return OpenSpaceRoi(
            parking_spot=spot,
            frame=roi_frame.frame,
            spot_side=roi_frame.spot_side,
            spot_heading=heading,
            xy_boundary=xy_boundary,
            rotated_chains=rotated_chains,
            unrotated_chains=unrotated_chains,
            boxes=boxes,
            end_pose=end_pose,
        )

    def build(self, spot: ParkingSpot, path: ReferencePath,
              config: Optional[RoiConfig] = None) -> RoiResult:
        """Compute the ROI and report the outcome as an RoiResult."""
        try:
            roi = self.compute(spot, path, config)
        except RoiError as e:
            result = RoiResult.from_error(e)
            self.logger.error(
                "ROI computation failed",
                reason=result.failure_reason,
                suggested_fix=result.suggested_fix,
                failure=e.failure.value if e.failure else None,
                spot_id=spot.spot_id,
            )
            return result

        self.logger.info(
            "ROI computed",
            spot_id=spot.spot_id,
            spot_side=roi.spot_side.value,
            xy_boundary=roi.xy_boundary.to_list(),
        )
        return RoiResult(success=True, roi=roi)

    def build_for(self, parking_map, lane_id: str, parking_id: str,
                  config: Optional[RoiConfig] = None) -> RoiResult:
        """
        Resolve lane and spot from a ParkingMap, then build the ROI.

        Map lookups happen before any geometry is computed.
        """
        try:
            spot, path = parking_map.resolve(lane_id, parking_id)
        except RoiError as e:
            result = RoiResult.from_error(e)
            self.logger.error(
                "Map resolution failed",
                reason=result.failure_reason,
                suggested_fix=result.suggested_fix,
                lane_id=lane_id,
                parking_id=parking_id,
            )
            return result
        return self.build(spot, path, config)
