"""
Open-Space Parking ROI

Region-of-interest geometry for parking into a spot from an adjacent lane:
the bounding box of the maneuvering area, the four boundary chains around
the spot, their box approximations, and the end pose inside the spot.

Usage:
    from openspace_roi.roi import OpenSpaceRoiBuilder
    
    builder = OpenSpaceRoiBuilder(RoiConfig(longitudinal_range=10.0))
    result = builder.build(spot, path)
    if not result.success:
        print(result.failure, result.failure_reason)
"""

from .roi_types import (
    SpotSide,
    SpotOrientation,
    ParkingDirection,
    RoiFailure,
    RoiError,
    ProjectionError,
    MapResolutionError,
    DegenerateBoundaryError,
    InvalidBoundaryError,
)
from .roi_data import (
    ParkingSpot,
    LocalFrame,
    RoiKeyPoints,
    XYBoundary,
    BoundaryChains,
    BoundaryBox,
    EndPose,
    OpenSpaceRoi,
)
from .frame_builder import FrameBuilder, RoiFrame
from .boundary_assembler import BoundaryAssembler, assemble_chains, compute_xy_boundary
from .boundary_boxer import build_boundary_boxes
from .end_pose import EndPoseResolver, resolve_end_pose, spot_heading
from .roi_builder import OpenSpaceRoiBuilder, RoiResult

__all__ = [
    # Types
    "SpotSide",
    "SpotOrientation",
    "ParkingDirection",
    "RoiFailure",
    # Errors
    "RoiError",
    "ProjectionError",
    "MapResolutionError",
    "DegenerateBoundaryError",
    "InvalidBoundaryError",
    # Data structures
    "ParkingSpot",
    "LocalFrame",
    "RoiKeyPoints",
    "XYBoundary",
    "BoundaryChains",
    "BoundaryBox",
    "EndPose",
    "OpenSpaceRoi",
    # Pipeline stages
    "FrameBuilder",
    "RoiFrame",
    "BoundaryAssembler",
    "assemble_chains",
    "compute_xy_boundary",
    "build_boundary_boxes",
    "EndPoseResolver",
    "resolve_end_pose",
    "spot_heading",
    # Orchestration
    "OpenSpaceRoiBuilder",
    "RoiResult",
]
