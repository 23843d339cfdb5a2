"""
Boundary Assembler

Turns ROI key points into the four boundary chains and the XY boundary.

Chains are named as seen with the spot opening upward. On the spot's
side of the path the ROI hugs the spot: the road edge there is pulled in
to the spot's top corners (the *_near points). The far side keeps the
full road width.

One assembly serves both outputs: the rotated chains use the computed
local frame, the unrotated chains use the identity (map) frame.
"""

from typing import Callable, Optional

from ..logging_utils import RoiLogger
from .frame_builder import RoiFrame
from .roi_data import BoundaryChains, LocalFrame, RoiKeyPoints, XYBoundary
from .roi_types import DegenerateBoundaryError, InvalidBoundaryError, SpotSide


def _chains_spot_right(p: RoiKeyPoints) -> BoundaryChains:
    # Near edge is the right road edge
    return BoundaryChains(
        left=(p.start_near, p.left_top, p.left_down),
        down=(p.left_down, p.right_down),
        right=(p.right_down, p.right_top, p.end_near),
        up=(p.end_left, p.start_left),
    )


def _chains_spot_left(p: RoiKeyPoints) -> BoundaryChains:
    # Near edge is the left road edge
    return BoundaryChains(
        left=(p.end_near, p.left_top, p.left_down),
        down=(p.left_down, p.right_down),
        right=(p.right_down, p.right_top, p.start_near),
        up=(p.start_right, p.end_right),
    )


CHAIN_BUILDERS: dict[SpotSide, Callable[[RoiKeyPoints], BoundaryChains]] = {
    SpotSide.RIGHT: _chains_spot_right,
    SpotSide.LEFT: _chains_spot_left,
}


def assemble_chains(points: RoiKeyPoints, side: SpotSide) -> BoundaryChains:
    """Boundary chains for key points already expressed in the target frame."""
    return CHAIN_BUILDERS[side](points)


def compute_xy_boundary(points: RoiKeyPoints) -> XYBoundary:
    """
    Axis-aligned ROI extent from rotated key points.

    Uses the full-width road edges. The y range spans from the spot's
    bottom to the far road edge, whichever way the spot faces.
    """
    if points.left_down.y > points.start_left.y:
        y_max = points.left_down.y
        y_min = points.start_right.y
    else:
        y_max = points.start_left.y
        y_min = points.left_down.y
    return XYBoundary(
        x_min=points.start_left.x,
        x_max=points.end_left.x,
        y_min=y_min,
        y_max=y_max,
    )


def validate_chains(chains: BoundaryChains) -> None:
    """Raise DegenerateBoundaryError unless there are four 2-3 point chains."""
    chain_list = chains.as_list()
    if len(chain_list) != 4:
        raise DegenerateBoundaryError(
            f"Expected 4 boundary chains, got {len(chain_list)}"
        )
    for name, chain in zip(BoundaryChains.NAMES, chain_list):
        if not 2 <= len(chain) <= 3:
            raise DegenerateBoundaryError(
                f"Boundary chain '{name}' has {len(chain)} points, expected 2 or 3"
            )


class BoundaryAssembler:
    """
    Assembles chains and the XY boundary from an RoiFrame.

    Usage:
        assembler = BoundaryAssembler()
        rotated = assembler.assemble(roi_frame, roi_frame.frame)
        unrotated = assembler.assemble(roi_frame, LocalFrame.identity())
    """

    MODULE_NAME = "BoundaryAssembler"

    def __init__(self, logger: Optional[RoiLogger] = None):
        self.logger = logger or RoiLogger(self.MODULE_NAME)

    def assemble(self, roi_frame: RoiFrame, frame: LocalFrame) -> BoundaryChains:
        """
        Build the four boundary chains in the given frame.

        Raises:
            DegenerateBoundaryError: If the chains do not form four sides
        """
        points = roi_frame.map_points.transformed(frame)
        chains = assemble_chains(points, roi_frame.spot_side)
        validate_chains(chains)
        self.logger.log_output(
            "boundary chains",
            spot_side=roi_frame.spot_side.value,
            frame=frame.to_dict(),
            point_count=chains.point_count(),
        )
        return chains

    def xy_boundary(self, roi_frame: RoiFrame) -> XYBoundary:
        """
        XY boundary in the rotated frame.

        Raises:
            InvalidBoundaryError: If the boundary is empty or inverted
        """
        boundary = compute_xy_boundary(roi_frame.rotated_points)
        if not boundary.is_valid:
            self.logger.error(
                "XY boundary is empty or inverted",
                reason="road stretch does not run along the rotated x axis",
                suggested_fix=InvalidBoundaryError.suggested_fix,
                xy_boundary=boundary.to_dict(),
            )
            raise InvalidBoundaryError(f"Invalid XY boundary: {boundary.to_list()}")
        self.logger.log_output("xy boundary", **boundary.to_dict())
        return boundary
