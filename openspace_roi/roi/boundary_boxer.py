"""
Boundary Boxer

Approximates each rotated boundary chain by one oriented rectangle for
obstacle modelling.

- left/right: spans the chain's road-edge leg; width is the spot depth
  taken from the chain's third point.
- down/up: the chains are bare lines, so the boxes get a fixed 1.0 width
  and sit half a width outside the ROI. Which side is outside depends on
  whether the spot faces up or down in the rotated frame.
"""

import math

from ..geometry import Vec2d
from .roi_data import BoundaryBox, BoundaryChains
from .roi_types import DegenerateBoundaryError, SpotOrientation


CAP_BOX_WIDTH = 1.0


def _heading(a: Vec2d, b: Vec2d) -> float:
    return math.atan2(b.y - a.y, b.x - a.x)


def _left_box(chain: tuple[Vec2d, ...]) -> BoundaryBox:
    edge, corner, bottom = chain
    return BoundaryBox(
        center=Vec2d((edge.x + corner.x) / 2, (corner.y + bottom.y) / 2),
        heading=_heading(edge, corner),
        length=abs(corner.x - edge.x),
        width=abs(corner.y - bottom.y),
    )


def _right_box(chain: tuple[Vec2d, ...]) -> BoundaryBox:
    bottom, corner, edge = chain
    return BoundaryBox(
        center=Vec2d((corner.x + edge.x) / 2, (bottom.y + corner.y) / 2),
        heading=_heading(corner, edge),
        length=abs(edge.x - corner.x),
        width=abs(corner.y - bottom.y),
    )


def _cap_box(chain: tuple[Vec2d, ...], anchor: Vec2d, y_shift: float) -> BoundaryBox:
    first, second = chain
    return BoundaryBox(
        center=Vec2d((first.x + second.x) / 2, anchor.y + y_shift),
        heading=_heading(first, second),
        length=abs(second.x - first.x),
        width=CAP_BOX_WIDTH,
    )


def build_boundary_boxes(
    chains: BoundaryChains,
    orientation: SpotOrientation,
) -> tuple[BoundaryBox, BoundaryBox, BoundaryBox, BoundaryBox]:
    """
    Boxes for the rotated chains, ordered left, down, right, up.

    Args:
        chains: Boundary chains in the rotated frame
        orientation: Facing of the spot in the rotated frame

    Raises:
        DegenerateBoundaryError: If a chain spans zero length or depth
    """
    half = CAP_BOX_WIDTH / 2
    # Outward offset of the down cap; the up cap goes the other way
    down_shift = half if orientation == SpotOrientation.FACING_UP else -half

    try:
        return (
            _left_box(chains.left),
            _cap_box(chains.down, chains.down[1], down_shift),
            _right_box(chains.right),
            _cap_box(chains.up, chains.up[0], -down_shift),
        )
    except ValueError as e:
        raise DegenerateBoundaryError(f"Boundary chain collapses to a zero-size box: {e}") from e
