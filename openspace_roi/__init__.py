#==============================================================================
# OpenSpaceROI - Core Package Initialization
#==============================================================================
# File: __init__.py
# Description: Package initialization for the open-space parking ROI modules
# Date: October 2026
#==============================================================================

"""
OpenSpaceROI: Region-of-Interest geometry for open-space parking

Derives the maneuvering area, boundary obstacles and target end pose for
parking into a spot next to a reference lane.
"""

__version__ = "0.1.0"

from .config import Config, RoiConfig
from .geometry import Vec2d, normalize_angle
from .reference_path import ReferencePath, PathPoint
from .parking_map import ParkingMap, Lane
from .roi import OpenSpaceRoiBuilder, RoiResult, ParkingSpot, RoiFailure

__all__ = [
    "Config",
    "RoiConfig",
    "Vec2d",
    "normalize_angle",
    "ReferencePath",
    "PathPoint",
    "ParkingMap",
    "Lane",
    "OpenSpaceRoiBuilder",
    "RoiResult",
    "ParkingSpot",
    "RoiFailure",
]
