"""
Parking Map

Lanes, parking spaces, and which spaces each lane serves.

The map is only a lookup table for ROI queries: given a lane ID and a
parking space ID it hands back the spot polygon and the lane's reference
path. It is loaded from a YAML/JSON manifest:

    lanes:
      - lane_id: lane_1
        centerline: [[0, 0], [40, 0]]
        left_width: 3.5           # scalar or one value per centerline point
        right_width: 3.5
        parking_spaces: [spot_1]  # spaces reachable from this lane
    parking_spaces:
      - spot_id: spot_1
        polygon: [[x, y], [x, y], [x, y], [x, y]]  # LD, RD, RT, LT
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .logging_utils import RoiLogger
from .reference_path import ReferencePath
from .roi.roi_data import ParkingSpot
from .roi.roi_types import MapResolutionError


@dataclass(frozen=True)
class Lane:
    """A lane and the parking spaces it overlaps."""
    lane_id: str
    path: ReferencePath
    parking_space_ids: frozenset[str] = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        data = {"lane_id": self.lane_id}
        data.update(self.path.to_dict())
        data["parking_spaces"] = sorted(self.parking_space_ids)
        return data

    @classmethod
    def from_dict(cls, data: dict,
                  max_lateral_distance: Optional[float] = None) -> "Lane":
        path = ReferencePath(
            data["centerline"],
            data.get("left_width", 0.0),
            data.get("right_width", 0.0),
            data.get("max_lateral_distance", max_lateral_distance),
        )
        return cls(
            lane_id=str(data["lane_id"]),
            path=path,
            parking_space_ids=frozenset(str(s) for s in data.get("parking_spaces", [])),
        )


class ParkingMap:
    """
    Registry of lanes and parking spaces.

    Thread Safety: NOT thread-safe while loading; read-only use after
    loading is safe.
    """

    MODULE_NAME = "ParkingMap"

    def __init__(self, logger: Optional[RoiLogger] = None,
                 max_lateral_distance: Optional[float] = None):
        """
        Initialize empty map.

        Args:
            logger: Structured logger
            max_lateral_distance: Default projection reach for loaded lanes
        """
        self.logger = logger or RoiLogger(self.MODULE_NAME)
        self.max_lateral_distance = max_lateral_distance
        self._lanes: dict[str, Lane] = {}
        self._parking_spaces: dict[str, ParkingSpot] = {}

    # ========================================
    # LOADING
    # ========================================

    def load_from_manifest(self, manifest_path: str | Path) -> bool:
        """
        Load lanes and parking spaces from a YAML/JSON manifest file.

        Returns:
            True if loaded successfully, False otherwise
        """
        path = Path(manifest_path)
        if not path.exists():
            self.logger.error(
                "Map manifest not found",
                path=str(path),
                suggested_fix="Create the map manifest or check the path",
            )
            return False

        try:
            with open(path) as f:
                if path.suffix in ('.yaml', '.yml'):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            self.logger.error(
                "Failed to parse map manifest",
                path=str(path),
                error=str(e),
            )
            return False

        return self.load_from_dict(data or {}, source=str(path))

    def load_from_dict(self, data: dict, source: str = "dict") -> bool:
        """
        Load lanes and parking spaces from a dictionary (manifest format).

        Nothing is registered if any entry is malformed or any ID is
        duplicated, within the manifest or against the registry.
        """
        if not isinstance(data, dict):
            self.logger.error(
                "Map manifest must be a mapping",
                source=source,
                reason=f"top level is {type(data).__name__}",
                suggested_fix="Put 'lanes' and 'parking_spaces' keys at the top level",
            )
            return False

        try:
            spots = [ParkingSpot.from_dict(s) for s in data.get("parking_spaces", [])]
            lanes = [
                Lane.from_dict(l, self.max_lateral_distance)
                for l in data.get("lanes", [])
            ]
        except (KeyError, ValueError, TypeError) as e:
            self.logger.error(
                "Malformed map manifest entry",
                source=source,
                error=f"{type(e).__name__}: {e}",
                suggested_fix="Check lane centerlines and 4-corner spot polygons",
            )
            return False

        duplicates = (
            self._duplicate_ids([s.spot_id for s in spots], self._parking_spaces) +
            self._duplicate_ids([l.lane_id for l in lanes], self._lanes)
        )
        if duplicates:
            self.logger.error(
                "Duplicate IDs in map manifest",
                source=source,
                duplicates=duplicates,
                suggested_fix="Give every lane and parking space a unique ID",
            )
            return False

        for spot in spots:
            self.register_parking_space(spot)
        for lane in lanes:
            self.register_lane(lane)

        self.logger.info(
            "Map loaded",
            source=source,
            lanes=len(lanes),
            parking_spaces=len(spots),
        )
        return True

    @staticmethod
    def _duplicate_ids(ids: list[str], registered: dict) -> list[str]:
        """IDs repeated in the list or already registered, sorted."""
        seen = set()
        duplicates = set()
        for item_id in ids:
            if item_id in seen or item_id in registered:
                duplicates.add(item_id)
            seen.add(item_id)
        return sorted(duplicates)

    # ========================================
    # REGISTRATION
    # ========================================

    def register_lane(self, lane: Lane) -> bool:
        """Register a lane. Returns False if the ID already exists."""
        if lane.lane_id in self._lanes:
            self.logger.warning("Lane ID already registered", lane_id=lane.lane_id)
            return False
        self._lanes[lane.lane_id] = lane
        self.logger.debug(
            "Lane registered",
            lane_id=lane.lane_id,
            length=lane.path.length,
            parking_spaces=sorted(lane.parking_space_ids),
        )
        return True

    def register_parking_space(self, spot: ParkingSpot) -> bool:
        """Register a parking space. Returns False if the ID already exists."""
        if spot.spot_id in self._parking_spaces:
            self.logger.warning("Parking space ID already registered", spot_id=spot.spot_id)
            return False
        self._parking_spaces[spot.spot_id] = spot
        self.logger.debug("Parking space registered", spot_id=spot.spot_id)
        return True

    # ========================================
    # QUERIES
    # ========================================

    def get_lane(self, lane_id: str) -> Optional[Lane]:
        return self._lanes.get(lane_id)

    def get_parking_space(self, spot_id: str) -> Optional[ParkingSpot]:
        return self._parking_spaces.get(spot_id)

    @property
    def lane_ids(self) -> list[str]:
        return sorted(self._lanes)

    @property
    def parking_space_ids(self) -> list[str]:
        return sorted(self._parking_spaces)

    def resolve(self, lane_id: str, parking_id: str) -> tuple[ParkingSpot, ReferencePath]:
        """
        Look up the spot and the lane's reference path for an ROI query.

        Raises:
            MapResolutionError: Unknown lane, lane without parking overlaps,
                or the spot is unknown or not served by the lane
        """
        lane = self._lanes.get(lane_id)
        if lane is None:
            raise MapResolutionError(f"No such lane: '{lane_id}'")
        if not lane.parking_space_ids:
            raise MapResolutionError(f"Lane '{lane_id}' has no parking space overlaps")

        spot = self._parking_spaces.get(parking_id)
        if spot is None:
            raise MapResolutionError(f"No such parking space: '{parking_id}'")
        if parking_id not in lane.parking_space_ids:
            raise MapResolutionError(
                f"Parking space '{parking_id}' does not overlap lane '{lane_id}'"
            )

        self.logger.log_output("resolved", lane_id=lane_id, parking_id=parking_id)
        return spot, lane.path
