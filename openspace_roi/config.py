#==============================================================================
# OpenSpaceROI - Configuration Loader
#==============================================================================
# File: config.py
# Description: Loads YAML configuration files and the ROI parameter set
# Date: October 2026
#==============================================================================

import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional


class Config:
    """Loads and parses YAML config files."""
    
    def __init__(self, config_path: str | Path):
        """Load configuration from YAML file."""
        self.config_path = Path(config_path)
        self.data = self._load_yaml()
    
    def _load_yaml(self) -> Dict[str, Any]:
        """Read YAML file and return as dictionary."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")
        
        with open(self.config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value by key. Supports nested keys with dots.
        Example: config.get('roi.longitudinal_range') returns 10.0
        """
        value = self.data
        
        for k in key.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        
        return value
    
    def __getitem__(self, key: str) -> Any:
        """Allow dict-style access: config['roi']"""
        return self.data[key]


@dataclass(frozen=True)
class RoiConfig:
    """
    Parameters of one ROI computation.
    
    Passed explicitly into every call; nothing here is process-wide.
    """
    # Half-length of the road stretch kept on each side of the spot (meters)
    longitudinal_range: float = 10.0
    
    # True: end heading points into the stall the way the vehicle entered
    parking_inwards: bool = False
    
    # Corners farther than this from the path do not project (None = no limit)
    max_lateral_distance: Optional[float] = None
    
    def __post_init__(self):
        if not isinstance(self.parking_inwards, bool):
            raise ValueError(
                f"parking_inwards must be true or false, got {self.parking_inwards!r}"
            )
        if self.longitudinal_range <= 0:
            raise ValueError(
                f"longitudinal_range must be positive, got {self.longitudinal_range}"
            )
        if self.max_lateral_distance is not None and self.max_lateral_distance <= 0:
            raise ValueError(
                f"max_lateral_distance must be positive, got {self.max_lateral_distance}"
            )
    
    def to_dict(self) -> dict:
        return {
            "longitudinal_range": self.longitudinal_range,
            "parking_inwards": self.parking_inwards,
            "max_lateral_distance": self.max_lateral_distance,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> "RoiConfig":
        reach = data.get("max_lateral_distance")
        return cls(
            longitudinal_range=float(data.get("longitudinal_range", 10.0)),
            parking_inwards=data.get("parking_inwards", False),
            max_lateral_distance=float(reach) if reach is not None else None,
        )
    
    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "RoiConfig":
        """Build from the 'roi' section of a YAML config file."""
        return cls.from_dict(Config(config_path).get("roi", {}))
