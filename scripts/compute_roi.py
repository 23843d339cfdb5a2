#==============================================================================
# OpenSpaceROI - ROI Computation Script
#==============================================================================
# File: compute_roi.py
# Description: Command-line script to compute a parking ROI from a map manifest
# Date: October 2026
#==============================================================================

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from openspace_roi.config import Config, RoiConfig
from openspace_roi.logging_utils import RoiLogger, setup_logging
from openspace_roi.parking_map import ParkingMap
from openspace_roi.roi import OpenSpaceRoiBuilder


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='OpenSpaceROI: Compute the parking ROI for a lane and parking spot',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # ROI for the south spot of the demo lot
  python scripts/compute_roi.py --map configs/maps/demo_lot.yaml --lane lane_east --parking spot_south

  # Nose-in parking with a shorter road stretch, written to a file
  python scripts/compute_roi.py --map configs/maps/demo_lot.yaml --lane lane_east \\
      --parking spot_north --inwards --range 6 --output roi.json
        """
    )

    parser.add_argument(
        '--map',
        type=str,
        required=True,
        help='Path to the map manifest (YAML or JSON)'
    )

    parser.add_argument(
        '--lane',
        type=str,
        required=True,
        help='ID of the lane the spot is reached from'
    )

    parser.add_argument(
        '--parking',
        type=str,
        required=True,
        help='ID of the target parking space'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='ROI configuration YAML (default: built-in defaults)'
    )

    parser.add_argument(
        '--range',
        type=float,
        default=None,
        help='Longitudinal half-range in meters (overrides config)'
    )

    parser.add_argument(
        '--inwards',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Park nose-in, or nose-out with --no-inwards (overrides config)'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Write the result JSON here instead of stdout'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log debug output'
    )

    return parser.parse_args(argv)


def load_roi_config(args) -> tuple[RoiConfig, dict]:
    """ROI parameters and logging section from --config plus CLI overrides."""
    data = {}
    logging_section = {}
    if args.config:
        config = Config(args.config)
        data = dict(config.get('roi', {}))
        logging_section = config.get('logging', {})
    if args.range is not None:
        data['longitudinal_range'] = args.range
    if args.inwards is not None:
        data['parking_inwards'] = args.inwards
    return RoiConfig.from_dict(data), logging_section


def main(argv=None):
    """Resolve the query, compute the ROI and print the result."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    roi_config, logging_section = load_roi_config(args)
    logger = RoiLogger(
        "ComputeRoi",
        log_dir=logging_section.get('log_dir'),
        console_output=logging_section.get('console_output', True),
    )

    parking_map = ParkingMap(logger, max_lateral_distance=roi_config.max_lateral_distance)
    if not parking_map.load_from_manifest(args.map):
        return 1

    builder = OpenSpaceRoiBuilder(roi_config, logger)
    result = builder.build_for(parking_map, args.lane, args.parking)

    text = json.dumps(result.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        print(f"ROI written to {args.output}")
    else:
        print(text)

    return 0 if result.success else 1


if __name__ == '__main__':
    sys.exit(main())
