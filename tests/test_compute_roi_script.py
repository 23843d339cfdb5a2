"""
Command-line script tests

The script lives outside the package, so it is loaded from its path.
"""

import importlib.util
import json

import pytest

from conftest import DEMO_MAP, PROJECT_ROOT, ROI_CONFIG


@pytest.fixture(scope="module")
def compute_roi():
    script = PROJECT_ROOT / "scripts" / "compute_roi.py"
    spec = importlib.util.spec_from_file_location("compute_roi", script)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _base_args(parking: str) -> list[str]:
    return ["--map", str(DEMO_MAP), "--lane", "lane_east", "--parking", parking]


def test_writes_roi_json(compute_roi, tmp_path) -> None:
    output = tmp_path / "roi.json"
    code = compute_roi.main(
        _base_args("spot_south") + ["--config", str(ROI_CONFIG), "--output", str(output)]
    )
    assert code == 0

    result = json.loads(output.read_text(encoding="utf-8"))
    assert result["success"] is True
    xy = result["roi"]["xy_boundary"]
    assert [xy["x_min"], xy["x_max"], xy["y_min"], xy["y_max"]] == pytest.approx([-8.75, 11.25, -5.0, 4.5])


def test_cli_overrides(compute_roi) -> None:
    args = compute_roi.parse_args(_base_args("spot_north") + ["--range", "6", "--inwards"])
    roi_config, logging_section = compute_roi.load_roi_config(args)
    assert roi_config.longitudinal_range == 6.0
    assert roi_config.parking_inwards is True
    assert logging_section == {}


def test_no_inwards_overrides_config(compute_roi, tmp_path) -> None:
    config_path = tmp_path / "inwards.yaml"
    config_path.write_text("roi:\n  parking_inwards: true\n")

    args = compute_roi.parse_args(_base_args("spot_south") + ["--config", str(config_path)])
    assert compute_roi.load_roi_config(args)[0].parking_inwards is True

    args = compute_roi.parse_args(
        _base_args("spot_south") + ["--config", str(config_path), "--no-inwards"]
    )
    assert compute_roi.load_roi_config(args)[0].parking_inwards is False


def test_unknown_spot_fails(compute_roi, tmp_path, capsys) -> None:
    code = compute_roi.main(_base_args("spot_missing"))
    assert code == 1

    result = json.loads(capsys.readouterr().out)
    assert result["success"] is False
    assert result["failure"] == "map_resolution_failure"


def test_missing_map_fails(compute_roi, tmp_path) -> None:
    code = compute_roi.main([
        "--map", str(tmp_path / "none.yaml"),
        "--lane", "lane_east", "--parking", "spot_south",
    ])
    assert code == 1
