"""Tests for the CLI interface."""
import json
import subprocess
import sys
from pathlib import Path

import pytest

CLI = [sys.executable, "-m", "outline_builder"]
ROOT = Path(__file__).parent.parent


def run(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    return subprocess.run(
        [*CLI, *args],
        capture_output=True, text=True, cwd=str(ROOT), input=stdin,
    )


def run_cli(*args: str, stdin: str | None = None) -> dict:
    """Run CLI command and return parsed JSON output."""
    result = run(*args, stdin=stdin)
    assert result.returncode == 0, f"CLI failed: {result.stderr}\n{result.stdout}"
    return json.loads(result.stdout)


def run_cli_expect_fail(*args: str) -> dict:
    """Run CLI command expecting failure, return parsed JSON output."""
    result = run(*args)
    assert result.returncode != 0
    return json.loads(result.stdout)


@pytest.fixture
def building_file(tmp_path):
    path = tmp_path / "building.json"
    run_cli("new", str(path))
    return str(path)


class TestSetup:
    def test_version(self):
        result = run("version")
        assert result.returncode == 0
        assert result.stdout.startswith("outline-builder v")

    def test_templates(self):
        data = run_cli("templates")
        ids = [t["id"] for t in data["templates"]]
        assert ids[0] == "rectangle"
        assert "u-shape" in ids

    def test_new(self, tmp_path):
        path = tmp_path / "b.json"
        data = run_cli("new", str(path), "--template", "concave")
        assert data["template"] == "concave"
        assert data["floors"] == ["floor-1"]
        assert path.exists()

    def test_new_refuses_overwrite(self, building_file):
        data = run_cli_expect_fail("new", building_file)
        assert "already exists" in data["error"]
        assert run_cli("new", building_file, "--force")["ok"] is True


class TestQueries:
    def test_validate(self, building_file):
        data = run_cli("validate", building_file)
        assert data["validation"]["errors"] == 0

    def test_missing_file(self, tmp_path):
        data = run_cli_expect_fail("eaves", str(tmp_path / "nope.json"))
        assert data["ok"] is False

    def test_eaves(self, building_file):
        run_cli("apply", building_file, '{"action": "set-uniform-offset", "offset": 500}')
        data = run_cli("eaves", building_file)
        floor = data["floors"][0]
        assert len(floor["segments"]) == 4
        assert floor["extents"][0]["axis"] == "x"

    def test_dimensions(self, building_file):
        data = run_cli("dimensions", building_file, "--floor", "floor-1")
        sides = [g["side"] for g in data["floors"][0]["groups"]]
        assert sides == ["top", "bottom", "left", "right"]

    def test_dimensions_unknown_floor(self, building_file):
        data = run_cli_expect_fail("dimensions", building_file, "--floor", "floor-9")
        assert data["error"] == "Floor 'floor-9' not found"

    def test_config_changes_layout(self, building_file, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"dimensions": {"total_gap": 1000}}))
        data = run_cli("--config", str(settings), "dimensions", building_file)
        top = data["floors"][0]["groups"][0]
        assert top["total"]["start"]["y"] == -1000

    def test_elevations(self, building_file):
        data = run_cli("elevations", building_file)
        assert [v["direction"] for v in data["views"]] == ["north", "south", "east", "west"]
        north = run_cli("elevations", building_file, "-d", "north")["views"]
        assert len(north) == 1
        assert north[0]["dimension_label"] == "|──6000──|"

    def test_config_reaches_elevations(self, building_file, tmp_path):
        run_cli("apply", building_file, json.dumps(
            {"action": "update-roof", "type": "hip", "slope_value": 4,
             "ridge_height": 3000, "orientation": "east-west"}
        ))
        default = run_cli("elevations", building_file, "-d", "north")["views"][0]
        assert len(default["roof_outline"]) == 4
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"elevation": {"pyramid_threshold": 2500}}))
        data = run_cli("--config", str(settings), "elevations", building_file, "-d", "north")
        assert len(data["views"][0]["roof_outline"]) == 3

    def test_elevations_bad_direction(self, building_file):
        data = run_cli_expect_fail("elevations", building_file, "-d", "up")
        assert "Unknown direction" in data["error"]

    def test_extrude(self, building_file):
        data = run_cli("extrude", building_file)
        assert data["ok"] is True
        assert len(data["meshes"]) == 1


class TestApply:
    def test_apply_positional(self, building_file):
        actions = json.dumps([
            {"action": "add-floor"},
            {"action": "set-floor-height", "height": 2800},
        ])
        data = run_cli("apply", building_file, actions)
        assert data["actions_applied"] == 2
        assert data["floors"] == ["floor-1", "floor-2"]
        assert data["active_floor"] == "floor-2"
        assert data["validation"]["errors"] == 0

    def test_apply_file(self, building_file, tmp_path):
        actions = tmp_path / "actions.json"
        actions.write_text(json.dumps([{"action": "set-uniform-offset", "offset": 300}]))
        data = run_cli("apply", building_file, "--file", str(actions), "--no-validate")
        assert "validation" not in data

    def test_apply_stdin(self, building_file):
        data = run_cli(
            "apply", building_file, "--stdin",
            stdin='{"action": "update-roof", "type": "gable", "slope_value": 4, "ridge_height": 3000}',
        )
        assert data["actions_applied"] == 1
        north = run_cli("elevations", building_file, "-d", "north")["views"][0]
        assert north["roof_label"] == "10/4"

    def test_rejected_action_not_saved(self, building_file):
        before = Path(building_file).read_text()
        actions = json.dumps([
            {"action": "add-floor"},
            {"action": "set-edge-length", "edge": "floor-2-edge-1", "length": -5},
        ])
        data = run_cli_expect_fail("apply", building_file, actions)
        assert data["applied"] == 1
        assert data["error"] == "Action 1 (set-edge-length) failed: Edge length must be positive"
        assert Path(building_file).read_text() == before

    def test_non_finite_point_reported(self, building_file, tmp_path):
        actions = tmp_path / "actions.json"
        actions.write_text(json.dumps([{"action": "move-vertex", "index": 1, "point": [float("nan"), 0]}]))
        data = run_cli_expect_fail("apply", building_file, "--file", str(actions))
        assert data["ok"] is False
        assert data["error"].startswith("Action 0 (move-vertex) failed: Vertex coordinates")

    def test_invalid_action(self, building_file):
        data = run_cli_expect_fail("apply", building_file, '{"action": "paint"}')
        assert data["error"].startswith("Invalid action")

    def test_invalid_json(self, building_file):
        data = run_cli_expect_fail("apply", building_file, "[oops")
        assert data["error"].startswith("Invalid JSON")
