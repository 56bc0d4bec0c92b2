"""Tests for snapshot save/load and payload normalisation."""

import json

import pytest

from outline_builder.edits.building import set_drawing_mode, update_roof
from outline_builder.generators.shell import create_initial_building
from outline_builder.models.floor import RoofType
from outline_builder.persistence import load_building, normalize_building_payload, save_building


@pytest.fixture
def stored(tmp_path):
    path = tmp_path / "building.json"
    save_building(create_initial_building("l-shape"), path)
    return path


def rewrite(path, mutate):
    data = json.loads(path.read_text())
    mutate(data)
    path.write_text(json.dumps(data))


class TestSaveLoad:
    def test_round_trip(self, tmp_path):
        building = update_roof(create_initial_building(), "floor-1", type="hip", slope_value=3, ridge_height=3000)
        building = set_drawing_mode(building, "grid_snap", True)
        path = tmp_path / "nested" / "b.json"
        assert save_building(building, path).ok
        result = load_building(path)
        assert result.ok
        assert result.building == building

    def test_missing_file(self, tmp_path):
        result = load_building(tmp_path / "absent.json")
        assert result.ok is True
        assert result.building is None

    def test_bad_json(self, tmp_path):
        path = tmp_path / "b.json"
        path.write_text("{not json")
        result = load_building(path)
        assert result.ok is False
        assert result.error.startswith("Failed to parse JSON")

    def test_malformed(self, stored):
        rewrite(stored, lambda d: d["floors"][0].pop("id"))
        result = load_building(stored)
        assert result.ok is False
        assert result.error.startswith("Stored data is malformed")

    def test_failed_validation(self, stored):
        rewrite(stored, lambda d: d["floors"][0].update(height=-100))
        result = load_building(stored)
        assert result.ok is False
        assert result.error.startswith("Stored data failed validation")
        assert "height must be positive" in result.error

    def test_last_error_not_restored(self, stored):
        rewrite(stored, lambda d: d.update(last_error="stale"))
        assert load_building(stored).building.last_error is None


class TestNormalize:
    def test_unknown_roof_values(self):
        payload = {
            "floors": [
                {
                    "id": "floor-1",
                    "height": 3000,
                    "roof": {"type": "dome", "slope_value": -2, "orientation": "diagonal"},
                }
            ]
        }
        roof = normalize_building_payload(payload)["floors"][0]["roof"]
        assert roof["type"] == RoofType.FLAT.value
        assert roof["slope_value"] == 0
        assert roof["ridge_height"] == 3000
        assert roof["orientation"] == "north-south"

    def test_pitched_roof_ridge_raised(self):
        payload = {"floors": [{"id": "f", "height": 3000, "roof": {"type": "gable", "ridge_height": 10, "parapet_height": 500}}]}
        roof = normalize_building_payload(payload)["floors"][0]["roof"]
        assert roof["ridge_height"] == 3000
        assert roof["parapet_height"] == 0

    def test_modes_filled_from_defaults(self):
        modes = normalize_building_payload({"modes": {"grid_snap": True}})["modes"]
        assert modes["grid_snap"] is True
        assert modes["dimension_visible_elevation"] is True
        assert modes["grid_spacing"] == 100

    def test_non_dict_payload(self):
        normalized = normalize_building_payload(["nope"])
        assert normalized["floors"] == []
        assert normalized["selected_edge_id"] is None

    def test_lock_flag(self):
        payload = {"floors": [{"id": "f", "height": "abc", "locked": "yes"}]}
        floor = normalize_building_payload(payload)["floors"][0]
        assert floor["locked"] is False
        assert floor["height"] == 0
