"""Tests for structural validation."""

from outline_builder.generators.shell import create_initial_building
from outline_builder.models.floor import RoofConfig, RoofType
from outline_builder.models.geometry import Point
from outline_builder.validators.structural import (
    is_floor_usable,
    validate_building,
    validate_floor,
    validate_roof,
)


def replace_floor(building, **update):
    floor = building.floors[0].model_copy(update=update)
    return building.model_copy(update={"floors": [floor]})


def messages(errors):
    return [e.message for e in errors]


class TestFloorChecks:
    def test_valid(self):
        assert validate_floor(create_initial_building().floors[0]) == []

    def test_too_few_vertices(self):
        b = create_initial_building()
        floor = b.floors[0].model_copy(
            update={"polygon": b.floors[0].polygon[:2], "dimensions": b.floors[0].dimensions[:2]}
        )
        assert messages(validate_floor(floor)) == ["1F: polygon needs at least 3 vertices (has 2)"]
        assert not is_floor_usable(floor)

    def test_duplicate_vertices(self):
        b = create_initial_building()
        polygon = list(b.floors[0].polygon)
        polygon[1] = polygon[0]
        floor = b.floors[0].model_copy(update={"polygon": polygon})
        assert "1F: polygon has duplicate vertices" in messages(validate_floor(floor))

    def test_self_intersection(self):
        b = create_initial_building()
        polygon = [Point(x=0, y=0), Point(x=6000, y=4000), Point(x=6000, y=0), Point(x=0, y=4000)]
        floor = b.floors[0].model_copy(update={"polygon": polygon})
        assert "1F: polygon intersects itself" in messages(validate_floor(floor))

    def test_dimension_mismatch(self):
        b = create_initial_building()
        floor = b.floors[0].model_copy(update={"dimensions": b.floors[0].dimensions[:3]})
        assert "1F: 3 dimensions for 4 edges" in messages(validate_floor(floor))

    def test_negative_offset(self):
        b = create_initial_building()
        dims = list(b.floors[0].dimensions)
        dims[0] = dims[0].model_copy(update={"offset": -10})
        errors = validate_floor(b.floors[0].model_copy(update={"dimensions": dims}))
        assert errors[0].element_type == "EdgeDimension"
        assert errors[0].element_id == "floor-1-edge-1"

    def test_height(self):
        floor = create_initial_building().floors[0].model_copy(update={"height": 0})
        assert any("height must be positive" in m for m in messages(validate_floor(floor)))


class TestRoofChecks:
    def test_roof_errors_keep_floor_usable(self):
        floor = create_initial_building().floors[0].model_copy(
            update={"roof": RoofConfig(type=RoofType.GABLE, slope_value=-1, ridge_height=2000)}
        )
        errors = validate_roof(floor)
        assert len(errors) == 2
        assert all(e.element_type == "Roof" for e in errors)
        assert is_floor_usable(floor)


class TestBuildingChecks:
    def test_no_floors(self):
        b = create_initial_building().model_copy(update={"floors": []})
        assert "Building needs at least one floor" in messages(validate_building(b))

    def test_duplicate_ids(self):
        b = create_initial_building()
        b = b.model_copy(update={"floors": [b.floors[0], b.floors[0]]})
        assert "Duplicate floor id 'floor-1'" in messages(validate_building(b))

    def test_missing_active_floor(self):
        b = create_initial_building().model_copy(update={"active_floor_id": "floor-9"})
        assert messages(validate_building(b)) == ["Active floor 'floor-9' does not exist"]
