"""Structural validation for building snapshots.

Checks the invariants pydantic cannot express on its own: polygon arity,
duplicate vertices, self-intersection, positive heights, dimension/edge
lock-step, roof ranges and the active floor reference.
"""

from __future__ import annotations

from dataclasses import dataclass

from outline_builder.models.building import Building
from outline_builder.models.floor import Floor
from outline_builder.models.geometry import has_duplicate_vertices, has_self_intersection


@dataclass
class ValidationError:
    """A single validation issue."""

    severity: str  # "error" | "warning"
    element_type: str
    element_id: str
    message: str


def validate_floor(floor: Floor) -> list[ValidationError]:
    """All floor-level checks: geometry plus roof ranges."""
    return validate_floor_geometry(floor) + validate_roof(floor)


def validate_floor_geometry(floor: Floor) -> list[ValidationError]:
    """Outline and height checks. Any error makes the floor unusable for geometry."""
    errors: list[ValidationError] = []

    def error(message: str, element_type: str = "Floor", element_id: str | None = None) -> None:
        errors.append(
            ValidationError(
                severity="error",
                element_type=element_type,
                element_id=element_id or floor.id,
                message=message,
            )
        )

    label = floor.name or floor.id
    if not floor.id:
        error("Floor id is empty")

    if len(floor.polygon) < 3:
        error(f"{label}: polygon needs at least 3 vertices (has {len(floor.polygon)})")
    if has_duplicate_vertices(floor.polygon):
        error(f"{label}: polygon has duplicate vertices")
    if has_self_intersection(floor.polygon):
        error(f"{label}: polygon intersects itself")

    if floor.height <= 0:
        error(f"{label}: height must be positive (got {floor.height})")

    if len(floor.dimensions) != len(floor.polygon):
        error(
            f"{label}: {len(floor.dimensions)} dimensions for "
            f"{len(floor.polygon)} edges"
        )
    for dimension in floor.dimensions:
        if dimension.length <= 0:
            error(
                f"{label}: edge {dimension.edge_id} has non-positive length",
                element_type="EdgeDimension",
                element_id=dimension.edge_id,
            )
        if dimension.offset < 0:
            error(
                f"{label}: edge {dimension.edge_id} has a negative offset",
                element_type="EdgeDimension",
                element_id=dimension.edge_id,
            )

    return errors


def validate_roof(floor: Floor) -> list[ValidationError]:
    """Roof range checks. These are reported but do not make a floor unusable;
    the geometry queries sanitise the roof instead."""
    errors: list[ValidationError] = []
    roof = floor.roof
    label = floor.name or floor.id

    if roof.slope_value < 0:
        errors.append(
            ValidationError("error", "Roof", floor.id, f"{label}: roof slope is negative")
        )
    if roof.parapet_height < 0:
        errors.append(
            ValidationError("error", "Roof", floor.id, f"{label}: parapet height is negative")
        )
    if roof.ridge_height < floor.height:
        errors.append(
            ValidationError(
                "error",
                "Roof",
                floor.id,
                f"{label}: ridge height {roof.ridge_height} is below floor height {floor.height}",
            )
        )
    return errors


def validate_building(building: Building) -> list[ValidationError]:
    """Run all checks on a snapshot. Returns an empty list when it is valid."""
    errors: list[ValidationError] = []

    if not building.floors:
        errors.append(
            ValidationError("error", "Building", "", "Building needs at least one floor")
        )

    for floor in building.floors:
        errors.extend(validate_floor(floor))

    ids = [f.id for f in building.floors]
    for floor_id in sorted({i for i in ids if ids.count(i) > 1}):
        errors.append(
            ValidationError("error", "Floor", floor_id, f"Duplicate floor id '{floor_id}'")
        )

    if building.get_floor(building.active_floor_id) is None:
        errors.append(
            ValidationError(
                "error",
                "Building",
                building.active_floor_id,
                f"Active floor '{building.active_floor_id}' does not exist",
            )
        )
    return errors


def is_floor_usable(floor: Floor) -> bool:
    """True if the floor passes every check except the roof range checks."""
    return not validate_floor_geometry(floor)
