"""Building-level edit operations.

Every function takes a Building snapshot and returns a new one. Edits that
break an invariant are rejected: the returned snapshot carries the previous
geometry and ``last_error`` explains why. Accepted edits clear
``last_error``. Edits that change nothing return the input unchanged.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from outline_builder.edits.constraints import apply_canvas_constraints
from outline_builder.edits.polygon import (
    create_dimensions,
    insert_vertex_in_polygon,
    move_vertex_in_polygon,
    recompute_dimensions,
    remove_vertex_from_polygon,
    set_edge_length,
    vertex_at,
)
from outline_builder.errors import NotFoundError, OutlineError, RangeError
from outline_builder.generators.shell import (
    BASE_HEIGHT,
    create_initial_building,
    default_roof,
    floor_name,
    floor_style,
)
from outline_builder.generators.templates import build_template_shape
from outline_builder.models.building import Building, TemplateType
from outline_builder.models.floor import (
    CardinalDirection,
    Floor,
    RoofConfig,
    RoofOrientation,
    RoofType,
)
from outline_builder.models.geometry import Point

logger = logging.getLogger(__name__)

TOGGLEABLE_MODES = {
    "right_angle",
    "grid_snap",
    "grid_visible",
    "dimension_visible",
    "dimension_visible_elevation",
}

FloorUpdater = Callable[[Floor], Floor]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _reject(building: Building, message: str) -> Building:
    logger.info("Edit rejected: %s", message)
    return building.model_copy(update={"last_error": message})


def _accept(building: Building, **update) -> Building:
    return building.model_copy(update={**update, "last_error": None})


def _update_floor(
    building: Building,
    floor_id: str,
    updater: FloorUpdater,
    ignore_lock: bool = False,
) -> Building:
    """Apply ``updater`` to one floor, translating OutlineError into a rejection."""
    index = building.floor_index(floor_id)
    if index is None:
        return _reject(building, f"Floor '{floor_id}' not found")
    floor = building.floors[index]
    if floor.locked and not ignore_lock:
        return _reject(building, f"Floor '{floor.name or floor.id}' is locked")

    try:
        updated = updater(floor)
    except OutlineError as exc:
        return _reject(building, str(exc))

    if updated == floor:
        return building
    floors = list(building.floors)
    floors[index] = updated
    return _accept(building, floors=floors)


def _require_edge(floor: Floor, edge_id: str) -> int:
    index = floor.edge_index(edge_id)
    if index is None:
        raise NotFoundError(f"Edge '{edge_id}' not found on floor '{floor.id}'")
    return index


def _is_number(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def _restack(floors: list[Floor]) -> list[Floor]:
    """Rename and restyle floors by their stacking position."""
    return [
        f.model_copy(update={"name": floor_name(i), "style": floor_style(i)})
        for i, f in enumerate(floors)
    ]


def next_floor_id(floors: list[Floor]) -> str:
    """``floor-N`` where N is one more than the largest numeric suffix in use."""
    highest = 0
    for floor in floors:
        digits = ""
        for ch in reversed(floor.id):
            if not ch.isdigit():
                break
            digits = ch + digits
        if digits:
            highest = max(highest, int(digits))
    return f"floor-{highest + 1}"


# ---------------------------------------------------------------------------
# Polygon edits
# ---------------------------------------------------------------------------

def move_vertex(
    building: Building,
    floor_id: str,
    vertex_index: int,
    point: Point,
    constrained: bool = False,
) -> Building:
    """Move a vertex. With ``constrained`` the drawing modes (grid snap,
    right angle) are applied first."""

    def update(floor: Floor) -> Floor:
        target = vertex_at(point.x, point.y)
        if constrained:
            target = apply_canvas_constraints(point, vertex_index, building.modes, floor)
        polygon = move_vertex_in_polygon(floor.polygon, vertex_index, target)
        return floor.model_copy(
            update={
                "polygon": polygon,
                "dimensions": recompute_dimensions(floor.id, polygon, floor.dimensions),
            }
        )

    return _update_floor(building, floor_id, update)


def insert_vertex(
    building: Building, floor_id: str, edge_index: int, point: Point
) -> Building:
    """Split edge ``edge_index`` by inserting ``point`` after its start vertex."""

    def update(floor: Floor) -> Floor:
        polygon, sources = insert_vertex_in_polygon(floor.polygon, edge_index, point)
        return floor.model_copy(
            update={
                "polygon": polygon,
                "dimensions": recompute_dimensions(
                    floor.id, polygon, floor.dimensions, sources
                ),
            }
        )

    return _update_floor(building, floor_id, update)


def remove_vertex(building: Building, floor_id: str, vertex_index: int) -> Building:
    """Delete a vertex; the two edges around it merge into a new edge."""

    def update(floor: Floor) -> Floor:
        polygon, sources = remove_vertex_from_polygon(floor.polygon, vertex_index)
        return floor.model_copy(
            update={
                "polygon": polygon,
                "dimensions": recompute_dimensions(
                    floor.id, polygon, floor.dimensions, sources
                ),
            }
        )

    return _update_floor(building, floor_id, update)


def update_edge_length(
    building: Building, floor_id: str, edge_id: str, length: float
) -> Building:
    """Resize an edge by moving its end vertex along the edge direction."""
    if not _is_number(length) or length <= 0:
        return _reject(building, "Edge length must be positive")

    def update(floor: Floor) -> Floor:
        index = _require_edge(floor, edge_id)
        polygon = set_edge_length(floor.polygon, index, length)
        return floor.model_copy(
            update={
                "polygon": polygon,
                "dimensions": recompute_dimensions(floor.id, polygon, floor.dimensions),
            }
        )

    return _update_floor(building, floor_id, update)


def update_edge_offset(
    building: Building, floor_id: str, edge_id: str, offset: float
) -> Building:
    """Set the eave offset of a single edge."""
    if not _is_number(offset) or offset < 0:
        return _reject(building, "Eave offset must be 0 or greater")

    def update(floor: Floor) -> Floor:
        index = _require_edge(floor, edge_id)
        dimensions = list(floor.dimensions)
        dimensions[index] = dimensions[index].model_copy(update={"offset": offset})
        return floor.model_copy(update={"dimensions": dimensions})

    return _update_floor(building, floor_id, update)


def set_uniform_offset(building: Building, floor_id: str, offset: float) -> Building:
    """Set the same eave offset on every edge of a floor."""
    if not _is_number(offset) or offset < 0:
        return _reject(building, "Eave offset must be 0 or greater")

    def update(floor: Floor) -> Floor:
        return floor.model_copy(
            update={
                "dimensions": [
                    d.model_copy(update={"offset": offset}) for d in floor.dimensions
                ]
            }
        )

    result = _update_floor(building, floor_id, update)
    if result.last_error is None and result is not building:
        result = result.model_copy(update={"selected_edge_id": None})
    return result


# ---------------------------------------------------------------------------
# Height & roof
# ---------------------------------------------------------------------------

def _fit_roof_to_height(roof: RoofConfig, height: float) -> RoofConfig:
    if roof.is_flat:
        return roof.model_copy(update={"ridge_height": height + roof.parapet_height})
    return roof.model_copy(update={"ridge_height": max(roof.ridge_height, height)})


def update_floor_height(building: Building, floor_id: str, height: float) -> Building:
    """Change a floor's storey height, keeping its roof consistent."""
    if not _is_number(height) or height <= 0:
        return _reject(building, "Floor height must be positive")

    def update(floor: Floor) -> Floor:
        return floor.model_copy(
            update={"height": height, "roof": _fit_roof_to_height(floor.roof, height)}
        )

    return _update_floor(building, floor_id, update)


def update_roof(
    building: Building,
    floor_id: str,
    type: RoofType | str | None = None,
    slope_value: float | None = None,
    ridge_height: float | None = None,
    parapet_height: float | None = None,
    low_side_direction: CardinalDirection | str | None = None,
    orientation: RoofOrientation | str | None = None,
) -> Building:
    """Update roof fields. Omitted fields keep their current value.

    Flat roofs force slope 0 and ridge = height + parapet; pitched roofs force
    parapet 0 and need ridge >= floor height.
    """

    def update(floor: Floor) -> Floor:
        roof = floor.roof
        try:
            next_type = RoofType(type) if type is not None else roof.type
        except ValueError:
            raise RangeError(f"Unknown roof type '{type}'") from None
        try:
            low_side = (
                CardinalDirection(low_side_direction)
                if low_side_direction is not None
                else roof.low_side_direction
            )
            ridge_axis = (
                RoofOrientation(orientation) if orientation is not None else roof.orientation
            )
        except ValueError as exc:
            raise RangeError(str(exc)) from None

        if slope_value is not None and (not _is_number(slope_value) or slope_value < 0):
            raise RangeError("Roof slope must be 0 or greater")
        if parapet_height is not None and (
            not _is_number(parapet_height) or parapet_height < 0
        ):
            raise RangeError("Parapet height must be 0 or greater")
        if ridge_height is not None and not _is_number(ridge_height):
            raise RangeError("Ridge height must be a number")

        slope = roof.slope_value if slope_value is None else slope_value
        parapet = roof.parapet_height if parapet_height is None else parapet_height
        ridge = roof.ridge_height if ridge_height is None else ridge_height

        if next_type == RoofType.FLAT:
            slope = 0.0
            ridge = floor.height + parapet
        else:
            parapet = 0.0
            if ridge < floor.height:
                raise RangeError("Ridge height must be at least the floor height")

        next_roof = RoofConfig(
            type=next_type,
            slope_value=slope,
            ridge_height=ridge,
            parapet_height=parapet,
            low_side_direction=low_side,
            orientation=ridge_axis,
        )
        return floor.model_copy(update={"roof": next_roof})

    return _update_floor(building, floor_id, update)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def select_template(template: TemplateType | str) -> Building:
    """Start over with a fresh single-floor building."""
    return create_initial_building(template)


def apply_template(building: Building, template: TemplateType | str) -> Building:
    """Replace the active floor's outline with a catalog template."""
    floor_id = building.active_floor_id
    try:
        shape = build_template_shape(template, floor_id)
    except OutlineError as exc:
        return _reject(building, str(exc))

    def update(floor: Floor) -> Floor:
        polygon = list(shape.vertices)
        return floor.model_copy(
            update={"polygon": polygon, "dimensions": create_dimensions(floor.id, polygon)}
        )

    result = _update_floor(building, floor_id, update)
    if result.last_error is not None:
        return result
    return result.model_copy(
        update={"template": TemplateType(template), "selected_edge_id": None}
    )


# ---------------------------------------------------------------------------
# Floors
# ---------------------------------------------------------------------------

def add_floor(building: Building) -> Building:
    """Stack a new floor on top, copying the active floor's outline and roof."""
    source = building.active_floor or (building.floors[0] if building.floors else None)
    new_index = len(building.floors)
    new_id = next_floor_id(building.floors)

    if source is not None:
        polygon = list(source.polygon)
        height = source.height
        roof = source.roof
    else:
        polygon = list(build_template_shape(building.template, new_id).vertices)
        height = BASE_HEIGHT
        roof = default_roof(height)

    floor = Floor(
        id=new_id,
        name=floor_name(new_index),
        polygon=polygon,
        dimensions=create_dimensions(new_id, polygon),
        height=height,
        roof=roof,
        style=floor_style(new_index),
    )
    return _accept(building, floors=[*building.floors, floor], active_floor_id=new_id)


def duplicate_floor(building: Building, floor_id: str) -> Building:
    """Insert a copy of a floor directly above it."""
    index = building.floor_index(floor_id)
    if index is None:
        return _reject(building, f"Floor '{floor_id}' not found")

    new_id = next_floor_id(building.floors)
    original = building.floors[index]
    copy = original.model_copy(
        update={
            "id": new_id,
            "polygon": list(original.polygon),
            "dimensions": create_dimensions(new_id, original.polygon),
            "locked": False,
        }
    )
    floors = [*building.floors[: index + 1], copy, *building.floors[index + 1 :]]
    return _accept(building, floors=_restack(floors), active_floor_id=new_id)


def remove_floor(building: Building, floor_id: str) -> Building:
    """Delete a floor. At least one floor always remains."""
    if len(building.floors) <= 1:
        return _reject(building, "Building needs at least one floor")
    if building.get_floor(floor_id) is None:
        return _reject(building, f"Floor '{floor_id}' not found")

    floors = _restack([f for f in building.floors if f.id != floor_id])
    active = building.active_floor_id
    if not any(f.id == active for f in floors):
        active = floors[-1].id
    return _accept(building, floors=floors, active_floor_id=active)


def set_active_floor(building: Building, floor_id: str) -> Building:
    if building.get_floor(floor_id) is None:
        return _reject(building, f"Floor '{floor_id}' not found")
    return _accept(building, active_floor_id=floor_id)


def toggle_floor_lock(building: Building, floor_id: str, locked: bool) -> Building:
    return _update_floor(
        building,
        floor_id,
        lambda floor: floor.model_copy(update={"locked": locked}),
        ignore_lock=True,
    )


# ---------------------------------------------------------------------------
# Editor state
# ---------------------------------------------------------------------------

def select_edge(building: Building, edge_id: str | None) -> Building:
    return _accept(building, selected_edge_id=edge_id)


def set_drawing_mode(building: Building, mode: str, value: bool) -> Building:
    """Switch one boolean drawing mode on or off."""
    if mode not in TOGGLEABLE_MODES:
        return _reject(building, f"Unknown drawing mode '{mode}'")
    if getattr(building.modes, mode) == value:
        return building
    return _accept(building, modes=building.modes.model_copy(update={mode: value}))


def set_grid_spacing(building: Building, spacing: float) -> Building:
    if not _is_number(spacing) or spacing <= 0:
        return _reject(building, "Grid spacing must be positive")
    return _accept(building, modes=building.modes.model_copy(update={"grid_spacing": spacing}))
