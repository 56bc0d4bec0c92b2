"""JSON edit actions.

Each action is a small pydantic model tagged by its ``action`` field, e.g.::

    {"action": "set-edge-length", "floor": "floor-1", "edge": "floor-1-edge-1", "length": 7000}
    {"action": "update-roof", "type": "gable", "slope_value": 4, "ridge_height": 3000}

``floor`` defaults to the active floor where an action takes one. Parsing
is strict: unknown actions or missing fields raise ``pydantic.ValidationError``
before anything is applied.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from outline_builder.edits import building as edits
from outline_builder.models.building import Building, TemplateType
from outline_builder.models.geometry import Point


class _Action(BaseModel, ABC):
    model_config = ConfigDict(frozen=True, extra="forbid")

    @abstractmethod
    def apply(self, building: Building) -> Building:
        """Return the edited snapshot."""


class _FloorAction(_Action):
    floor: str | None = None

    def floor_id(self, building: Building) -> str:
        return self.floor or building.active_floor_id


def _point(xy: tuple[float, float]) -> Point:
    return Point(x=xy[0], y=xy[1])


class MoveVertex(_FloorAction):
    action: Literal["move-vertex"]
    index: int
    point: tuple[float, float]
    constrained: bool = False

    def apply(self, building: Building) -> Building:
        return edits.move_vertex(
            building, self.floor_id(building), self.index, _point(self.point), self.constrained
        )


class InsertVertex(_FloorAction):
    action: Literal["insert-vertex"]
    edge_index: int
    point: tuple[float, float]

    def apply(self, building: Building) -> Building:
        return edits.insert_vertex(
            building, self.floor_id(building), self.edge_index, _point(self.point)
        )


class RemoveVertex(_FloorAction):
    action: Literal["remove-vertex"]
    index: int

    def apply(self, building: Building) -> Building:
        return edits.remove_vertex(building, self.floor_id(building), self.index)


class SetEdgeLength(_FloorAction):
    action: Literal["set-edge-length"]
    edge: str
    length: float

    def apply(self, building: Building) -> Building:
        return edits.update_edge_length(building, self.floor_id(building), self.edge, self.length)


class SetEdgeOffset(_FloorAction):
    action: Literal["set-edge-offset"]
    edge: str
    offset: float

    def apply(self, building: Building) -> Building:
        return edits.update_edge_offset(building, self.floor_id(building), self.edge, self.offset)


class SetUniformOffset(_FloorAction):
    action: Literal["set-uniform-offset"]
    offset: float

    def apply(self, building: Building) -> Building:
        return edits.set_uniform_offset(building, self.floor_id(building), self.offset)


class SetFloorHeight(_FloorAction):
    action: Literal["set-floor-height"]
    height: float

    def apply(self, building: Building) -> Building:
        return edits.update_floor_height(building, self.floor_id(building), self.height)


class UpdateRoof(_FloorAction):
    action: Literal["update-roof"]
    # Plain strings so that bad values are reported as rejected edits
    type: str | None = None
    slope_value: float | None = None
    ridge_height: float | None = None
    parapet_height: float | None = None
    low_side_direction: str | None = None
    orientation: str | None = None

    def apply(self, building: Building) -> Building:
        return edits.update_roof(
            building,
            self.floor_id(building),
            type=self.type,
            slope_value=self.slope_value,
            ridge_height=self.ridge_height,
            parapet_height=self.parapet_height,
            low_side_direction=self.low_side_direction,
            orientation=self.orientation,
        )


class ApplyTemplate(_Action):
    action: Literal["apply-template"]
    template: str

    def apply(self, building: Building) -> Building:
        return edits.apply_template(building, self.template)


class SelectTemplate(_Action):
    action: Literal["select-template"]
    template: TemplateType

    def apply(self, building: Building) -> Building:
        return edits.select_template(self.template)


class AddFloor(_Action):
    action: Literal["add-floor"]

    def apply(self, building: Building) -> Building:
        return edits.add_floor(building)


class DuplicateFloor(_FloorAction):
    action: Literal["duplicate-floor"]

    def apply(self, building: Building) -> Building:
        return edits.duplicate_floor(building, self.floor_id(building))


class RemoveFloor(_FloorAction):
    action: Literal["remove-floor"]

    def apply(self, building: Building) -> Building:
        return edits.remove_floor(building, self.floor_id(building))


class SetActiveFloor(_Action):
    action: Literal["set-active-floor"]
    floor: str

    def apply(self, building: Building) -> Building:
        return edits.set_active_floor(building, self.floor)


class SelectEdge(_Action):
    action: Literal["select-edge"]
    edge: str | None = None

    def apply(self, building: Building) -> Building:
        return edits.select_edge(building, self.edge)


class SetDrawingMode(_Action):
    action: Literal["set-drawing-mode"]
    mode: str
    value: bool

    def apply(self, building: Building) -> Building:
        return edits.set_drawing_mode(building, self.mode, self.value)


class SetGridSpacing(_Action):
    action: Literal["set-grid-spacing"]
    spacing: float

    def apply(self, building: Building) -> Building:
        return edits.set_grid_spacing(building, self.spacing)


class ToggleFloorLock(_FloorAction):
    action: Literal["toggle-floor-lock"]
    locked: bool

    def apply(self, building: Building) -> Building:
        return edits.toggle_floor_lock(building, self.floor_id(building), self.locked)


Action = Annotated[
    Union[
        MoveVertex,
        InsertVertex,
        RemoveVertex,
        SetEdgeLength,
        SetEdgeOffset,
        SetUniformOffset,
        SetFloorHeight,
        UpdateRoof,
        ApplyTemplate,
        SelectTemplate,
        AddFloor,
        DuplicateFloor,
        RemoveFloor,
        SetActiveFloor,
        SelectEdge,
        SetDrawingMode,
        SetGridSpacing,
        ToggleFloorLock,
    ],
    Field(discriminator="action"),
]

_action_adapter: TypeAdapter[Action] = TypeAdapter(Action)


def parse_action(raw: dict[str, Any]) -> Action:
    """Validate one raw JSON action."""
    return _action_adapter.validate_python(raw)


def apply_action(building: Building, action: Action | dict[str, Any]) -> Building:
    """Apply one action. Rejections are reported through ``last_error``."""
    if isinstance(action, dict):
        action = parse_action(action)
    return action.apply(building)


def apply_actions(
    building: Building, actions: list[Action | dict[str, Any]]
) -> tuple[Building, int]:
    """Apply actions in order, stopping at the first rejected one.

    Returns the last accepted snapshot (with ``last_error`` set if an action
    was rejected) and the number of actions applied.
    """
    building = building.model_copy(update={"last_error": None})
    for index, action in enumerate(actions):
        result = apply_action(building, action)
        if result.last_error is not None:
            return building.model_copy(update={"last_error": result.last_error}), index
        building = result
    return building, len(actions)
