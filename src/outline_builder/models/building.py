"""Top-level building model.

A Building is an immutable snapshot: edit operations return a new value
(``model_copy``) and never mutate in place. Floors are ordered bottom-to-top.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from outline_builder.models.floor import Floor


class TemplateType(str, Enum):
    RECTANGLE = "rectangle"
    L_SHAPE = "l-shape"
    T_SHAPE = "t-shape"
    U_SHAPE = "u-shape"
    CONCAVE = "concave"
    CONVEX = "convex"


class DrawingModes(BaseModel):
    """Global display and snapping toggles. Opaque to geometry except
    ``dimension_visible_elevation``, which gates elevation dimension lines."""

    model_config = ConfigDict(frozen=True)

    right_angle: bool = False
    grid_snap: bool = False
    grid_visible: bool = True
    grid_spacing: float = 100.0
    dimension_visible: bool = True
    dimension_visible_elevation: bool = True


class Building(BaseModel):
    """Ordered list of floors plus editor state."""

    model_config = ConfigDict(frozen=True)

    template: TemplateType = TemplateType.RECTANGLE
    floors: list[Floor] = Field(default_factory=list)
    active_floor_id: str = ""
    selected_edge_id: str | None = None
    modes: DrawingModes = Field(default_factory=DrawingModes)
    last_error: str | None = None

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> Building:
        """Load a building from a JSON file without normalisation."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())

    def save(self, path: str | Path) -> Path:
        """Save the building to a JSON file. Creates parent dirs if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
        return path

    # ── Lookups ───────────────────────────────────────────────────────

    def get_floor(self, floor_id: str) -> Floor | None:
        """Find a floor by id."""
        return next((f for f in self.floors if f.id == floor_id), None)

    def floor_index(self, floor_id: str) -> int | None:
        return next(
            (i for i, f in enumerate(self.floors) if f.id == floor_id), None
        )

    @property
    def active_floor(self) -> Floor | None:
        return self.get_floor(self.active_floor_id)

    def floor_base(self, floor_id: str) -> float:
        """Elevation of a floor's base: sum of the heights below it."""
        base = 0.0
        for floor in self.floors:
            if floor.id == floor_id:
                return base
            base += floor.height
        raise ValueError(f"Floor '{floor_id}' not found")

    def total_height(self) -> float:
        """Height of the wall stack, roofs excluded."""
        return sum(f.height for f in self.floors)

    def floor_count(self) -> int:
        return len(self.floors)
