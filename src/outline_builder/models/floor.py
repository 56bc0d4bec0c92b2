"""Floor-level models: edge dimensions, roof configuration, styling."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from outline_builder.models.geometry import Point


class RoofType(str, Enum):
    FLAT = "flat"
    MONO = "mono"
    GABLE = "gable"
    HIP = "hip"


class CardinalDirection(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class RoofOrientation(str, Enum):
    """Axis the ridge runs along for gable and hip roofs."""

    NORTH_SOUTH = "north-south"
    EAST_WEST = "east-west"


class EdgeDimension(BaseModel):
    """Length and eave offset of one polygon edge.

    ``dimensions[i]`` always describes the edge from vertex ``i`` to ``i + 1``.
    """

    model_config = ConfigDict(frozen=True)

    edge_id: str
    length: float = Field(description="Rounded edge length (mm), derived from geometry")
    offset: float = Field(default=0.0, description="Eave/overhang distance (mm), user-set")


class RoofConfig(BaseModel):
    """Roof of a floor.

    Heights are measured from the floor's own base. ``slope_value`` is the
    rise per 10 units of run (a ``10/x`` pitch).
    """

    model_config = ConfigDict(frozen=True)

    type: RoofType = RoofType.FLAT
    slope_value: float = 0.0
    ridge_height: float = 0.0
    parapet_height: float = 0.0
    low_side_direction: CardinalDirection = CardinalDirection.SOUTH
    orientation: RoofOrientation = RoofOrientation.NORTH_SOUTH

    @property
    def is_flat(self) -> bool:
        return self.type == RoofType.FLAT

    @property
    def slope(self) -> float:
        """Rise per unit of run."""
        return self.slope_value / 10

    def sanitized(self) -> RoofConfig:
        """Copy with negative numbers clamped to zero."""
        return self.model_copy(
            update={
                "slope_value": max(0.0, self.slope_value),
                "ridge_height": max(0.0, self.ridge_height),
                "parapet_height": max(0.0, self.parapet_height),
            }
        )


class FloorStyle(BaseModel):
    """Rendering hints. Opaque to the geometry engine apart from passthrough."""

    model_config = ConfigDict(frozen=True)

    stroke_color: str = "#2563eb"
    roof_stroke_color: str = "#000000"
    stroke_width: float = 2.0
    roof_dash: tuple[float, float] = (6.0, 4.0)


class Floor(BaseModel):
    """A single storey: outline polygon, per-edge dimensions, height and roof.

    The polygon is stored as given so that invalid snapshots (e.g. loaded from
    disk) can still be represented; the validators decide usability.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    polygon: list[Point] = Field(default_factory=list)
    dimensions: list[EdgeDimension] = Field(default_factory=list)
    height: float = Field(description="Floor-to-floor height in mm")
    roof: RoofConfig = Field(default_factory=RoofConfig)
    style: FloorStyle = Field(default_factory=FloorStyle)
    locked: bool = False

    def edge_index(self, edge_id: str) -> int | None:
        """Position of an edge by id, or None."""
        return next(
            (i for i, d in enumerate(self.dimensions) if d.edge_id == edge_id), None
        )

    def offsets(self) -> list[float]:
        return [max(0.0, d.offset) for d in self.dimensions]
