"""Extrusion of floor outlines into stacked prisms for a 3D viewer.

Each floor becomes a bottom ring at its base height and a top ring at
base + height over the same plan vertices. Roofs are passed through
unshaped.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from outline_builder.models.building import Building
from outline_builder.models.floor import RoofConfig
from outline_builder.models.geometry import Point3D
from outline_builder.queries.normalize import usable_floors


class ExtrusionMesh(BaseModel):
    model_config = ConfigDict(frozen=True)

    floor_id: str
    base: float
    height: float
    roof: RoofConfig
    bottom: list[Point3D]
    top: list[Point3D]
    color: str


class ExtrusionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    meshes: list[ExtrusionMesh]
    error: str | None = None


def build_extrusion(building: Building) -> ExtrusionResult:
    """One mesh per usable floor, bottom to top."""
    normalized = usable_floors(building)
    meshes = []
    base = 0.0
    for floor in normalized.floors:
        top = base + floor.height
        meshes.append(
            ExtrusionMesh(
                floor_id=floor.id,
                base=base,
                height=floor.height,
                roof=floor.roof,
                bottom=[Point3D(x=p.x, y=p.y, z=base) for p in floor.polygon],
                top=[Point3D(x=p.x, y=p.y, z=top) for p in floor.polygon],
                color=floor.style.stroke_color,
            )
        )
        base = top
    return ExtrusionResult(ok=normalized.ok, meshes=meshes, error=normalized.error)
