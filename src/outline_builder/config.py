"""Engine settings.

All distances are millimeters. Defaults reproduce the editor's stock
layout; a JSON file can override any subset, e.g.::

    {
        "dimensions": {"segment_gap": 400, "total_gap": 700},
        "elevation": {"pyramid_threshold": 20}
    }
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class DimensionSettings(BaseModel):
    """Placement of plan dimension lines relative to the outline."""

    model_config = ConfigDict(frozen=True)

    segment_gap: float = Field(default=300.0, ge=0, description="Detail line distance from the outer edge")
    total_gap: float = Field(default=500.0, ge=0, description="Total line distance from the outer edge")
    tick_length: float = Field(default=80.0, gt=0)
    label_offset: float = Field(default=80.0, ge=0)
    total_label_scale: float = Field(
        default=1.8, gt=0, description="Total labels sit this many label offsets out"
    )


class ElevationSettings(BaseModel):
    """Elevation projection tolerances and annotation spacing."""

    model_config = ConfigDict(frozen=True)

    edge_tolerance: float = Field(
        default=1.0, ge=0, description="Max distance of an edge from the facing side"
    )
    dimension_gap: float = Field(default=300.0, ge=0)
    pyramid_threshold: float = Field(
        default=50.0,
        ge=0,
        description="Hip ridges shorter than this collapse to a single apex",
    )


class EngineSettings(BaseModel):
    """Top-level settings bundle passed to the query functions."""

    model_config = ConfigDict(frozen=True)

    dimensions: DimensionSettings = Field(default_factory=DimensionSettings)
    elevation: ElevationSettings = Field(default_factory=ElevationSettings)

    @classmethod
    def load(cls, path: str | Path) -> EngineSettings:
        """Load settings from a JSON file. Missing keys keep their defaults."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())


DEFAULT_SETTINGS = EngineSettings()
