"""Derived geometry queries.

Pure functions over a Building snapshot:
- eaves: plan eave outline segments and overhang extents
- plan_dimensions: per-side segment/total dimension lines
- elevation: four stacked side views with eave lines and dimensions
- roofs: roof profile per archetype (flat, mono, gable, hip)
- extrusion: bottom/top rings per floor for 3D
- normalize: usable-floor selection and fallback shared by the above
"""

from outline_builder.queries.eaves import (
    EaveExtents,
    RenderedEaveSegment,
    build_eave_segments,
    eave_extents,
)
from outline_builder.queries.plan_dimensions import (
    DimensionLabel,
    DimensionLineData,
    DimensionTick,
    PlanDimensionGroup,
    build_plan_dimension_groups,
)
from outline_builder.queries.elevation import (
    ElevationComputation,
    ElevationView,
    build_elevation_data,
)
from outline_builder.queries.roofs import ROOF_SYNTHESIZERS, RoofContext, RoofProfile
from outline_builder.queries.extrusion import ExtrusionMesh, ExtrusionResult, build_extrusion

__all__ = [
    "EaveExtents",
    "RenderedEaveSegment",
    "build_eave_segments",
    "eave_extents",
    "DimensionLabel",
    "DimensionLineData",
    "DimensionTick",
    "PlanDimensionGroup",
    "build_plan_dimension_groups",
    "ElevationComputation",
    "ElevationView",
    "build_elevation_data",
    "ROOF_SYNTHESIZERS",
    "RoofContext",
    "RoofProfile",
    "ExtrusionMesh",
    "ExtrusionResult",
    "build_extrusion",
]
