"""Initial building generator.

Given a template id, creates a single-floor building:
- floor-1 with the template outline
- one edge dimension per edge, offsets zero
- 3000 mm storey height, flat roof

This is the starting point for every editing session and the fallback
geometry used when a snapshot is unusable.
"""

from __future__ import annotations

import logging

from outline_builder.edits.polygon import create_dimensions
from outline_builder.errors import OutlineError
from outline_builder.generators.templates import build_template_shape
from outline_builder.models.building import Building, TemplateType
from outline_builder.models.floor import Floor, FloorStyle, RoofConfig, RoofType

logger = logging.getLogger(__name__)

BASE_HEIGHT = 3000.0
FALLBACK_TEMPLATE = TemplateType.RECTANGLE
FLOOR_COLORS = ["#2563eb", "#16a34a", "#d97706", "#dc2626"]


def floor_style(index: int) -> FloorStyle:
    """Style for the floor at ``index``; colors cycle through the palette."""
    return FloorStyle(stroke_color=FLOOR_COLORS[index % len(FLOOR_COLORS)])


def floor_name(index: int) -> str:
    """Display name by stacking position: 1F, 2F, ..."""
    return f"{index + 1}F"


def default_roof(height: float = BASE_HEIGHT) -> RoofConfig:
    return RoofConfig(type=RoofType.FLAT, slope_value=0, ridge_height=height, parapet_height=0)


def create_initial_building(template: TemplateType | str = FALLBACK_TEMPLATE) -> Building:
    """Create a single-floor building from a catalog template.

    Unknown or undersized templates fall back to the rectangle.

    Args:
        template: Template id.

    Returns:
        Building with one floor ``floor-1``.
    """
    floor_id = "floor-1"
    try:
        shape = build_template_shape(template, floor_id)
        resolved = TemplateType(template)
    except OutlineError as exc:
        logger.warning("Using %s template instead: %s", FALLBACK_TEMPLATE.value, exc)
        shape = build_template_shape(FALLBACK_TEMPLATE, floor_id)
        resolved = FALLBACK_TEMPLATE

    polygon = list(shape.vertices)
    floor = Floor(
        id=floor_id,
        name=floor_name(0),
        polygon=polygon,
        dimensions=create_dimensions(floor_id, polygon),
        height=BASE_HEIGHT,
        roof=default_roof(BASE_HEIGHT),
        style=floor_style(0),
    )
    return Building(template=resolved, floors=[floor], active_floor_id=floor_id)
