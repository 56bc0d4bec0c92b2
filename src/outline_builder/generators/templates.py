"""Floor outline template catalog.

Each template is a named footprint in millimeters with a default eave
offset and a minimum bounding box. A template is only handed out after
its outline passes ``validate_template_dimensions``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from outline_builder.errors import GeometryError, NotFoundError
from outline_builder.models.building import TemplateType
from outline_builder.models.geometry import Point, bounding_box


class TemplateMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_width: float = Field(ge=0)
    min_depth: float = Field(ge=0)


class FloorplanTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: TemplateType
    label: str
    base_vertices: list[Point]
    default_eave: float = Field(ge=0)
    metadata: TemplateMetadata


class TemplateShape(BaseModel):
    """Outline produced from a template for a specific floor."""

    model_config = ConfigDict(frozen=True)

    floor_id: str
    vertices: list[Point]
    default_offset: float


def _vertices(*coords: tuple[int, int]) -> list[Point]:
    return [Point(x=x, y=y) for x, y in coords]


TEMPLATES: dict[TemplateType, FloorplanTemplate] = {
    t.id: t
    for t in [
        FloorplanTemplate(
            id=TemplateType.RECTANGLE,
            label="Rectangle",
            base_vertices=_vertices((0, 0), (6000, 0), (6000, 4000), (0, 4000)),
            default_eave=500,
            metadata=TemplateMetadata(min_width=3000, min_depth=2000),
        ),
        FloorplanTemplate(
            id=TemplateType.L_SHAPE,
            label="L-shape",
            base_vertices=_vertices(
                (0, 0), (4000, 0), (4000, 2000), (2000, 2000), (2000, 4000), (0, 4000)
            ),
            default_eave=600,
            metadata=TemplateMetadata(min_width=3000, min_depth=3000),
        ),
        FloorplanTemplate(
            id=TemplateType.CONCAVE,
            label="Concave",
            base_vertices=_vertices(
                (0, 0), (2500, 0), (2500, 1500), (3500, 1500),
                (3500, 0), (6000, 0), (6000, 4000), (0, 4000),
            ),
            default_eave=600,
            metadata=TemplateMetadata(min_width=4000, min_depth=3000),
        ),
        FloorplanTemplate(
            id=TemplateType.T_SHAPE,
            label="T-shape",
            base_vertices=_vertices(
                (0, 0), (6000, 0), (6000, 1500), (4000, 1500),
                (4000, 4000), (2000, 4000), (2000, 1500), (0, 1500),
            ),
            default_eave=600,
            metadata=TemplateMetadata(min_width=4000, min_depth=3000),
        ),
        FloorplanTemplate(
            id=TemplateType.U_SHAPE,
            label="U-shape",
            base_vertices=_vertices(
                (0, 0), (1500, 0), (1500, 3000), (4500, 3000),
                (4500, 0), (6000, 0), (6000, 4000), (0, 4000),
            ),
            default_eave=600,
            metadata=TemplateMetadata(min_width=4000, min_depth=3000),
        ),
        FloorplanTemplate(
            id=TemplateType.CONVEX,
            label="Convex",
            base_vertices=_vertices(
                (2000, 0), (4000, 0), (4000, 1000), (6000, 1000),
                (6000, 4000), (0, 4000), (0, 1000), (2000, 1000),
            ),
            default_eave=600,
            metadata=TemplateMetadata(min_width=4000, min_depth=3000),
        ),
    ]
}


def list_templates() -> list[FloorplanTemplate]:
    """All catalog entries in catalog order."""
    return list(TEMPLATES.values())


def get_template(template_id: TemplateType | str) -> FloorplanTemplate:
    """Look up a template by id or raise NotFoundError."""
    try:
        return TEMPLATES[TemplateType(template_id)]
    except (KeyError, ValueError):
        available = [t.value for t in TEMPLATES]
        raise NotFoundError(
            f"Template '{template_id}' not found. Available: {available}"
        ) from None


def validate_template_dimensions(template: FloorplanTemplate) -> list[str]:
    """Return the names of the minimum-size constraints the outline misses."""
    box = bounding_box(template.base_vertices)
    errors: list[str] = []
    if box.width < template.metadata.min_width:
        errors.append("min_width")
    if box.depth < template.metadata.min_depth:
        errors.append("min_depth")
    return errors


def build_template_shape(
    template_id: TemplateType | str, floor_id: str, scale: float = 1.0
) -> TemplateShape:
    """Outline for ``floor_id`` from a catalog template, optionally scaled."""
    template = get_template(template_id)
    errors = validate_template_dimensions(template)
    if errors:
        raise GeometryError(
            f"Template '{template.id.value}' is below its minimum size: {', '.join(errors)}"
        )
    shape = TemplateShape(
        floor_id=floor_id,
        vertices=list(template.base_vertices),
        default_offset=template.default_eave,
    )
    return scale_shape(shape, scale) if scale != 1.0 else shape


def scale_shape(shape: TemplateShape, factor: float) -> TemplateShape:
    """Scale every vertex about the origin, rounding to whole mm."""
    return shape.model_copy(
        update={
            "vertices": [
                Point(x=round(p.x * factor), y=round(p.y * factor))
                for p in shape.vertices
            ]
        }
    )
