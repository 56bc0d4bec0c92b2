"""Building data models."""

from outline_builder.models.geometry import BoundingBox, Point, Point3D
from outline_builder.models.floor import (
    CardinalDirection,
    EdgeDimension,
    Floor,
    FloorStyle,
    RoofConfig,
    RoofOrientation,
    RoofType,
)
from outline_builder.models.building import Building, DrawingModes, TemplateType

__all__ = [
    "BoundingBox",
    "Point",
    "Point3D",
    "CardinalDirection",
    "EdgeDimension",
    "Floor",
    "FloorStyle",
    "RoofConfig",
    "RoofOrientation",
    "RoofType",
    "Building",
    "DrawingModes",
    "TemplateType",
]
