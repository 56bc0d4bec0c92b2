"""Drag constraints applied to a vertex before it is moved."""

from __future__ import annotations

import math

from outline_builder.models.building import DrawingModes
from outline_builder.models.floor import Floor
from outline_builder.models.geometry import Point


def snap_value_to_grid(value: float, spacing: float) -> float:
    if not math.isfinite(spacing) or spacing <= 0:
        return round(value)
    return round(value / spacing) * spacing


def snap_point_to_grid(point: Point, spacing: float) -> Point:
    return Point(x=snap_value_to_grid(point.x, spacing), y=snap_value_to_grid(point.y, spacing))


def align_right_angle(point: Point, floor: Floor, vertex_index: int) -> Point:
    """Make the edge from the previous vertex axis-aligned.

    Keeps whichever coordinate moved the most relative to the previous vertex.
    """
    polygon = floor.polygon
    if len(polygon) < 2:
        return point
    prev = polygon[(vertex_index - 1) % len(polygon)]
    dx = abs(point.x - prev.x)
    dy = abs(point.y - prev.y)
    if dx < dy:
        return Point(x=prev.x, y=point.y)
    return Point(x=point.x, y=prev.y)


def apply_canvas_constraints(
    point: Point,
    vertex_index: int,
    modes: DrawingModes,
    floor: Floor | None = None,
) -> Point:
    """Grid snap, then right-angle alignment, then whole-mm rounding."""
    result = point
    if modes.grid_snap:
        result = snap_point_to_grid(result, modes.grid_spacing)
    if modes.right_angle and floor is not None:
        result = align_right_angle(result, floor, vertex_index)
    return Point(x=round(result.x), y=round(result.y))
