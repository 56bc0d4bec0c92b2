"""Eave (roof overhang) outline in plan.

Each edge is pushed outward by its offset; adjacent offset lines are
mitred by intersecting them. Runs of offset edges are joined back to the
wall with short connector segments where a zero-offset edge interrupts
them. Coordinates are rounded to 3 decimals.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict

from outline_builder.models.floor import EdgeDimension
from outline_builder.models.geometry import (
    Point,
    bounding_box,
    intersect_lines,
    outward_normal,
    polygon_orientation,
    round_point,
)


class RenderedEaveSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    edge_id: str
    color: str
    points: tuple[Point, Point]


class EaveExtents(BaseModel):
    """How far the eave outline reaches past the wall box on one axis."""

    model_config = ConfigDict(frozen=True)

    axis: Literal["x", "y"]
    low: float
    high: float


def _offset_line(start: Point, end: Point, offset: float, orientation: int) -> tuple[Point, Point]:
    length = math.hypot(end.x - start.x, end.y - start.y)
    if length == 0:
        return round_point(start), round_point(end)
    nx, ny = outward_normal(start, end, orientation)
    shift_x = nx * offset / length
    shift_y = ny * offset / length
    return (
        round_point(Point(x=start.x + shift_x, y=start.y + shift_y)),
        round_point(Point(x=end.x + shift_x, y=end.y + shift_y)),
    )


def eave_corners(polygon: Sequence[Point], dimensions: Sequence[EdgeDimension]) -> list[Point]:
    """Mitre point at every vertex: intersection of the two adjacent offset lines.

    Parallel neighbours fall back to the start of the vertex's own offset line.
    """
    n = len(polygon)
    orientation = polygon_orientation(polygon)
    lines = [
        _offset_line(polygon[i], polygon[(i + 1) % n], dimensions[i].offset, orientation)
        for i in range(n)
    ]
    corners = []
    for i, line in enumerate(lines):
        prev = lines[i - 1]
        corner = intersect_lines(prev[0], prev[1], line[0], line[1])
        corners.append(corner if corner is not None else line[0])
    return corners


def build_eave_segments(
    polygon: Sequence[Point],
    dimensions: Sequence[EdgeDimension],
    stroke_color: str = "#000000",
) -> list[RenderedEaveSegment]:
    """Renderable eave segments for one floor outline.

    Returns an empty list for degenerate input (fewer than 3 vertices or a
    dimension list out of step with the edges).
    """
    n = len(polygon)
    if n < 3 or len(dimensions) != n:
        return []

    corners = eave_corners(polygon, dimensions)
    segments: list[RenderedEaveSegment] = []

    def emit(edge_id: str, a: Point, b: Point) -> None:
        segments.append(RenderedEaveSegment(edge_id=edge_id, color=stroke_color, points=(a, b)))

    for i, dimension in enumerate(dimensions):
        nxt = (i + 1) % n
        if dimension.offset > 0:
            emit(dimension.edge_id, corners[i], corners[nxt])
            continue
        if dimensions[i - 1].offset > 0:
            emit(f"{dimension.edge_id}-connector-in", corners[i], round_point(polygon[i]))
        if dimensions[nxt].offset > 0:
            emit(f"{dimension.edge_id}-connector-out", round_point(polygon[nxt]), corners[nxt])
    return segments


def eave_extents(
    polygon: Sequence[Point],
    dimensions: Sequence[EdgeDimension],
    axis: Literal["x", "y"],
) -> EaveExtents:
    """Overhang of the eave outline below the box minimum and above its maximum."""
    segments = build_eave_segments(polygon, dimensions)
    if not segments:
        return EaveExtents(axis=axis, low=0.0, high=0.0)

    box = bounding_box(polygon)
    values = [getattr(p, axis) for s in segments for p in s.points]
    box_min, box_max = (box.min_x, box.max_x) if axis == "x" else (box.min_y, box.max_y)
    return EaveExtents(
        axis=axis,
        low=max(0.0, box_min - min(values)),
        high=max(0.0, max(values) - box_max),
    )
