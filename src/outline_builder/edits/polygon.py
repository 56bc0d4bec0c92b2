"""Polygon-level mutations and the edge dimension model.

These functions work on bare vertex lists and raise ``OutlineError``
subclasses when an edit would break a polygon invariant. The building-level
edits in ``edits.building`` catch those errors and report them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from outline_builder.errors import GeometryError, NotFoundError, RangeError
from outline_builder.models.floor import EdgeDimension
from outline_builder.models.geometry import Point, distance, integer_point, polygon_problem


# Largest accepted vertex coordinate (mm)
MAX_COORDINATE = 1e9


def vertex_at(x: float, y: float) -> Point:
    """Whole-mm vertex, or RangeError for NaN, infinite or out-of-bounds input."""
    if not all(math.isfinite(v) and abs(v) <= MAX_COORDINATE for v in (x, y)):
        raise RangeError(
            f"Vertex coordinates must be finite numbers within {MAX_COORDINATE:.0f} mm"
        )
    return integer_point(x, y)


def edge_id_for(floor_id: str, index: int) -> str:
    return f"{floor_id}-edge-{index + 1}"


def create_dimensions(floor_id: str, polygon: Sequence[Point]) -> list[EdgeDimension]:
    """Fresh dimension list: one entry per edge, all offsets zero."""
    return recompute_dimensions(floor_id, polygon)


def recompute_dimensions(
    floor_id: str,
    polygon: Sequence[Point],
    previous: Sequence[EdgeDimension] | None = None,
    sources: Sequence[int | None] | None = None,
) -> list[EdgeDimension]:
    """Rebuild the dimension list after a polygon change.

    ``sources[i]`` is the index vertex ``i`` had before the edit (None for a
    newly inserted vertex). Edge ``i`` keeps its previous offset only if it
    starts at a surviving vertex and ends either at that vertex's former
    successor or at an inserted vertex (the first half of a split edge).
    Without ``sources`` the vertex indices are assumed unchanged.
    """
    n = len(polygon)
    previous = list(previous or [])
    prev_n = len(previous)
    if sources is None and prev_n == n:
        sources = list(range(n))

    dimensions: list[EdgeDimension] = []
    for i in range(n):
        nxt = polygon[(i + 1) % n]
        offset = 0.0
        if sources is not None and prev_n:
            src = sources[i]
            src_next = sources[(i + 1) % n]
            if src is not None and src < prev_n and (
                src_next is None or src_next == (src + 1) % prev_n
            ):
                offset = previous[src].offset
        dimensions.append(
            EdgeDimension(
                edge_id=edge_id_for(floor_id, i),
                length=round(distance(polygon[i], nxt)),
                offset=offset,
            )
        )
    return dimensions


def _checked(polygon: list[Point], action: str) -> list[Point]:
    problem = polygon_problem(polygon)
    if problem is not None:
        raise GeometryError(f"{action} rejected: {problem.lower()}")
    return polygon


def _require_index(polygon: Sequence[Point], index: int, what: str) -> None:
    if not 0 <= index < len(polygon):
        raise NotFoundError(f"{what} index {index} out of range (0-{len(polygon) - 1})")


def move_vertex_in_polygon(
    polygon: Sequence[Point], vertex_index: int, point: Point
) -> list[Point]:
    """Move one vertex to ``point`` (rounded to whole mm)."""
    _require_index(polygon, vertex_index, "Vertex")
    result = list(polygon)
    result[vertex_index] = vertex_at(point.x, point.y)
    return _checked(result, "Vertex move")


def insert_vertex_in_polygon(
    polygon: Sequence[Point], edge_index: int, point: Point
) -> tuple[list[Point], list[int | None]]:
    """Insert ``point`` on edge ``edge_index`` (wrapping), i.e. after its start vertex.

    Returns the new polygon and the vertex source map for
    ``recompute_dimensions``.
    """
    n = len(polygon)
    if n < 2:
        raise GeometryError("Polygon has too few vertices to insert into")
    index = edge_index % n
    result = list(polygon)
    result.insert(index + 1, vertex_at(point.x, point.y))
    sources: list[int | None] = list(range(index + 1)) + [None] + list(range(index + 1, n))
    return _checked(result, "Vertex insertion"), sources


def remove_vertex_from_polygon(
    polygon: Sequence[Point], vertex_index: int
) -> tuple[list[Point], list[int | None]]:
    """Delete one vertex; at least 3 must remain."""
    if len(polygon) <= 3:
        raise GeometryError("Polygon needs at least 3 vertices")
    _require_index(polygon, vertex_index, "Vertex")
    result = list(polygon)
    del result[vertex_index]
    sources: list[int | None] = [i for i in range(len(polygon)) if i != vertex_index]
    return _checked(result, "Vertex removal"), sources


def set_edge_length(
    polygon: Sequence[Point], edge_index: int, new_length: float
) -> list[Point]:
    """Move the end vertex of an edge along start->end so the edge measures
    ``new_length``. The start vertex and all other vertices stay put."""
    if not new_length > 0:
        raise RangeError("Edge length must be positive")
    _require_index(polygon, edge_index, "Edge")

    n = len(polygon)
    end_index = (edge_index + 1) % n
    start = polygon[edge_index]
    end = polygon[end_index]
    dx = end.x - start.x
    dy = end.y - start.y
    magnitude = (dx * dx + dy * dy) ** 0.5
    if magnitude == 0:
        raise GeometryError("Edge has zero length; direction is undefined")

    factor = new_length / magnitude
    result = list(polygon)
    result[end_index] = vertex_at(start.x + dx * factor, start.y + dy * factor)
    return _checked(result, "Edge length change")
