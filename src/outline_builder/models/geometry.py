"""Geometric primitives and the polygon kernel.

Polygons are plain ``list[Point]`` sequences, implicitly closed (the last
vertex connects back to the first). Coordinates are millimeters.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """2D point in plan or elevation space (millimeters)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return math.isclose(self.x, other.x, abs_tol=1e-6) and math.isclose(
            self.y, other.y, abs_tol=1e-6
        )

    def __hash__(self) -> int:
        return hash((round(self.x, 6), round(self.y, 6)))


class Point3D(BaseModel):
    """3D point (millimeters), z up."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float

    def distance_to(self, other: Point3D) -> float:
        """Euclidean distance to another point."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )


class BoundingBox(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def depth(self) -> float:
        return self.max_y - self.min_y


def round3(value: float) -> float:
    """Round to 3 decimals; the engine's rounding point for derived geometry."""
    return round(value * 1000) / 1000


def round_point(point: Point) -> Point:
    return Point(x=round3(point.x), y=round3(point.y))


def integer_point(x: float, y: float) -> Point:
    """Point snapped to whole millimeters, as stored after every mutation."""
    return Point(x=round(x), y=round(y))


def distance(a: Point, b: Point) -> float:
    return a.distance_to(b)


def signed_area(polygon: Sequence[Point]) -> float:
    """Shoelace sum divided by two. Sign encodes the winding direction."""
    n = len(polygon)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += polygon[i].x * polygon[j].y
        area -= polygon[j].x * polygon[i].y
    return area / 2.0


def polygon_area(polygon: Sequence[Point]) -> float:
    """Absolute enclosed area."""
    return abs(signed_area(polygon))


def polygon_orientation(polygon: Sequence[Point]) -> int:
    """Winding sign of the polygon: +1 when the shoelace sum is >= 0, else -1."""
    return 1 if signed_area(polygon) >= 0 else -1


def outward_normal(start: Point, end: Point, orientation: int) -> tuple[float, float]:
    """Unnormalized outward normal of edge start->end for the given winding."""
    dx = end.x - start.x
    dy = end.y - start.y
    if orientation > 0:
        return dy, -dx
    return -dy, dx


def bounding_box(polygon: Sequence[Point]) -> BoundingBox:
    """Axis-aligned bounding box. An empty polygon yields a zero box at the origin."""
    if not polygon:
        return BoundingBox(min_x=0, max_x=0, min_y=0, max_y=0)
    xs = [p.x for p in polygon]
    ys = [p.y for p in polygon]
    return BoundingBox(min_x=min(xs), max_x=max(xs), min_y=min(ys), max_y=max(ys))


def _cross(p: Point, q: Point, r: Point) -> float:
    return (q.x - p.x) * (r.y - p.y) - (q.y - p.y) * (r.x - p.x)


def _on_segment(p: Point, q: Point, r: Point) -> bool:
    """True if q lies inside the bounding box of segment p-r."""
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """Proper crossing or collinear overlap/touch between two segments."""
    d1 = _cross(a1, a2, b1)
    d2 = _cross(a1, a2, b2)
    d3 = _cross(b1, b2, a1)
    d4 = _cross(b1, b2, a2)

    if ((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)) and (
        (d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0)
    ):
        return True

    if d1 == 0 and _on_segment(a1, b1, a2):
        return True
    if d2 == 0 and _on_segment(a1, b2, a2):
        return True
    if d3 == 0 and _on_segment(b1, a1, b2):
        return True
    if d4 == 0 and _on_segment(b1, a2, b2):
        return True
    return False


def has_self_intersection(polygon: Sequence[Point]) -> bool:
    """Check every non-adjacent edge pair, including the wrap-around pair.

    O(n^2); outlines have tens of vertices at most.
    """
    n = len(polygon)
    if n < 4:
        return False

    for i in range(n):
        a1 = polygon[i]
        a2 = polygon[(i + 1) % n]
        for j in range(i + 2, n):
            # Edge n-1 shares vertex 0 with edge 0
            if i == 0 and j == n - 1:
                continue
            if segments_intersect(a1, a2, polygon[j], polygon[(j + 1) % n]):
                return True
    return False


def has_duplicate_vertices(polygon: Sequence[Point]) -> bool:
    """True if any two vertices coincide (within the Point equality tolerance)."""
    return any(
        polygon[i] == polygon[j]
        for i in range(len(polygon))
        for j in range(i + 1, len(polygon))
    )


def polygon_problem(polygon: Sequence[Point]) -> str | None:
    """Describe the first invariant the polygon breaks, or None if it is valid."""
    if len(polygon) < 3:
        return "Polygon must have at least 3 vertices"
    if has_duplicate_vertices(polygon):
        return "Polygon has duplicate vertices"
    if has_self_intersection(polygon):
        return "Polygon edges intersect each other"
    return None


def intersect_lines(
    a_start: Point, a_end: Point, b_start: Point, b_end: Point
) -> Point | None:
    """Intersection of two infinite lines, or None when they are parallel."""
    x1, y1, x2, y2 = a_start.x, a_start.y, a_end.x, a_end.y
    x3, y3, x4, y4 = b_start.x, b_start.y, b_end.x, b_end.y

    denominator = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denominator) < 1e-6:
        return None

    a = x1 * y2 - y1 * x2
    b = x3 * y4 - y3 * x4
    px = (a * (x3 - x4) - (x1 - x2) * b) / denominator
    py = (a * (y3 - y4) - (y1 - y2) * b) / denominator
    return round_point(Point(x=px, y=py))
