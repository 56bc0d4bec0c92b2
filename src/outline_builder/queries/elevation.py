"""Elevation projector.

Projects a multi-floor building onto four side views (north, south, east,
west). North and south views look along y and use x as their horizontal
axis; east and west look along x and use y. Plan y grows southwards, so the
north face of a floor is its minimum y.

All floors of one view share a horizontal origin (the leftmost wall or
overhang) so they line up when stacked. Floors stack bottom to top by
summing heights, and the roof is drawn above the topmost floor only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict

from outline_builder.config import DEFAULT_SETTINGS, EngineSettings
from outline_builder.models.building import Building
from outline_builder.models.floor import Floor, RoofConfig
from outline_builder.models.geometry import Point, bounding_box, round3, round_point
from outline_builder.queries.normalize import usable_floors
from outline_builder.queries.roofs import Direction, RoofContext, synthesize_roof

Axis = Literal["x", "y"]

DIRECTIONS: tuple[Direction, ...] = ("north", "south", "east", "west")


class ElevationFloor(BaseModel):
    model_config = ConfigDict(frozen=True)

    floor_id: str
    outline: list[Point]
    fragments: list[tuple[float, float]]
    base: float
    height: float
    roof: RoofConfig
    color: str
    overhang_low: float = 0.0
    overhang_high: float = 0.0


class EaveLine(BaseModel):
    """An overhang seen edge-on, drawn at the floor's ceiling height."""

    model_config = ConfigDict(frozen=True)

    floor_id: str
    edge_id: str
    start: Point
    end: Point
    offset: float


class ElevationDimension(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    start: Point
    end: Point
    label: str
    label_position: Point


class ElevationView(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: Direction
    dimension_label: str
    dimension_value: float
    origin: float
    span: float
    floors: list[ElevationFloor]
    roof_outline: list[Point]
    ridge_height: float
    roof_label: str
    total_height: float
    eave_lines: list[EaveLine] = []
    height_dimensions: list[ElevationDimension] = []
    eave_dimensions: list[ElevationDimension] = []
    show_dimensions: bool = True


class ElevationComputation(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    views: list[ElevationView]
    error: str | None = None


def dimension_label(value: float) -> str:
    return f"|──{round(value)}──|"


def _coord(point: Point, axis: Axis) -> float:
    return point.x if axis == "x" else point.y


def _near(a: float, b: float, tolerance: float) -> bool:
    return abs(a - b) <= tolerance


def side_overhang(floor: Floor, axis: Axis, value: float, tolerance: float) -> float:
    """Largest eave offset among edges lying on the line ``axis == value``."""
    polygon = floor.polygon
    n = len(polygon)
    best = 0.0
    for i, dimension in enumerate(floor.dimensions):
        start, end = polygon[i], polygon[(i + 1) % n]
        if _near(_coord(start, axis), value, tolerance) and _near(
            _coord(end, axis), value, tolerance
        ):
            best = max(best, dimension.offset)
    return best


@dataclass
class _FacingEdge:
    edge_id: str
    start: float
    end: float
    offset: float


@dataclass
class _Projection:
    """One floor as seen from one direction, in plan coordinates."""

    floor: Floor
    box_min: float
    box_max: float
    overhang_low: float
    overhang_high: float
    extent_x: float
    extent_y: float
    facing: list[_FacingEdge] = field(default_factory=list)


def _axes(direction: Direction) -> tuple[Axis, Axis]:
    """(horizontal axis of the view, viewing axis)."""
    return ("x", "y") if direction in ("north", "south") else ("y", "x")


def _project_floor(floor: Floor, direction: Direction, tolerance: float) -> _Projection:
    box = bounding_box(floor.polygon)
    west = side_overhang(floor, "x", box.min_x, tolerance)
    east = side_overhang(floor, "x", box.max_x, tolerance)
    north = side_overhang(floor, "y", box.min_y, tolerance)
    south = side_overhang(floor, "y", box.max_y, tolerance)

    horizontal, depth = _axes(direction)
    if horizontal == "x":
        box_min, box_max, low, high = box.min_x, box.max_x, west, east
    else:
        box_min, box_max, low, high = box.min_y, box.max_y, north, south

    facing_value = {
        "north": box.min_y,
        "south": box.max_y,
        "east": box.max_x,
        "west": box.min_x,
    }[direction]

    projection = _Projection(
        floor=floor,
        box_min=box_min,
        box_max=box_max,
        overhang_low=low,
        overhang_high=high,
        extent_x=box.width + west + east,
        extent_y=box.depth + north + south,
    )
    polygon = floor.polygon
    n = len(polygon)
    for i, dimension in enumerate(floor.dimensions):
        start, end = polygon[i], polygon[(i + 1) % n]
        if not (
            _near(_coord(start, depth), facing_value, tolerance)
            and _near(_coord(end, depth), facing_value, tolerance)
        ):
            continue
        a, b = sorted((_coord(start, horizontal), _coord(end, horizontal)))
        if b - a > 0:
            projection.facing.append(_FacingEdge(dimension.edge_id, a, b, dimension.offset))
    return projection


def merge_spans(spans: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Coalesce overlapping or touching spans, sorted by start."""
    merged: list[tuple[float, float]] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def _build_view(
    floors: list[Floor], direction: Direction, show_dimensions: bool, settings: EngineSettings
) -> ElevationView:
    tolerance = settings.elevation.edge_tolerance
    gap = settings.elevation.dimension_gap
    projections = [_project_floor(f, direction, tolerance) for f in floors]

    origin = min(p.box_min - p.overhang_low for p in projections)
    span = max(p.box_max + p.overhang_high for p in projections) - origin
    wall_span = max(p.box_max for p in projections) - min(p.box_min for p in projections)

    def rel(value: float) -> float:
        return round3(value - origin)

    view_floors: list[ElevationFloor] = []
    eave_lines: list[EaveLine] = []
    height_dims: list[ElevationDimension] = []
    eave_dims: list[ElevationDimension] = []
    roof_range: tuple[float, float] = (0.0, 0.0)
    base = 0.0

    for projection in projections:
        floor = projection.floor
        top = base + floor.height
        start, end = rel(projection.box_min), rel(projection.box_max)

        floor_eaves: list[EaveLine] = []
        for edge in projection.facing:
            if edge.offset <= 0:
                continue
            ext_start = edge.start
            ext_end = edge.end
            if _near(edge.start, projection.box_min, tolerance):
                ext_start -= projection.overhang_low
            if _near(edge.end, projection.box_max, tolerance):
                ext_end += projection.overhang_high
            floor_eaves.append(
                EaveLine(
                    floor_id=floor.id,
                    edge_id=edge.edge_id,
                    start=round_point(Point(x=rel(ext_start), y=top)),
                    end=round_point(Point(x=rel(ext_end), y=top)),
                    offset=edge.offset,
                )
            )

        if floor_eaves:
            fragments = merge_spans([(rel(e.start), rel(e.end)) for e in projection.facing])
        else:
            fragments = [(start, end)]

        if floor_eaves and show_dimensions:
            for line in floor_eaves:
                x = line.end.x + gap
                eave_dims.append(
                    ElevationDimension(
                        id=f"{direction}-{line.edge_id}-eave",
                        start=round_point(Point(x=x, y=top)),
                        end=round_point(Point(x=x, y=top + line.offset)),
                        label=str(round(line.offset)),
                        label_position=round_point(Point(x=x + gap / 2, y=top + line.offset / 2)),
                    )
                )
            x = min(line.start.x for line in floor_eaves) - gap
            height_dims.append(
                ElevationDimension(
                    id=f"{direction}-{floor.id}-height",
                    start=round_point(Point(x=x, y=base)),
                    end=round_point(Point(x=x, y=top)),
                    label=str(round(floor.height)),
                    label_position=round_point(Point(x=x - gap / 2, y=base + floor.height / 2)),
                )
            )

        # Overwritten per floor; the roof sits on the last one
        if floor_eaves:
            roof_range = (
                min(line.start.x for line in floor_eaves),
                max(line.end.x for line in floor_eaves),
            )
        else:
            roof_range = (
                rel(projection.box_min - projection.overhang_low),
                rel(projection.box_max + projection.overhang_high),
            )

        view_floors.append(
            ElevationFloor(
                floor_id=floor.id,
                outline=[
                    Point(x=start, y=base),
                    Point(x=end, y=base),
                    Point(x=end, y=top),
                    Point(x=start, y=top),
                ],
                fragments=fragments,
                base=base,
                height=floor.height,
                roof=floor.roof,
                color=floor.style.stroke_color,
                overhang_low=projection.overhang_low,
                overhang_high=projection.overhang_high,
            )
        )
        eave_lines.extend(floor_eaves)
        base = top

    top_projection = projections[-1]
    profile = synthesize_roof(
        RoofContext(
            roof=top_projection.floor.roof,
            direction=direction,
            start=roof_range[0],
            end=roof_range[1],
            eave_height=base,
            floor_height=top_projection.floor.height,
            extent_x=top_projection.extent_x,
            extent_y=top_projection.extent_y,
            pyramid_threshold=settings.elevation.pyramid_threshold,
        )
    )

    return ElevationView(
        direction=direction,
        dimension_label=dimension_label(wall_span),
        dimension_value=wall_span,
        origin=origin,
        span=span,
        floors=view_floors,
        roof_outline=profile.points,
        ridge_height=profile.ridge_height,
        roof_label=profile.label,
        total_height=max(base, profile.ridge_height),
        eave_lines=eave_lines,
        height_dimensions=height_dims,
        eave_dimensions=eave_dims,
        show_dimensions=show_dimensions,
    )


def build_elevation_data(
    building: Building, settings: EngineSettings | None = None
) -> ElevationComputation:
    """Four elevation views of a building snapshot.

    Never raises for bad geometry: unusable floors are dropped (or replaced by
    the default rectangle) and the result is flagged ``ok=False``.
    """
    settings = settings or DEFAULT_SETTINGS
    normalized = usable_floors(building)
    show = building.modes.dimension_visible_elevation
    views = [_build_view(normalized.floors, d, show, settings) for d in DIRECTIONS]
    return ElevationComputation(ok=normalized.ok, views=views, error=normalized.error)
