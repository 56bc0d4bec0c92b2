"""Plan dimension layout.

For each side of an outline (top, bottom, left, right) this produces up to
two annotation lines parallel to the side:

- a *total* line spanning the whole side, labelled with its length
- a *segment* line with a tick at every jog boundary and a label per
  sub-length, emitted only when the side steps in or out

Edges are assigned to a side by their dominant direction and outward
normal. Collinear edges that touch are merged first, so a straight side
split by a redundant vertex still gets only a total line.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict

from outline_builder.config import DimensionSettings
from outline_builder.models.floor import EdgeDimension
from outline_builder.models.geometry import Point, outward_normal, polygon_orientation, round_point

Side = Literal["top", "bottom", "left", "right"]
Orientation = Literal["horizontal", "vertical"]

SIDES: tuple[Side, ...] = ("top", "bottom", "left", "right")
EPSILON = 1e-6


class DimensionTick(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    start: Point
    end: Point


class DimensionLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    position: Point
    side: Side


class DimensionLineData(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    start: Point
    end: Point
    ticks: list[DimensionTick]
    labels: list[DimensionLabel]
    orientation: Orientation
    side: Side


class PlanDimensionGroup(BaseModel):
    """Annotations for one side. Either line may be None."""

    model_config = ConfigDict(frozen=True)

    id: str
    side: Side
    orientation: Orientation
    segment: DimensionLineData | None = None
    total: DimensionLineData | None = None


@dataclass
class _Projection:
    """An edge projected onto its side's axis."""

    index: int
    side: Side
    orientation: Orientation
    start: float
    end: float
    base: float  # mean perpendicular coordinate
    offset: float


@dataclass
class _Sequence:
    side: Side
    orientation: Orientation
    start: float
    end: float
    outer: float
    max_offset: float
    runs: list[tuple[float, float]]

    @property
    def id(self) -> str:
        return f"{self.side}-sequence"


def _project(
    index: int, start: Point, end: Point, offset: float, orientation_sign: int
) -> _Projection:
    dx = end.x - start.x
    dy = end.y - start.y
    nx, ny = outward_normal(start, end, orientation_sign)
    if abs(dy) <= abs(dx):
        return _Projection(
            index=index,
            side="top" if ny < 0 else "bottom",
            orientation="horizontal",
            start=min(start.x, end.x),
            end=max(start.x, end.x),
            base=(start.y + end.y) / 2,
            offset=max(0.0, offset),
        )
    return _Projection(
        index=index,
        side="left" if nx < 0 else "right",
        orientation="vertical",
        start=min(start.y, end.y),
        end=max(start.y, end.y),
        base=(start.x + end.x) / 2,
        offset=max(0.0, offset),
    )


def _merge_collinear(edges: list[_Projection]) -> list[tuple[float, float]]:
    """Coalesce touching edges on the same line into runs ``(start, end)``."""
    runs: list[tuple[float, float, float]] = []  # (start, end, base)
    for edge in edges:
        if runs:
            start, end, base = runs[-1]
            if abs(base - edge.base) < EPSILON and edge.start <= end + EPSILON:
                runs[-1] = (start, max(end, edge.end), base)
                continue
        runs.append((edge.start, edge.end, edge.base))
    return [(start, end) for start, end, _ in runs]


def _build_sequence(side: Side, edges: list[_Projection]) -> _Sequence | None:
    edges = sorted(edges, key=lambda e: (e.base, e.start, e.index))
    start = min(e.start for e in edges)
    end = max(e.end for e in edges)
    if end - start < EPSILON:
        return None

    pick = min if side in ("top", "left") else max
    runs = sorted(_merge_collinear(edges))
    return _Sequence(
        side=side,
        orientation=edges[0].orientation,
        start=start,
        end=end,
        outer=pick(e.base for e in edges),
        max_offset=max(e.offset for e in edges),
        runs=runs,
    )


class _LineBuilder:
    """Geometry of one dimension line for a side sequence."""

    def __init__(self, sequence: _Sequence, kind: str, settings: DimensionSettings):
        self.sequence = sequence
        self.kind = kind
        self.settings = settings
        gap = settings.segment_gap if kind == "segment" else settings.total_gap
        self.direction = -1 if sequence.side in ("top", "left") else 1
        self.coord = sequence.outer + self.direction * (sequence.max_offset + gap)
        scale = settings.total_label_scale if kind == "total" else 1.0
        self.label_offset = settings.label_offset * scale
        self.prefix = f"{sequence.id}-{kind}"

    def point(self, along: float, across: float) -> Point:
        if self.sequence.orientation == "horizontal":
            return round_point(Point(x=along, y=across))
        return round_point(Point(x=across, y=along))

    def ticks(self, positions: Sequence[float]) -> list[DimensionTick]:
        half = self.settings.tick_length / 2
        return [
            DimensionTick(
                id=f"{self.prefix}-tick-{i}",
                start=self.point(position, self.coord - half),
                end=self.point(position, self.coord + half),
            )
            for i, position in enumerate(positions)
        ]

    def label(self, suffix: str, text: str, along: float) -> DimensionLabel:
        return DimensionLabel(
            id=f"{self.prefix}-label-{suffix}",
            text=text,
            position=self.point(along, self.coord + self.direction * self.label_offset),
            side=self.sequence.side,
        )

    def line(self, ticks: list[DimensionTick], labels: list[DimensionLabel]) -> DimensionLineData:
        return DimensionLineData(
            id=self.prefix,
            start=self.point(self.sequence.start, self.coord),
            end=self.point(self.sequence.end, self.coord),
            ticks=ticks,
            labels=labels,
            orientation=self.sequence.orientation,
            side=self.sequence.side,
        )


def _boundaries(sequence: _Sequence) -> list[float]:
    values: list[float] = []
    for value in sorted(
        [sequence.start, sequence.end] + [v for run in sequence.runs for v in run]
    ):
        if not values or value - values[-1] >= EPSILON:
            values.append(value)
    return values


def _segment_line(sequence: _Sequence, settings: DimensionSettings) -> DimensionLineData | None:
    boundaries = _boundaries(sequence)
    if len(boundaries) <= 2:
        return None

    builder = _LineBuilder(sequence, "segment", settings)
    labels = []
    for i, (a, b) in enumerate(zip(boundaries, boundaries[1:])):
        length = round(b - a)
        if length <= 0:
            continue
        labels.append(builder.label(str(i), str(length), (a + b) / 2))
    if not labels:
        return None
    return builder.line(builder.ticks(boundaries), labels)


def _total_line(sequence: _Sequence, settings: DimensionSettings) -> DimensionLineData:
    builder = _LineBuilder(sequence, "total", settings)
    total = round(sequence.end - sequence.start)
    label = builder.label("total", str(total), (sequence.start + sequence.end) / 2)
    return builder.line(builder.ticks([sequence.start, sequence.end]), [label])


def build_plan_dimension_groups(
    polygon: Sequence[Point],
    dimensions: Sequence[EdgeDimension],
    settings: DimensionSettings | None = None,
) -> list[PlanDimensionGroup]:
    """Dimension annotations for every side of an outline, in the order
    top, bottom, left, right. Sides without edges are omitted."""
    settings = settings or DimensionSettings()
    n = len(polygon)
    if n < 2 or len(dimensions) != n:
        return []

    orientation_sign = polygon_orientation(polygon)
    by_side: dict[Side, list[_Projection]] = {}
    for i in range(n):
        projection = _project(
            i, polygon[i], polygon[(i + 1) % n], dimensions[i].offset, orientation_sign
        )
        by_side.setdefault(projection.side, []).append(projection)

    groups = []
    for side in SIDES:
        edges = by_side.get(side)
        if not edges:
            continue
        sequence = _build_sequence(side, edges)
        if sequence is None:
            continue
        segment = _segment_line(sequence, settings) if len(sequence.runs) > 1 else None
        groups.append(
            PlanDimensionGroup(
                id=side,
                side=side,
                orientation=sequence.orientation,
                segment=segment,
                total=_total_line(sequence, settings),
            )
        )
    return groups
