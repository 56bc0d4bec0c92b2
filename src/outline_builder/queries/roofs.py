"""Roof profile synthesis for elevation views.

One function per roof archetype, looked up in ``ROOF_SYNTHESIZERS``. Each
takes a ``RoofContext`` (the eave range in view coordinates, the eave
height and the top floor's plan extents) and returns the roof outline as an
open polyline running from the start eave to the end eave.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict

from outline_builder.models.floor import CardinalDirection, RoofConfig, RoofOrientation, RoofType
from outline_builder.models.geometry import Point, round_point

Direction = Literal["north", "south", "east", "west"]


class RoofProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: list[Point]
    ridge_height: float
    label: str


@dataclass(frozen=True)
class RoofContext:
    """Inputs for one roof outline.

    ``start``/``end`` are view coordinates of the eave range, ``eave_height``
    the absolute height of the top floor's ceiling. ``extent_x``/``extent_y``
    are the top floor's plan extents including overhangs.
    """

    roof: RoofConfig
    direction: Direction
    start: float
    end: float
    eave_height: float
    floor_height: float
    extent_x: float
    extent_y: float
    pyramid_threshold: float = 50.0

    @property
    def horizontal_axis(self) -> Literal["x", "y"]:
        return "x" if self.direction in ("north", "south") else "y"

    @property
    def ridge_delta(self) -> float:
        """Declared ridge height above the floor's ceiling."""
        return max(0.0, self.roof.ridge_height - self.floor_height)

    def extent(self, axis: Literal["x", "y"]) -> float:
        return self.extent_x if axis == "x" else self.extent_y


def _pt(x: float, y: float) -> Point:
    return round_point(Point(x=x, y=y))


def _profile(points: list[Point], label: str) -> RoofProfile:
    return RoofProfile(points=points, ridge_height=max(p.y for p in points), label=label)


def _pitch_label(roof: RoofConfig) -> str:
    value = roof.slope_value
    text = str(int(value)) if float(value).is_integer() else f"{value:g}"
    return f"10/{text}"


def _rectangle(ctx: RoofContext, rise: float) -> list[Point]:
    h = ctx.eave_height
    return [_pt(ctx.start, h), _pt(ctx.start, h + rise), _pt(ctx.end, h + rise), _pt(ctx.end, h)]


def _triangle(ctx: RoofContext, rise: float) -> list[Point]:
    h = ctx.eave_height
    mid = (ctx.start + ctx.end) / 2
    return [_pt(ctx.start, h), _pt(mid, h + rise), _pt(ctx.end, h)]


def flat_roof(ctx: RoofContext) -> RoofProfile:
    parapet = ctx.roof.parapet_height
    h = ctx.eave_height
    if parapet > 0:
        return _profile(_rectangle(ctx, parapet), f"parapet {round(parapet)}")
    return _profile([_pt(ctx.start, h), _pt(ctx.end, h)], "flat")


def mono_roof(ctx: RoofContext) -> RoofProfile:
    """Single pitch falling towards ``low_side_direction``."""
    low_side = ctx.roof.low_side_direction
    run_axis: Literal["x", "y"] = (
        "y" if low_side in (CardinalDirection.NORTH, CardinalDirection.SOUTH) else "x"
    )
    rise = max(ctx.ridge_delta, ctx.roof.slope * ctx.extent(run_axis))
    label = _pitch_label(ctx.roof)

    if run_axis != ctx.horizontal_axis:
        # Pitch runs towards or away from the viewer
        return _profile(_rectangle(ctx, rise), label)

    h = ctx.eave_height
    # North and west are the low ends of the y and x axes
    low_at_start = low_side in (CardinalDirection.NORTH, CardinalDirection.WEST)
    if low_at_start:
        points = [_pt(ctx.start, h), _pt(ctx.end, h + rise), _pt(ctx.end, h)]
    else:
        points = [_pt(ctx.start, h), _pt(ctx.start, h + rise), _pt(ctx.end, h)]
    return _profile(points, label)


def _ridge_rise(ctx: RoofContext) -> tuple[float, bool]:
    """Rise of a two-sided roof and whether the ridge runs across the view."""
    cross_axis: Literal["x", "y"] = (
        "x" if ctx.roof.orientation == RoofOrientation.NORTH_SOUTH else "y"
    )
    half_span = ctx.extent(cross_axis) / 2
    rise = max(ctx.ridge_delta, ctx.roof.slope * half_span)
    return rise, cross_axis == ctx.horizontal_axis


def gable_roof(ctx: RoofContext) -> RoofProfile:
    rise, gable_end = _ridge_rise(ctx)
    points = _triangle(ctx, rise) if gable_end else _rectangle(ctx, rise)
    return _profile(points, _pitch_label(ctx.roof))


def hip_roof(ctx: RoofContext) -> RoofProfile:
    """Like a gable, but the ridge is shortened by the hip run at both ends.

    A ridge shorter than ``pyramid_threshold`` collapses into a single apex.
    """
    rise, across = _ridge_rise(ctx)
    label = _pitch_label(ctx.roof)
    if across:
        return _profile(_triangle(ctx, rise), label)

    span = ctx.end - ctx.start
    cross_axis: Literal["x", "y"] = "y" if ctx.horizontal_axis == "x" else "x"
    slope = ctx.roof.slope
    inset = rise / slope if slope > 0 else ctx.extent(cross_axis) / 2
    inset = min(inset, span / 2)
    if span - 2 * inset < ctx.pyramid_threshold:
        return _profile(_triangle(ctx, rise), label)

    h = ctx.eave_height
    points = [
        _pt(ctx.start, h),
        _pt(ctx.start + inset, h + rise),
        _pt(ctx.end - inset, h + rise),
        _pt(ctx.end, h),
    ]
    return _profile(points, label)


ROOF_SYNTHESIZERS: dict[RoofType, Callable[[RoofContext], RoofProfile]] = {
    RoofType.FLAT: flat_roof,
    RoofType.MONO: mono_roof,
    RoofType.GABLE: gable_roof,
    RoofType.HIP: hip_roof,
}


def synthesize_roof(ctx: RoofContext) -> RoofProfile:
    return ROOF_SYNTHESIZERS[ctx.roof.type](ctx)
