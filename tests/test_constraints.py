"""Tests for drag constraints (grid snap, right angle)."""

from outline_builder.edits.constraints import (
    align_right_angle,
    apply_canvas_constraints,
    snap_point_to_grid,
    snap_value_to_grid,
)
from outline_builder.generators.shell import create_initial_building
from outline_builder.models.building import DrawingModes
from outline_builder.models.geometry import Point


class TestGridSnap:
    def test_snap_value(self):
        assert snap_value_to_grid(149, 100) == 100
        assert snap_value_to_grid(151, 100) == 200

    def test_invalid_spacing_only_rounds(self):
        assert snap_value_to_grid(149.6, 0) == 150

    def test_snap_point(self):
        assert snap_point_to_grid(Point(x=1234, y=5678), 500) == Point(x=1000, y=5500)


class TestRightAngle:
    def test_keeps_dominant_axis(self):
        floor = create_initial_building().floors[0]
        # Previous vertex of index 2 is (6000, 0)
        assert align_right_angle(Point(x=6100, y=3900), floor, 2) == Point(x=6000, y=3900)
        assert align_right_angle(Point(x=3000, y=100), floor, 2) == Point(x=3000, y=0)

    def test_wraps_to_last_vertex(self):
        floor = create_initial_building().floors[0]
        # Previous vertex of index 0 is (0, 4000)
        assert align_right_angle(Point(x=50, y=1000), floor, 0) == Point(x=0, y=1000)


class TestApplyConstraints:
    def test_no_modes_rounds(self):
        result = apply_canvas_constraints(Point(x=10.4, y=20.6), 0, DrawingModes())
        assert result == Point(x=10, y=21)

    def test_snap_then_align(self):
        floor = create_initial_building().floors[0]
        modes = DrawingModes(grid_snap=True, right_angle=True, grid_spacing=100)
        result = apply_canvas_constraints(Point(x=6040, y=3960), 2, modes, floor)
        assert result == Point(x=6000, y=4000)

    def test_right_angle_needs_floor(self):
        modes = DrawingModes(right_angle=True)
        assert apply_canvas_constraints(Point(x=5, y=7), 1, modes) == Point(x=5, y=7)
