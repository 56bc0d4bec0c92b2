"""Tests for the plan eave outline."""

import pytest

from outline_builder.edits.polygon import create_dimensions
from outline_builder.models.geometry import Point
from outline_builder.queries.eaves import build_eave_segments, eave_corners, eave_extents

RECT = [Point(x=0, y=0), Point(x=6000, y=0), Point(x=6000, y=4000), Point(x=0, y=4000)]


def dims(polygon, offsets):
    return [
        d.model_copy(update={"offset": o})
        for d, o in zip(create_dimensions("floor-1", polygon), offsets)
    ]


class TestUniformOffset:
    def test_one_segment_per_edge_with_color(self):
        segments = build_eave_segments(RECT, dims(RECT, [600] * 4), "#2563eb")
        assert len(segments) == 4
        assert all(s.color == "#2563eb" for s in segments)
        assert [s.edge_id for s in segments] == [
            "floor-1-edge-1",
            "floor-1-edge-2",
            "floor-1-edge-3",
            "floor-1-edge-4",
        ]

    def test_mitred_corners(self):
        segments = build_eave_segments(RECT, dims(RECT, [600] * 4))
        assert segments[0].points == (Point(x=-600, y=-600), Point(x=6600, y=-600))
        assert segments[1].points == (Point(x=6600, y=-600), Point(x=6600, y=4600))

    def test_outline_closes(self):
        segments = build_eave_segments(RECT, dims(RECT, [600] * 4))
        assert segments[0].points[0] == segments[-1].points[1]

    def test_closes_for_convex_pentagon(self):
        pentagon = [
            Point(x=0, y=0), Point(x=4000, y=0), Point(x=5000, y=2000),
            Point(x=2000, y=4000), Point(x=-1000, y=2000),
        ]
        segments = build_eave_segments(pentagon, dims(pentagon, [450] * 5))
        assert len(segments) == 5
        assert segments[0].points[0] == segments[-1].points[1]
        for a, b in zip(segments, segments[1:]):
            assert a.points[1] == b.points[0]

    def test_winding_does_not_matter(self):
        reversed_rect = list(reversed(RECT))
        segments = build_eave_segments(reversed_rect, dims(reversed_rect, [500] * 4))
        ys = [p.y for s in segments for p in s.points]
        xs = [p.x for s in segments for p in s.points]
        assert min(ys) == -500
        assert max(ys) == 4500
        assert min(xs) == -500
        assert max(xs) == 6500


class TestZeroOffsets:
    def test_all_zero_is_empty(self):
        assert build_eave_segments(RECT, dims(RECT, [0] * 4)) == []

    def test_connectors_around_zero_edges(self):
        segments = build_eave_segments(RECT, dims(RECT, [600, 0, 600, 0]))
        assert [s.edge_id for s in segments] == [
            "floor-1-edge-1",
            "floor-1-edge-2-connector-in",
            "floor-1-edge-2-connector-out",
            "floor-1-edge-3",
            "floor-1-edge-4-connector-in",
            "floor-1-edge-4-connector-out",
        ]
        connector = segments[1]
        assert connector.points == (Point(x=6000, y=-600), Point(x=6000, y=0))

    def test_isolated_zero_edge_emits_nothing(self):
        segments = build_eave_segments(RECT, dims(RECT, [500, 0, 0, 0]))
        ids = [s.edge_id for s in segments]
        # edge 3 has zero-offset neighbours on both sides
        assert not any(i.startswith("floor-1-edge-3") for i in ids)
        assert ids == [
            "floor-1-edge-1",
            "floor-1-edge-2-connector-in",
            "floor-1-edge-4-connector-out",
        ]


class TestDegenerateInput:
    def test_too_few_vertices(self):
        line = RECT[:2]
        assert build_eave_segments(line, dims(line, [500, 500])) == []

    def test_dimension_count_mismatch(self):
        assert build_eave_segments(RECT, dims(RECT, [500] * 4)[:3]) == []

    def test_corners_fall_back_for_parallel_neighbours(self):
        # Vertex 1 sits between two collinear edges
        polygon = [Point(x=0, y=0), Point(x=3000, y=0), Point(x=6000, y=0), Point(x=3000, y=3000)]
        corners = eave_corners(polygon, dims(polygon, [0, 200, 0, 0]))
        assert corners[1] == Point(x=3000, y=-200)


class TestExtents:
    def test_one_sided_overhang(self):
        offsets = dims(RECT, [500, 0, 0, 0])
        y = eave_extents(RECT, offsets, "y")
        x = eave_extents(RECT, offsets, "x")
        assert (y.low, y.high) == (500, 0)
        assert (x.low, x.high) == (0, 0)

    @pytest.mark.parametrize("axis", ["x", "y"])
    def test_no_offsets(self, axis):
        extents = eave_extents(RECT, dims(RECT, [0] * 4), axis)
        assert extents.low == 0
        assert extents.high == 0
