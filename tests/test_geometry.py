"""Tests for geometric primitives and the polygon kernel."""

import math

import pytest

from outline_builder.models.geometry import (
    BoundingBox,
    Point,
    Point3D,
    bounding_box,
    distance,
    has_duplicate_vertices,
    has_self_intersection,
    integer_point,
    intersect_lines,
    outward_normal,
    polygon_area,
    polygon_orientation,
    polygon_problem,
    round3,
    segments_intersect,
    signed_area,
)


def pts(*coords):
    return [Point(x=x, y=y) for x, y in coords]


RECT = pts((0, 0), (6000, 0), (6000, 4000), (0, 4000))
BOWTIE = pts((0, 0), (10, 10), (10, 0), (0, 10))


class TestPoint:
    def test_distance(self):
        assert math.isclose(distance(Point(x=0, y=0), Point(x=3, y=4)), 5.0)

    def test_equality_tolerance(self):
        assert Point(x=1.0, y=2.0) == Point(x=1.0000001, y=2.0000001)

    def test_inequality(self):
        assert Point(x=1.0, y=2.0) != Point(x=1.0, y=3.0)

    def test_hash_equal_points(self):
        assert len({Point(x=1.0, y=2.0), Point(x=1.0, y=2.0)}) == 1

    def test_frozen(self):
        p = Point(x=1, y=2)
        with pytest.raises(Exception):
            p.x = 5

    def test_point3d_distance(self):
        a = Point3D(x=0, y=0, z=0)
        b = Point3D(x=1, y=2, z=2)
        assert math.isclose(a.distance_to(b), 3.0)


class TestRounding:
    def test_round3(self):
        assert round3(1.23456) == 1.235
        assert round3(-0.0004) == 0

    def test_integer_point(self):
        assert integer_point(10.4, 20.6) == Point(x=10, y=21)


class TestOrientation:
    def test_signed_area(self):
        assert signed_area(RECT) == 24_000_000
        assert polygon_area(list(reversed(RECT))) == 24_000_000

    def test_orientation_sign(self):
        assert polygon_orientation(RECT) == 1
        assert polygon_orientation(list(reversed(RECT))) == -1

    def test_degenerate_counts_as_positive(self):
        assert polygon_orientation(pts((0, 0), (1, 1), (2, 2))) == 1

    def test_outward_normal_points_away(self):
        # First edge runs along y=0; outside is y < 0
        nx, ny = outward_normal(RECT[0], RECT[1], polygon_orientation(RECT))
        assert nx == 0
        assert ny < 0

    def test_outward_normal_flips_with_winding(self):
        rev = list(reversed(RECT))
        # rev[2] -> rev[3] is (6000,0) -> (0,0)
        nx, ny = outward_normal(rev[2], rev[3], polygon_orientation(rev))
        assert ny < 0


class TestIntersection:
    def test_crossing_segments(self):
        a1, a2, b1, b2 = pts((0, 0), (10, 10), (0, 10), (10, 0))
        assert segments_intersect(a1, a2, b1, b2)

    def test_touching_endpoint(self):
        a1, a2, b1, b2 = pts((0, 0), (10, 0), (10, 0), (10, 10))
        assert segments_intersect(a1, a2, b1, b2)

    def test_collinear_disjoint(self):
        a1, a2, b1, b2 = pts((0, 0), (10, 0), (20, 0), (30, 0))
        assert not segments_intersect(a1, a2, b1, b2)

    def test_collinear_overlap(self):
        a1, a2, b1, b2 = pts((0, 0), (10, 0), (5, 0), (15, 0))
        assert segments_intersect(a1, a2, b1, b2)

    def test_rectangle_is_simple(self):
        assert not has_self_intersection(RECT)

    def test_bowtie_intersects(self):
        assert has_self_intersection(BOWTIE)

    def test_triangle_never_intersects(self):
        assert not has_self_intersection(pts((0, 0), (10, 0), (5, 5)))

    def test_concave_outline_is_simple(self):
        u_shape = pts(
            (0, 0), (1500, 0), (1500, 3000), (4500, 3000),
            (4500, 0), (6000, 0), (6000, 4000), (0, 4000),
        )
        assert not has_self_intersection(u_shape)


class TestLines:
    def test_intersect_lines(self):
        a1, a2, b1, b2 = pts((0, 0), (10, 0), (5, -5), (5, 5))
        assert intersect_lines(a1, a2, b1, b2) == Point(x=5, y=0)

    def test_intersect_lines_beyond_segments(self):
        a1, a2, b1, b2 = pts((0, -600), (6000, -600), (-600, 4000), (-600, 0))
        assert intersect_lines(a1, a2, b1, b2) == Point(x=-600, y=-600)

    def test_parallel_lines(self):
        a1, a2, b1, b2 = pts((0, 0), (10, 0), (0, 5), (10, 5))
        assert intersect_lines(a1, a2, b1, b2) is None

    def test_result_rounded(self):
        a1, a2, b1, b2 = pts((0, 0), (3, 1), (1, 0), (1, 1))
        p = intersect_lines(a1, a2, b1, b2)
        assert p.y == 0.333


class TestPolygonChecks:
    def test_duplicates(self):
        assert has_duplicate_vertices(pts((0, 0), (10, 0), (10, 0), (0, 10)))
        assert not has_duplicate_vertices(RECT)

    def test_near_duplicates_across_rounding_boundary(self):
        # 4e-7 and 6e-7 round to different 6-decimal grid cells but compare equal
        assert has_duplicate_vertices(pts((4e-7, 0), (10, 0), (6e-7, 0), (0, 10)))

    def test_problem_none_for_valid(self):
        assert polygon_problem(RECT) is None

    def test_problem_messages(self):
        assert "3 vertices" in polygon_problem(pts((0, 0), (1, 0)))
        assert "duplicate" in polygon_problem(pts((0, 0), (1, 0), (1, 0)))
        assert "intersect" in polygon_problem(BOWTIE)


class TestBoundingBox:
    def test_rectangle(self):
        box = bounding_box(RECT)
        assert box == BoundingBox(min_x=0, max_x=6000, min_y=0, max_y=4000)
        assert box.width == 6000
        assert box.depth == 4000

    def test_empty(self):
        box = bounding_box([])
        assert box.width == 0
        assert box.depth == 0
