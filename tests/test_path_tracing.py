"""
Tests for contour tracing (Moore-Neighbor, square tracing, smoothed)
"""
import numpy as np
import pytest

from rastertrace.settings import PathTracingConfig
from rastertrace.tracers import (
    MooreNeighborTracer,
    SmoothedTracer,
    SquareTracer,
    get_path_tracer,
    trace_all_paths,
)
from rastertrace.tracers.smoothed_tracer import segment_distance, simplify_points, smooth_points
from rastertrace.types import BoundingBox, Path, PathTracingAlgorithm, Point


def line_mask(length, width=12, height=5, row=1, start=1):
    mask = np.zeros((height, width), dtype=bool)
    mask[row, start:start + length] = True
    return mask


class TestPath:
    """Tests for Path construction and SVG data"""

    def test_closed_when_ends_touch(self):
        path = Path.from_points([Point(0, 0), Point(1, 0), Point(1, 1)])
        assert path.is_closed

    def test_two_points_never_closed(self):
        assert not Path.from_points([Point(0, 0), Point(1, 0)]).is_closed

    def test_open_when_ends_apart(self):
        path = Path.from_points([Point(0, 0), Point(1, 0), Point(2, 0)])
        assert not path.is_closed

    def test_bounding_box(self):
        path = Path.from_points([Point(3, 4), Point(1, 7), Point(5, 2)])
        assert path.bounding_box == BoundingBox(1, 2, 5, 7)

    def test_svg_data(self):
        closed = Path.from_points([Point(0, 0), Point(1, 0), Point(1, 1)])
        assert closed.to_svg_data() == "M 0 0 L 1 0 L 1 1 Z"
        assert Path.from_points([Point(0, 0), Point(4, 0)]).to_svg_data() == "M 0 0 L 4 0"
        assert Path.from_points([Point(0, 0)]).to_svg_data() == ""

    def test_empty_sentinel(self):
        empty = Path.empty()
        assert len(empty) == 0
        assert not empty.is_closed
        assert empty.bounding_box == BoundingBox(0, 0, 0, 0)


class TestMooreNeighborTracer:
    """Tests for Moore-Neighbor tracing"""

    def test_traces_full_outline(self, ring_mask):
        path = MooreNeighborTracer().trace(ring_mask, Point(2, 2))

        assert len(path) == 20
        assert path.points[:3] == (Point(2, 2), Point(3, 2), Point(4, 2))
        assert path.points[-1] == Point(2, 3)
        assert path.is_closed
        assert path.bounding_box == BoundingBox(2, 2, 7, 7)
        assert len(set(path.points)) == len(path)

    def test_marks_visited(self, ring_mask):
        visited = np.zeros_like(ring_mask)
        MooreNeighborTracer().trace(ring_mask, Point(2, 2), visited)
        np.testing.assert_array_equal(visited, ring_mask)

    def test_skips_claimed_pixels(self, ring_mask):
        visited = np.zeros_like(ring_mask)
        visited[2, 5] = True
        path = MooreNeighborTracer().trace(ring_mask, Point(2, 2), visited)
        assert Point(5, 2) not in path.points
        assert path.points[-1] == Point(4, 2)

    def test_follows_diagonals(self):
        mask = np.eye(6, dtype=bool)
        path = MooreNeighborTracer().trace(mask, Point(0, 0))
        assert path.points == tuple(Point(i, i) for i in range(6))
        assert not path.is_closed

    def test_non_edge_start_gives_empty_path(self, ring_mask):
        assert len(MooreNeighborTracer().trace(ring_mask, Point(0, 0))) == 0


class TestSquareTracer:
    """Tests for square tracing"""

    def test_traces_full_outline(self, ring_mask):
        path = SquareTracer().trace(ring_mask, Point(2, 2))
        assert len(path) == 20
        assert path.points[5] == Point(7, 2)
        assert path.points[6] == Point(7, 3)
        assert path.is_closed

    def test_does_not_step_diagonally(self):
        mask = np.eye(4, dtype=bool)
        path = SquareTracer().trace(mask, Point(0, 0))
        assert path.points == (Point(0, 0),)


class TestSmoothedTracer:
    """Tests for the smoothed (custom) tracer"""

    def test_short_edge_gives_empty_path(self):
        """A 5-pixel edge is below the default minimum of 10 points"""
        tracer = SmoothedTracer(PathTracingConfig(min_path_length=10))
        path = tracer.trace(line_mask(5), Point(1, 1))
        assert path == Path.empty()

    def test_straight_line_simplifies_to_endpoints(self):
        tracer = SmoothedTracer(PathTracingConfig(min_path_length=0))
        path = tracer.trace(line_mask(5), Point(1, 1))
        assert path.points == (Point(1, 1), Point(5, 1))
        assert not path.is_closed

    def test_outline_keeps_corners(self, ring_mask):
        config = PathTracingConfig(smoothing_factor=0, simplification_threshold=0, min_path_length=0)
        path = SmoothedTracer(config).trace(ring_mask, Point(2, 2))
        assert path.points == (Point(2, 2), Point(7, 2), Point(7, 7), Point(2, 7), Point(2, 3))
        assert path.is_closed

    def test_smoothing_uses_raw_neighbours(self):
        points = [Point(0, 0), Point(1, 2), Point(2, 0)]
        assert smooth_points(points, 0.5) == [Point(0, 0), Point(1, 1), Point(2, 0)]
        assert smooth_points(points, 0) == points

    def test_smoothing_rounds_half_up(self):
        points = [Point(0, 0), Point(1, 0), Point(0, 1)]
        assert smooth_points(points, 0.5)[1] == Point(1, 0)

    def test_short_paths_pass_through(self):
        points = [Point(0, 0), Point(3, 3)]
        assert smooth_points(points, 0.9) == points
        assert simplify_points(points, 100) == points

    def test_simplify_drops_points_near_segment(self):
        points = [Point(0, 0), Point(1, 1), Point(2, 0), Point(6, 0)]
        assert simplify_points(points, 2.0) == [Point(0, 0), Point(6, 0)]
        assert simplify_points(points, 0.9) == [Point(0, 0), Point(1, 1), Point(6, 0)]

    def test_segment_distance(self):
        assert segment_distance(Point(1, 1), Point(0, 0), Point(2, 0)) == pytest.approx(1.0)
        assert segment_distance(Point(5, 4), Point(0, 0), Point(2, 0)) == pytest.approx(5.0)
        assert segment_distance(Point(3, 4), Point(0, 0), Point(0, 0)) == pytest.approx(5.0)


class TestTraceAllPaths:
    """Tests for the tracing driver"""

    @pytest.mark.parametrize("variant", ["moore-neighbor", "square-tracing"])
    def test_raw_tracers_cover_every_edge_pixel_once(self, variant):
        rng = np.random.default_rng(3)
        mask = rng.random((20, 25)) < 0.3
        config = PathTracingConfig(variant=variant, min_path_length=0)

        paths = trace_all_paths(mask, get_path_tracer(config), config)

        points = [p for path in paths for p in path.points]
        assert len(points) == len(set(points))
        assert set(points) == {Point(int(x), int(y)) for y, x in np.argwhere(mask)}

    def test_min_path_length_filters(self, ring_mask):
        mask = ring_mask.copy()
        mask[0, 9] = True  # isolated pixel
        config = PathTracingConfig(variant="moore-neighbor", min_path_length=2)
        paths = trace_all_paths(mask, get_path_tracer(config), config)
        assert len(paths) == 1
        assert len(paths[0]) == 20

    def test_empty_mask(self):
        config = PathTracingConfig()
        assert trace_all_paths(np.zeros((5, 5), dtype=bool), get_path_tracer(config), config) == []

    def test_closure_contract_holds(self):
        rng = np.random.default_rng(11)
        mask = rng.random((30, 30)) < 0.4
        config = PathTracingConfig(variant="moore-neighbor", min_path_length=3)
        for path in trace_all_paths(mask, get_path_tracer(config), config):
            first, last = path.points[0], path.points[-1]
            touching = abs(first.x - last.x) <= 1 and abs(first.y - last.y) <= 1
            assert path.is_closed == touching


class TestTracerFactory:
    """Tests for get_path_tracer"""

    @pytest.mark.parametrize("variant,cls", [
        (PathTracingAlgorithm.MOORE_NEIGHBOR, MooreNeighborTracer),
        (PathTracingAlgorithm.SQUARE_TRACING, SquareTracer),
        (PathTracingAlgorithm.CUSTOM, SmoothedTracer),
    ])
    def test_factory_returns_variant(self, variant, cls):
        assert isinstance(get_path_tracer(PathTracingConfig(variant=variant)), cls)
