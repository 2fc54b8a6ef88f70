"""
Tests for the core value types
"""
import numpy as np
import pytest

from rastertrace.errors import RasterError
from rastertrace.types import BoundingBox, Color, Point, Raster, average_color, round_half_up


class TestRaster:
    """Tests for Raster construction"""

    def test_from_flat_bytes(self):
        data = bytes([1, 2, 3, 4, 5, 6, 7, 8])
        raster = Raster(2, 1, data)
        assert raster.size == (2, 1)
        assert raster.color_at(1, 0) == Color(5, 6, 7, 8)
        assert raster.data == data

    def test_from_array(self):
        arr = np.zeros((3, 2, 4), dtype=np.uint8)
        arr[2, 1] = (9, 8, 7, 6)
        raster = Raster.from_array(arr)
        assert (raster.width, raster.height) == (2, 3)
        assert raster.colors()[-1] == Color(9, 8, 7, 6)

    def test_pixels_are_copied_and_read_only(self):
        arr = np.zeros((2, 2, 4), dtype=np.uint8)
        raster = Raster.from_array(arr)
        arr[0, 0] = 255
        assert raster.color_at(0, 0) == Color(0, 0, 0, 0)
        with pytest.raises(ValueError):
            raster.pixels[0, 0, 0] = 1

    def test_length_mismatch(self):
        with pytest.raises(RasterError, match="needs 16"):
            Raster(2, 2, bytes(15))

    def test_negative_dimensions(self):
        with pytest.raises(RasterError):
            Raster(-1, 2, b"")

    def test_wrong_array_shape(self):
        with pytest.raises(RasterError):
            Raster(2, 2, np.zeros((2, 3, 4), dtype=np.uint8))
        with pytest.raises(RasterError):
            Raster.from_array(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_out_of_range_samples(self):
        with pytest.raises(RasterError):
            Raster(1, 1, [0, 0, 300, 255])

    def test_non_numeric_samples(self):
        with pytest.raises(RasterError, match="numeric"):
            Raster(1, 1, ["a", "b", "c", "d"])

    def test_zero_area(self):
        raster = Raster(0, 5, b"")
        assert raster.pixel_count == 0
        assert raster.colors() == []


class TestValueTypes:
    """Tests for colors, points and boxes"""

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2

    def test_color_distance_includes_alpha(self):
        assert Color(0, 0, 0, 0).distance(Color(0, 0, 0, 255)) == 255
        assert Color(3, 4, 0).distance(Color(0, 0, 0)) == 5

    def test_average_color(self):
        assert average_color([Color(0, 0, 0, 255), Color(1, 2, 3, 255)]) == Color(1, 1, 2, 255)
        assert average_color([]) == Color(0, 0, 0, 0)

    def test_bounding_box_is_inclusive(self):
        box = BoundingBox.from_points([Point(2, 3), Point(5, 4)])
        assert (box.width, box.height) == (4, 2)
        assert box.contains(Point(5, 4))
        assert not box.contains(Point(6, 4))

    def test_bounding_box_union(self):
        assert BoundingBox(0, 0, 1, 1).union(BoundingBox(3, -1, 4, 0)) == BoundingBox(0, -1, 4, 1)
