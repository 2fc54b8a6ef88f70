"""
Pytest configuration and fixtures for rastertrace tests
"""
import numpy as np
import pytest

from rastertrace.types import Raster

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
YELLOW = (255, 255, 0, 255)


def solid(width, height, rgba):
    """(H, W, 4) uint8 array filled with one color"""
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[:, :] = rgba
    return arr


@pytest.fixture
def make_raster():
    """Factory building a Raster from an (H, W, 4) array"""
    def _make(arr):
        return Raster.from_array(np.asarray(arr, dtype=np.uint8))
    return _make


@pytest.fixture
def gray_raster():
    """4x4 uniform mid-gray"""
    return Raster.from_array(solid(4, 4, (128, 128, 128, 255)))


@pytest.fixture
def split_raster():
    """8x8, left half black, right half white"""
    arr = solid(8, 8, (0, 0, 0, 255))
    arr[:, 4:] = (255, 255, 255, 255)
    return Raster.from_array(arr)


@pytest.fixture
def quadrant_raster():
    """8x8 in four 4x4 quadrants: red, green / blue, yellow"""
    arr = solid(8, 8, RED)
    arr[:4, 4:] = GREEN
    arr[4:, :4] = BLUE
    arr[4:, 4:] = YELLOW
    return Raster.from_array(arr)


@pytest.fixture
def square_raster():
    """16x16 black canvas with a white 8x8 square in the middle"""
    arr = solid(16, 16, (0, 0, 0, 255))
    arr[4:12, 4:12] = (255, 255, 255, 255)
    return Raster.from_array(arr)


@pytest.fixture
def ring_mask():
    """10x10 mask holding the 1-pixel outline of the square (2,2)-(7,7)"""
    mask = np.zeros((10, 10), dtype=bool)
    mask[2, 2:8] = True
    mask[7, 2:8] = True
    mask[2:8, 2] = True
    mask[2:8, 7] = True
    return mask
