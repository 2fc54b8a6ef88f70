from typing import Optional

import numpy as np

from ..types import Path, Point
from .base import ContourTracer, walk

# Clockwise, starting at the top-left neighbour
MOORE_DIRECTIONS = [(-1, -1), (0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0)]


class MooreNeighborTracer(ContourTracer):
    """
    Moore-Neighbor contour tracing over the 8-connected neighbourhood.

    After moving along direction i the next search starts at the opposite
    direction, (i + 4) mod 8.
    """

    def trace(self, mask: np.ndarray, start: Point, visited: Optional[np.ndarray] = None) -> Path:
        return Path.from_points(trace_moore(mask, start, visited))


def trace_moore(mask: np.ndarray, start: Point, visited: Optional[np.ndarray] = None) -> list:
    """Raw Moore-Neighbor walk, returned as a list of points."""
    return walk(mask, start, visited, MOORE_DIRECTIONS, lambda i: (i + 4) % 8)
