from typing import Optional

import numpy as np

from ..types import Path, Point
from .base import ContourTracer, walk

# right, down, left, up
SQUARE_DIRECTIONS = [(1, 0), (0, 1), (-1, 0), (0, -1)]


class SquareTracer(ContourTracer):
    """
    Square tracing over the 4-connected neighbourhood.

    Best for: thin axis-aligned strokes. Diagonal steps are never taken, so
    8-connected edges split into several paths.
    """

    def trace(self, mask: np.ndarray, start: Point, visited: Optional[np.ndarray] = None) -> Path:
        points = walk(mask, start, visited, SQUARE_DIRECTIONS, lambda i: i)
        return Path.from_points(points)
