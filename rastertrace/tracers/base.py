from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..settings import PathTracingConfig
from ..types import Path, Point


class ContourTracer(ABC):
    """Abstract base class for contour tracers."""

    def __init__(self, config: PathTracingConfig | None = None):
        self.config = config or PathTracingConfig()

    @abstractmethod
    def trace(self, mask: np.ndarray, start: Point, visited: Optional[np.ndarray] = None) -> Path:
        """
        Follow the edge starting at ``start``.

        Args:
            mask: (H, W) boolean edge mask
            start: First pixel of the contour, must be an edge pixel
            visited: Shared (H, W) boolean array of claimed pixels. Claimed
                pixels are never stepped on, and every pixel the tracer walks
                is marked in place. A private array is used when omitted.

        Returns:
            Path of the walked pixels
        """
        pass


def walk(
    mask: np.ndarray,
    start: Point,
    visited: Optional[np.ndarray],
    directions: Sequence[Tuple[int, int]],
    next_search,
) -> List[Point]:
    """
    Generic neighbour walk shared by the raw tracers.

    Each step scans ``directions`` starting at the current search index and
    moves to the first in-bounds, unclaimed edge pixel. ``next_search(i)``
    gives the search index for the following step after moving along
    direction ``i``. Stops when no candidate is left, a pixel repeats or
    width * height steps were taken.
    """
    h, w = mask.shape
    if visited is None:
        visited = np.zeros((h, w), dtype=bool)

    x, y = int(start.x), int(start.y)
    if not (0 <= x < w and 0 <= y < h) or not mask[y, x]:
        return []

    n = len(directions)
    points = [Point(x, y)]
    visited[y, x] = True
    search = 0

    for _ in range(w * h):
        moved = False
        for k in range(n):
            i = (search + k) % n
            dx, dy = directions[i]
            nx = x + dx
            ny = y + dy
            if 0 <= nx < w and 0 <= ny < h and mask[ny, nx] and not visited[ny, nx]:
                x, y = nx, ny
                visited[y, x] = True
                points.append(Point(x, y))
                search = next_search(i)
                moved = True
                break
        if not moved:
            break

    return points
