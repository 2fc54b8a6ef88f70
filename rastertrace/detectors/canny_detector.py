import logging

import numpy as np

from ..types import EdgeDetectionResult, Raster
from .base import EdgeDetector, empty_result, has_interior
from .filters import gaussian_blur, grayscale, sobel_gradients

logger = logging.getLogger(__name__)

# 8-connected neighbourhood used for hysteresis tracking
_NEIGHBOURS_8 = [(-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


class CannyEdgeDetector(EdgeDetector):
    """
    Canny edge detector.

    How it works:
    1. Gaussian blur (fixed 3x3 kernel), unless disabled in the config
    2. Sobel gradients on the blurred image
    3. Non-maximum suppression along the quantized gradient direction
    4. Double threshold + hysteresis: weak pixels survive only when they are
       8-connected to a strong one
    """

    def detect(self, raster: Raster) -> EdgeDetectionResult:
        return self.detect_with_thresholds(
            raster, self.config.low_threshold, self.config.high_threshold
        )

    def detect_with_thresholds(self, raster: Raster, low: float, high: float) -> EdgeDetectionResult:
        if not has_interior(raster):
            return empty_result(raster)

        pixels = raster.pixels
        if self.config.gaussian_blur_enabled:
            pixels = gaussian_blur(pixels)

        magnitude, direction = sobel_gradients(grayscale(pixels))
        suppressed = non_maximum_suppression(magnitude, direction)
        mask = hysteresis_threshold(suppressed, low, high)

        logger.debug(
            "Canny kept %d edge pixels (low=%.2f, high=%.2f)", int(mask.sum()), low, high
        )
        return EdgeDetectionResult(mask=mask, magnitude=magnitude, direction=direction)


def quantize_direction(direction: np.ndarray) -> np.ndarray:
    """
    Bucket gradient directions into 0 (0 deg), 1 (45 deg), 2 (90 deg), 3 (135 deg).
    """
    normalized = np.mod(np.fmod(direction, np.pi) + np.pi, np.pi)
    buckets = np.full(direction.shape, 3, dtype=np.int8)
    buckets[normalized < 5 * np.pi / 8] = 2
    buckets[normalized < 3 * np.pi / 8] = 1
    buckets[(normalized < np.pi / 8) | (normalized >= 7 * np.pi / 8)] = 0
    return buckets


def non_maximum_suppression(magnitude: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """
    Zero every interior magnitude that is exceeded by either neighbour lying
    along its quantized gradient direction.
    """
    h, w = magnitude.shape
    result = np.zeros_like(magnitude)
    if h < 3 or w < 3:
        return result

    m = magnitude
    center = m[1:-1, 1:-1]
    buckets = quantize_direction(direction[1:-1, 1:-1])
    conditions = [buckets == 0, buckets == 1, buckets == 2]

    # (first, second) neighbour per bucket:
    # 0: (x-1, y), (x+1, y)      1: (x-1, y-1), (x+1, y+1)
    # 2: (x, y-1), (x, y+1)      3: (x+1, y-1), (x-1, y+1)
    first = np.select(conditions, [m[1:-1, :-2], m[:-2, :-2], m[:-2, 1:-1]], default=m[:-2, 2:])
    second = np.select(conditions, [m[1:-1, 2:], m[2:, 2:], m[2:, 1:-1]], default=m[2:, :-2])

    is_local_max = (first <= center) & (second <= center)
    result[1:-1, 1:-1] = np.where(is_local_max, center, 0.0)
    return result


def hysteresis_threshold(magnitude: np.ndarray, low: float, high: float) -> np.ndarray:
    """
    Double thresholding with edge tracking by hysteresis.

    Strong pixels (>= high) seed the edge set, which then grows through every
    8-connected strong or weak (low <= m < high) pixel. Uses an explicit stack,
    so large connected edges do not hit the recursion limit.
    """
    h, w = magnitude.shape
    strong = magnitude >= high
    weak = (magnitude >= low) & (magnitude < high)
    passable = (strong | weak).tolist()

    result = np.zeros((h, w), dtype=bool)
    visited = [[False] * w for _ in range(h)]
    stack = [(int(y), int(x)) for y, x in np.argwhere(strong)]
    stack.reverse()

    while stack:
        y, x = stack.pop()
        if visited[y][x]:
            continue
        visited[y][x] = True
        result[y, x] = True

        for dx, dy in _NEIGHBOURS_8:
            nx = x + dx
            ny = y + dy
            if 0 <= nx < w and 0 <= ny < h and passable[ny][nx] and not visited[ny][nx]:
                stack.append((ny, nx))

    return result
