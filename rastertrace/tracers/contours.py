import logging
from typing import List

import numpy as np

from ..settings import PathTracingConfig
from ..types import Path, Point
from .base import ContourTracer

logger = logging.getLogger(__name__)


def trace_all_paths(mask: np.ndarray, tracer: ContourTracer, config: PathTracingConfig) -> List[Path]:
    """
    Extract every contour from an edge mask.

    Edge pixels are visited in row-major order; each one not yet claimed by
    an earlier trace seeds a new one. All traces share a single claimed-pixel
    array, so every edge pixel belongs to at most one path.

    Args:
        mask: (H, W) boolean edge mask
        tracer: Tracer used for every seed
        config: Supplies ``min_path_length``

    Returns:
        Non-empty paths with at least ``min_path_length`` points, in seed order
    """
    mask = np.asarray(mask, dtype=bool)
    visited = np.zeros(mask.shape, dtype=bool)
    paths = []

    for y, x in np.argwhere(mask):
        if visited[y, x]:
            continue
        path = tracer.trace(mask, Point(int(x), int(y)), visited)
        if len(path) > 0 and len(path) >= config.min_path_length:
            paths.append(path)

    logger.debug("Traced %d paths from %d edge pixels", len(paths), int(mask.sum()))
    return paths
