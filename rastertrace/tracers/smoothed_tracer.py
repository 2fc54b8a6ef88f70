"""
Smoothed contour tracer.

Walks the edge with Moore-Neighbor tracing, then pulls every interior point
towards its neighbours and drops points that stay close to the line through
their surroundings.
"""
import math
from typing import List, Optional, Sequence

import numpy as np

from ..types import Path, Point, round_half_up
from .base import ContourTracer
from .moore_tracer import trace_moore


class SmoothedTracer(ContourTracer):
    """
    Moore-Neighbor tracing followed by smoothing and simplification.

    Best for: noisy edges where a stair-stepped poly-line would bloat the SVG.
    Paths that end up shorter than ``min_path_length`` come back as the empty
    Path.
    """

    def trace(self, mask: np.ndarray, start: Point, visited: Optional[np.ndarray] = None) -> Path:
        raw = trace_moore(mask, start, visited)
        smoothed = smooth_points(raw, self.config.smoothing_factor)
        simplified = simplify_points(smoothed, self.config.simplification_threshold)

        if len(simplified) < self.config.min_path_length:
            return Path.empty()
        return Path.from_points(simplified)


def smooth_points(points: Sequence[Point], factor: float) -> List[Point]:
    """
    Weighted average of each interior point with its two raw neighbours.

    Endpoints are kept as they are; paths with fewer than 3 points are
    returned unchanged.
    """
    points = list(points)
    if len(points) < 3:
        return points

    factor = max(0.0, min(1.0, factor))
    smoothed = [points[0]]
    for prev, current, nxt in zip(points, points[1:], points[2:]):
        x = current.x * (1 - factor) + (prev.x + nxt.x) * 0.5 * factor
        y = current.y * (1 - factor) + (prev.y + nxt.y) * 0.5 * factor
        smoothed.append(Point(round_half_up(x), round_half_up(y)))
    smoothed.append(points[-1])
    return smoothed


def simplify_points(points: Sequence[Point], threshold: float) -> List[Point]:
    """
    Single forward pass: keep an interior point when it lies further than
    ``threshold`` from the segment joining the last kept point and its
    successor. First and last points are always kept.
    """
    points = list(points)
    if len(points) < 3:
        return points

    simplified = [points[0]]
    last = points[0]
    for current, nxt in zip(points[1:-1], points[2:]):
        if segment_distance(current, last, nxt) > threshold:
            simplified.append(current)
            last = current
    simplified.append(points[-1])
    return simplified


def segment_distance(point: Point, start: Point, end: Point) -> float:
    """Euclidean distance from ``point`` to the segment start-end."""
    ax = point.x - start.x
    ay = point.y - start.y
    cx = end.x - start.x
    cy = end.y - start.y

    length_sq = cx * cx + cy * cy
    if length_sq == 0:
        return math.hypot(ax, ay)

    t = (ax * cx + ay * cy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(point.x - (start.x + t * cx), point.y - (start.y + t * cy))
