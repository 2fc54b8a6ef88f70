"""
Region segmentation: region growing, hierarchical ordering and merging.
"""
import logging
from collections import deque
from typing import List, Sequence

from ..types import Color, HierarchicalMode, Point, Raster, Region

logger = logging.getLogger(__name__)

# 4-connected neighbourhood in fill order: left, right, up, down
_NEIGHBOURS_4 = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def detect_regions(raster: Raster, threshold: float) -> List[Region]:
    """
    Partition a raster into 4-connected, color-homogeneous regions.

    Seeds are taken in row-major order among unassigned pixels. Each seed is
    flood filled breadth-first; a neighbour joins when its RGBA distance to
    the seed color is at most ``threshold``. A rejected neighbour is only
    skipped for the current fill and can seed or join a later region.

    Args:
        raster: Source image
        threshold: Maximum RGBA Euclidean distance to the seed color

    Returns:
        Regions with sequential ids starting at 0
    """
    w, h = raster.width, raster.height
    samples = raster.pixels.reshape(-1, 4).tolist()
    assigned = [False] * (w * h)
    # fill number that last looked at a pixel
    stamp = [-1] * (w * h)
    threshold_sq = threshold * threshold

    regions = []
    fill = 0
    for seed in range(w * h):
        if assigned[seed]:
            continue

        sr, sg, sb, sa = samples[seed]
        pixels = []
        colors = []
        queue = deque([seed])
        stamp[seed] = fill

        while queue:
            idx = queue.popleft()
            assigned[idx] = True
            x = idx % w
            y = idx // w
            pixels.append(Point(x, y))
            colors.append(Color(*samples[idx]))

            for dx, dy in _NEIGHBOURS_4:
                nx = x + dx
                ny = y + dy
                if not (0 <= nx < w and 0 <= ny < h):
                    continue
                n = ny * w + nx
                if assigned[n] or stamp[n] == fill:
                    continue
                stamp[n] = fill
                r, g, b, a = samples[n]
                dist_sq = (r - sr) ** 2 + (g - sg) ** 2 + (b - sb) ** 2 + (a - sa) ** 2
                if dist_sq <= threshold_sq:
                    queue.append(n)

        fill += 1
        if pixels:
            regions.append(Region.build(len(regions), pixels, colors))

    logger.debug("Region growing produced %d regions (threshold=%s)", len(regions), threshold)
    return regions


def organize_regions(regions: Sequence[Region], mode: HierarchicalMode) -> List[Region]:
    """
    Order regions for painting.

    ``STACKED`` puts the largest regions first so smaller ones are drawn on
    top; ``CUTOUT`` is the reverse. Both sorts are stable.
    """
    if mode == HierarchicalMode.STACKED:
        return sorted(regions, key=lambda r: r.area, reverse=True)
    return sorted(regions, key=lambda r: r.area)


def merge_similar_regions(regions: Sequence[Region], threshold: float) -> List[Region]:
    """
    Greedily merge regions with similar average colors.

    Each unprocessed region becomes a representative and absorbs every later
    unprocessed region whose average color lies within ``threshold`` of its
    own. The merged region keeps the representative's id.
    """
    processed = set()
    merged = []

    for region in regions:
        if region.id in processed:
            continue
        processed.add(region.id)

        group = [region]
        for other in regions:
            if other.id in processed:
                continue
            if region.average_color.distance(other.average_color) <= threshold:
                group.append(other)
                processed.add(other.id)

        merged.append(_merge_group(group) if len(group) > 1 else region)

    logger.debug("Merged %d regions into %d", len(regions), len(merged))
    return merged


def _merge_group(group: Sequence[Region]) -> Region:
    pixels = []
    colors = []
    box = group[0].bounding_box
    for region in group:
        pixels.extend(region.pixels)
        colors.extend(region.colors)
        box = box.union(region.bounding_box)
    return Region.build(group[0].id, pixels, colors, bounding_box=box)


def distinct_colors(regions: Sequence[Region]) -> int:
    """Number of distinct RGBA values over all regions' color lists."""
    seen = set()
    for region in regions:
        seen.update(region.colors)
    return len(seen)
