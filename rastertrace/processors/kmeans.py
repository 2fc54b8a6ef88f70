"""
K-means color quantization over the unique colors of a raster.
"""
import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..settings import SegmentationConfig
from ..types import BoundingBox, Cluster, Color, Raster

logger = logging.getLogger(__name__)


class KMeansColorQuantizer:
    """
    Groups the raster's unique colors into at most ``k_means_clusters`` clusters.

    Colors are deduplicated first: exact duplicates collapse, and a color is
    skipped when an already kept color lies closer than
    ``color_similarity_threshold``. When no more unique colors remain than
    clusters requested, every unique color becomes its own cluster.
    Initial centroids are drawn from the unique colors with ``random_seed``.
    """

    def __init__(self, config: SegmentationConfig | None = None):
        self.config = config or SegmentationConfig()

    def quantize(self, raster: Raster) -> List[Cluster]:
        unique = unique_colors(raster, self.config.color_similarity_threshold)
        if len(unique) == 0:
            return []

        k = self.config.k_means_clusters
        if len(unique) <= k:
            centroids = unique.copy()
            labels = np.arange(len(unique))
            logger.debug("%d unique colors, one cluster each", len(unique))
        else:
            rng = np.random.default_rng(self.config.random_seed)
            centroids = unique[rng.choice(len(unique), size=k, replace=False)]
            centroids, labels, iterations = self.fit(unique, centroids)
            logger.debug("K-means over %d colors finished after %d iterations", len(unique), iterations)

        return build_clusters(raster, unique, centroids, labels)

    def fit(self, colors: np.ndarray, centroids: np.ndarray) -> Tuple[np.ndarray, np.ndarray, int]:
        """
        Iterate until centroids move no more than ``convergence_threshold``
        or ``max_iterations`` is reached.

        Returns:
            Tuple of (centroids, labels of the last assignment, iterations run)
        """
        labels = np.zeros(len(colors), dtype=np.int64)
        iteration = 0
        while iteration < self.config.max_iterations:
            labels, centroids, movement = kmeans_step(colors, centroids)
            iteration += 1
            if movement <= self.config.convergence_threshold:
                break
        return centroids, labels, iteration


def quantize_colors(raster: Raster, config: SegmentationConfig | None = None) -> List[Cluster]:
    """Convenience wrapper around KMeansColorQuantizer."""
    return KMeansColorQuantizer(config).quantize(raster)


def unique_colors(raster: Raster, similarity_threshold: float) -> np.ndarray:
    """
    Distinct colors of the raster in first-seen row-major order.

    Returns:
        (U, 4) int64 array
    """
    first_seen = dict.fromkeys(map(tuple, raster.pixels.reshape(-1, 4).tolist()))
    candidates = np.array(list(first_seen), dtype=np.int64).reshape(-1, 4)
    if similarity_threshold <= 0 or len(candidates) == 0:
        return candidates

    limit = similarity_threshold * similarity_threshold
    kept = np.empty_like(candidates)
    count = 0
    for color in candidates:
        if count:
            diff = kept[:count] - color
            if np.min(np.sum(diff * diff, axis=1)) < limit:
                continue
        kept[count] = color
        count += 1
    return kept[:count]


def nearest_centroid(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the closest centroid for every sample; ties go to the lower index."""
    samples = samples.astype(np.float64)
    best = np.zeros(len(samples), dtype=np.int64)
    best_dist = np.full(len(samples), np.inf)
    for i, centroid in enumerate(centroids.astype(np.float64)):
        diff = samples - centroid
        dist = np.sum(diff * diff, axis=1)
        closer = dist < best_dist
        best[closer] = i
        best_dist[closer] = dist[closer]
    return best


def kmeans_step(colors: np.ndarray, centroids: np.ndarray) -> Tuple[np.ndarray, np.ndarray, float]:
    """
    One assignment + update round.

    Empty clusters keep their centroid. Updated centroids are the per-channel
    means rounded half up.

    Returns:
        Tuple of (labels, new centroids, largest centroid movement)
    """
    labels = nearest_centroid(colors, centroids)
    updated = centroids.copy()
    for i in range(len(centroids)):
        members = colors[labels == i]
        if len(members):
            updated[i] = np.floor(members.mean(axis=0) + 0.5)

    shift = updated.astype(np.float64) - centroids.astype(np.float64)
    movement = float(np.sqrt(np.sum(shift * shift, axis=1)).max()) if len(centroids) else 0.0
    return labels, updated, movement


def build_clusters(
    raster: Raster,
    colors: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
) -> List[Cluster]:
    """
    Wrap centroids as Cluster objects.

    A cluster's bounding box spans the raster pixels whose nearest centroid
    it is; clusters that own no pixel get the zero box.
    """
    owners = nearest_centroid(raster.pixels.reshape(-1, 4), centroids).reshape(raster.height, raster.width)

    clusters = []
    for i, centroid in enumerate(centroids.tolist()):
        ys, xs = np.nonzero(owners == i)
        if len(xs):
            box = BoundingBox(int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))
        else:
            box = BoundingBox.empty()
        members = tuple(Color(*c) for c in colors[labels == i].tolist())
        clusters.append(Cluster(centroid=Color(*centroid), members=members, bounding_box=box))
    return clusters


def snap_to_centroids(raster: Raster, clusters: Sequence[Cluster]) -> Raster:
    """Replace every pixel with the color of its nearest cluster centroid."""
    if not clusters:
        return raster
    centroids = np.array([c.centroid for c in clusters], dtype=np.int64)
    owners = nearest_centroid(raster.pixels.reshape(-1, 4), centroids)
    snapped = centroids[owners].astype(np.uint8).reshape(raster.height, raster.width, 4)
    return Raster(raster.width, raster.height, snapped)
