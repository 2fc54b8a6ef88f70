"""
Tests for k-means color quantization
"""
import numpy as np
import pytest

from rastertrace.processors.kmeans import (
    KMeansColorQuantizer,
    kmeans_step,
    quantize_colors,
    snap_to_centroids,
    unique_colors,
)
from rastertrace.settings import SegmentationConfig
from rastertrace.types import BoundingBox, Color

from .conftest import BLUE, GREEN, RED, YELLOW


def gray_strip(make_raster, values):
    arr = np.array([[[v, v, v, 255] for v in values]], dtype=np.uint8)
    return make_raster(arr)


class TestUniqueColors:
    """Tests for color deduplication"""

    def test_first_seen_order(self, quadrant_raster):
        colors = unique_colors(quadrant_raster, 0)
        assert [tuple(c) for c in colors.tolist()] == [RED, GREEN, BLUE, YELLOW]

    def test_similar_colors_collapse(self, make_raster):
        colors = unique_colors(gray_strip(make_raster, [0, 10, 50, 0]), 30)
        assert [c[0] for c in colors.tolist()] == [0, 50]

    def test_similarity_is_strict(self, make_raster):
        arr = np.array([[[0, 0, 0, 255], [30, 0, 0, 255]]], dtype=np.uint8)
        assert len(unique_colors(make_raster(arr), 30)) == 2


class TestKMeansColorQuantizer:
    """Tests for the quantizer"""

    def test_one_cluster_per_color_when_k_is_large(self, quadrant_raster):
        clusters = quantize_colors(quadrant_raster, SegmentationConfig(k_means_clusters=8))

        assert [c.centroid for c in clusters] == [Color(*RED), Color(*GREEN), Color(*BLUE), Color(*YELLOW)]
        assert [c.members for c in clusters] == [
            (Color(*RED),), (Color(*GREEN),), (Color(*BLUE),), (Color(*YELLOW),)
        ]
        assert clusters[0].bounding_box == BoundingBox(0, 0, 3, 3)
        assert clusters[3].bounding_box == BoundingBox(4, 4, 7, 7)

    def test_two_groups(self, make_raster):
        raster = gray_strip(make_raster, [0, 10, 20, 230, 240, 250])
        config = SegmentationConfig(k_means_clusters=2, color_similarity_threshold=0)

        clusters = KMeansColorQuantizer(config).quantize(raster)

        centroids = sorted(c.centroid for c in clusters)
        assert centroids == [Color(10, 10, 10, 255), Color(240, 240, 240, 255)]
        for cluster in clusters:
            assert len(cluster.members) == 3
            xs = 0 if cluster.centroid.r == 10 else 3
            assert cluster.bounding_box == BoundingBox(xs, 0, xs + 2, 0)

    def test_seed_makes_result_deterministic(self, make_raster):
        rng = np.random.default_rng(1)
        raster = make_raster(rng.integers(0, 256, size=(10, 10, 4)))
        config = SegmentationConfig(k_means_clusters=5, color_similarity_threshold=0, random_seed=42)

        first = quantize_colors(raster, config)
        second = quantize_colors(raster, config)
        assert first == second
        assert len(first) == 5

    def test_converged_centroids_stay_put(self, make_raster):
        rng = np.random.default_rng(2)
        centers = np.array([[20, 20, 200, 255], [200, 40, 40, 255], [90, 220, 90, 255]])
        samples = centers[rng.integers(0, 3, size=150)] + rng.integers(-12, 13, size=(150, 4))
        samples[:, 3] = 255
        raster = make_raster(np.clip(samples, 0, 255).reshape(10, 15, 4))
        config = SegmentationConfig(k_means_clusters=3, color_similarity_threshold=0, convergence_threshold=5)

        quantizer = KMeansColorQuantizer(config)
        colors = unique_colors(raster, 0)
        rng_init = np.random.default_rng(config.random_seed)
        init = colors[rng_init.choice(len(colors), size=3, replace=False)]
        centroids, _, iterations = quantizer.fit(colors, init)

        assert iterations < config.max_iterations
        _, _, movement = kmeans_step(colors, centroids)
        assert movement <= config.convergence_threshold

    def test_max_iterations_bounds_the_loop(self, make_raster):
        raster = gray_strip(make_raster, [0, 10, 20, 230, 240, 250])
        config = SegmentationConfig(k_means_clusters=2, color_similarity_threshold=0, max_iterations=1)
        colors = unique_colors(raster, 0)
        _, _, iterations = KMeansColorQuantizer(config).fit(colors, colors[:2])
        assert iterations == 1

    def test_empty_raster(self, make_raster):
        assert quantize_colors(make_raster(np.zeros((0, 0, 4)))) == []


class TestKMeansStep:
    def test_empty_cluster_keeps_centroid(self):
        colors = np.array([[0, 0, 0, 255], [2, 0, 0, 255]])
        centroids = np.array([[1, 0, 0, 255], [250, 250, 250, 255]])
        labels, updated, movement = kmeans_step(colors, centroids)

        assert labels.tolist() == [0, 0]
        assert updated.tolist() == [[1, 0, 0, 255], [250, 250, 250, 255]]
        assert movement == 0.0

    def test_ties_go_to_first_centroid(self):
        colors = np.array([[5, 0, 0, 255]])
        centroids = np.array([[0, 0, 0, 255], [10, 0, 0, 255]])
        labels, _, _ = kmeans_step(colors, centroids)
        assert labels.tolist() == [0]

    def test_means_round_half_up(self):
        colors = np.array([[0, 0, 0, 255], [1, 0, 0, 255]])
        _, updated, movement = kmeans_step(colors, np.array([[0, 0, 0, 255]]))
        assert updated.tolist() == [[1, 0, 0, 255]]
        assert movement == pytest.approx(1.0)


class TestSnapToCentroids:
    def test_pixels_take_centroid_colors(self, make_raster):
        raster = gray_strip(make_raster, [0, 10, 20, 230, 240, 250])
        config = SegmentationConfig(k_means_clusters=2, color_similarity_threshold=0)
        snapped = snap_to_centroids(raster, quantize_colors(raster, config))

        assert snapped.size == raster.size
        assert [c.r for c in snapped.colors()] == [10, 10, 10, 240, 240, 240]

    def test_no_clusters_returns_input(self, quadrant_raster):
        assert snap_to_centroids(quadrant_raster, []) is quadrant_raster
