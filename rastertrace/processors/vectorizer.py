"""
Raster to SVG conversion pipeline.

This module wires the stages together:
1. Edge detection (Sobel, Canny or adaptive Canny)
2. Contour tracing over the edge mask
3. Region growing, optionally on a k-means quantized copy of the raster
4. Hierarchical ordering and merging of similar regions
5. SVG assembly, quality scores and metadata
"""
import logging
import time
from concurrent.futures import ProcessPoolExecutor
from contextlib import contextmanager
from typing import Dict, List, Optional, Sequence

from ..detectors import get_edge_detector
from ..errors import ConversionError
from ..settings import VectorizationSettings, settings_to_dict
from ..tracers import get_path_tracer, trace_all_paths
from ..types import Raster, VectorizationResult
from .kmeans import KMeansColorQuantizer, snap_to_centroids
from .metrics import conversion_metadata, quality_metrics
from .segmentation import detect_regions, merge_similar_regions, organize_regions
from .svg_writer import build_svg

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str, timings: Dict[str, float]):
    """Time a pipeline stage and wrap anything it raises in ConversionError."""
    start = time.perf_counter()
    try:
        yield
    except ConversionError:
        raise
    except Exception as e:
        logger.exception("%s failed", name)
        raise ConversionError(name, str(e)) from e
    finally:
        timings[name] = (time.perf_counter() - start) * 1000
        logger.debug("%s took %.1f ms", name, timings[name])


class VectorAssembler:
    """
    Converts rasters to SVG with a fixed set of settings.

    Best for: flat-color artwork such as logos and icons. Every region is
    painted as its bounding box, so photos come out as overlapping blocks.
    """

    def __init__(self, settings: Optional[VectorizationSettings] = None):
        self.settings = settings or VectorizationSettings()
        self.edge_detector = get_edge_detector(self.settings.edge)
        self.path_tracer = get_path_tracer(self.settings.path)

    def vectorize(self, raster: Raster) -> VectorizationResult:
        """
        Run the full pipeline on one raster.

        Args:
            raster: Source image

        Returns:
            VectorizationResult with the SVG, quality scores, metadata and
            per-stage timings in milliseconds

        Raises:
            ConversionError: if any stage fails
        """
        settings = self.settings
        timings: Dict[str, float] = {}
        start = time.perf_counter()
        logger.info(
            "Vectorizing %r (edge=%s, tracer=%s)",
            raster, settings.edge.variant.value, settings.path.variant.value,
        )

        with _stage("Edge detection", timings):
            edges = self.edge_detector.detect(raster)
        logger.info("Edge detection found %d edge pixels", edges.edge_count)

        with _stage("Path tracing", timings):
            paths = trace_all_paths(edges.mask, self.path_tracer, settings.path)
        logger.info("Path tracing produced %d paths", len(paths))

        source = raster
        if settings.segmentation.use_kmeans:
            with _stage("Color quantization", timings):
                clusters = KMeansColorQuantizer(settings.segmentation).quantize(raster)
                source = snap_to_centroids(raster, clusters)
            logger.info("Color quantization kept %d clusters", len(clusters))

        with _stage("Region segmentation", timings):
            regions = detect_regions(source, settings.segmentation.region_growing_threshold)
            regions = organize_regions(regions, settings.segmentation.hierarchical)
            regions = merge_similar_regions(regions, settings.segmentation.color_similarity_threshold)
        logger.info("Region segmentation produced %d regions", len(regions))

        with _stage("SVG generation", timings):
            svg = build_svg(raster.width, raster.height, regions, paths, settings.render)

        with _stage("Quality metrics", timings):
            elapsed_ms = (time.perf_counter() - start) * 1000
            quality = quality_metrics(svg, elapsed_ms)
            metadata = conversion_metadata(raster, paths, regions)

        logger.info(
            "Vectorization finished in %d ms (%d bytes, %d path points, %d colors)",
            quality.processing_time, quality.file_size, metadata.path_count, metadata.color_count,
        )
        return VectorizationResult(svg=svg, quality=quality, metadata=metadata, timings=timings)


def run_vectorization_pipeline(
    raster: Raster,
    settings: Optional[VectorizationSettings] = None,
) -> VectorizationResult:
    """
    Convert a single raster with the given settings.

    Args:
        raster: Source image
        settings: Conversion settings, defaults when omitted

    Returns:
        VectorizationResult
    """
    settings = settings or VectorizationSettings()
    logger.debug("Settings: %s", settings_to_dict(settings))
    return VectorAssembler(settings).vectorize(raster)


def convert_batch(
    rasters: Sequence[Raster],
    settings: Optional[VectorizationSettings] = None,
    max_workers: Optional[int] = None,
) -> List[VectorizationResult]:
    """
    Convert several rasters, one worker process per image.

    Results come back in input order. ``max_workers=1`` converts inline in
    the calling process. The first failing image raises its ConversionError.
    """
    settings = settings or VectorizationSettings()
    if max_workers == 1 or len(rasters) <= 1:
        return [run_vectorization_pipeline(r, settings) for r in rasters]

    logger.info("Converting %d rasters with up to %s workers", len(rasters), max_workers or "default")
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(run_vectorization_pipeline, rasters, [settings] * len(rasters)))
