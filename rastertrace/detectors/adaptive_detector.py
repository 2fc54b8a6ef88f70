import logging
from dataclasses import replace

from .. import config
from ..types import EdgeDetectionResult, EdgeDetectionType, Raster
from .base import EdgeDetector, empty_result, has_interior
from .canny_detector import CannyEdgeDetector
from .filters import intensity_statistics

logger = logging.getLogger(__name__)


def adaptive_threshold(raster: Raster) -> float:
    """
    Image-wide threshold: clamp(mean + 1.5 * stddev, 10, 255) of grayscale intensity.
    """
    mean, stddev = intensity_statistics(raster.pixels)
    threshold = mean + config.ADAPTIVE_STDDEV_FACTOR * stddev
    return min(config.ADAPTIVE_MAX_THRESHOLD, max(config.ADAPTIVE_MIN_THRESHOLD, threshold))


class AdaptiveEdgeDetector(EdgeDetector):
    """
    Canny with thresholds derived from the image statistics.

    Best for: inputs whose contrast is unknown up front. The high threshold is
    the adaptive threshold, the low threshold half of it.
    """

    def detect(self, raster: Raster) -> EdgeDetectionResult:
        if not has_interior(raster):
            return empty_result(raster)

        threshold = adaptive_threshold(raster)
        logger.debug("Adaptive threshold for %r: %.2f", raster, threshold)

        canny = CannyEdgeDetector(replace(self.config, variant=EdgeDetectionType.CANNY))
        return canny.detect_with_thresholds(raster, 0.5 * threshold, threshold)
