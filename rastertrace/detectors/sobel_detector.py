import logging

from ..types import EdgeDetectionResult, Raster
from .base import EdgeDetector, empty_result, has_interior
from .filters import grayscale, sobel_gradients

logger = logging.getLogger(__name__)


class SobelEdgeDetector(EdgeDetector):
    """
    Edge detector using the 3x3 Sobel operator on luminance.

    A pixel is an edge when its gradient magnitude is strictly greater than
    ``config.threshold``. Border pixels are never evaluated.
    """

    def detect(self, raster: Raster) -> EdgeDetectionResult:
        if not has_interior(raster):
            return empty_result(raster)

        magnitude, direction = sobel_gradients(grayscale(raster.pixels))
        mask = magnitude > self.config.threshold

        logger.debug("Sobel marked %d edge pixels (threshold=%s)", int(mask.sum()), self.config.threshold)
        return EdgeDetectionResult(mask=mask, magnitude=magnitude, direction=direction)
