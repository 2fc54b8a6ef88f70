from ..settings import EdgeDetectionConfig
from ..types import EdgeDetectionType
from .adaptive_detector import AdaptiveEdgeDetector, adaptive_threshold
from .base import EdgeDetector
from .canny_detector import CannyEdgeDetector
from .sobel_detector import SobelEdgeDetector

_DETECTORS = {
    EdgeDetectionType.SOBEL: SobelEdgeDetector,
    EdgeDetectionType.CANNY: CannyEdgeDetector,
    EdgeDetectionType.ADAPTIVE: AdaptiveEdgeDetector,
}


def get_edge_detector(config: EdgeDetectionConfig) -> EdgeDetector:
    """Instantiate the detector selected by ``config.variant``."""
    return _DETECTORS[config.variant](config)


__all__ = [
    "EdgeDetector",
    "SobelEdgeDetector",
    "CannyEdgeDetector",
    "AdaptiveEdgeDetector",
    "adaptive_threshold",
    "get_edge_detector",
]
