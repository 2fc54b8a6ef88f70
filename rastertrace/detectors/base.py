from abc import ABC, abstractmethod

import numpy as np

from ..settings import EdgeDetectionConfig
from ..types import EdgeDetectionResult, Raster


class EdgeDetector(ABC):
    """Abstract base class for edge detectors."""

    def __init__(self, config: EdgeDetectionConfig | None = None):
        self.config = config or EdgeDetectionConfig()

    @abstractmethod
    def detect(self, raster: Raster) -> EdgeDetectionResult:
        """
        Detect edges in a raster.

        Args:
            raster: Source image

        Returns:
            EdgeDetectionResult with a boolean mask shaped (height, width) and
            the gradient magnitude/direction used to produce it
        """
        pass


def empty_result(raster: Raster) -> EdgeDetectionResult:
    """All-false mask and zero gradients for rasters without interior pixels."""
    shape = (raster.height, raster.width)
    return EdgeDetectionResult(
        mask=np.zeros(shape, dtype=bool),
        magnitude=np.zeros(shape, dtype=np.float64),
        direction=np.zeros(shape, dtype=np.float64),
    )


def has_interior(raster: Raster) -> bool:
    return raster.width >= 3 and raster.height >= 3
