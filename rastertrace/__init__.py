"""Raster to SVG vectorization engine."""
from .errors import ConversionError, InvalidSettingsError, RasterError
from .processors import VectorAssembler, convert_batch, load_raster, run_vectorization_pipeline
from .settings import (
    EdgeDetectionConfig,
    PathTracingConfig,
    RenderConfig,
    SegmentationConfig,
    VectorizationSettings,
    settings_from_params,
)
from .types import (
    ColorMode,
    EdgeDetectionType,
    HierarchicalMode,
    PathTracingAlgorithm,
    Raster,
    VectorizationResult,
)

__version__ = "1.0.0"

__all__ = [
    "ConversionError",
    "InvalidSettingsError",
    "RasterError",
    "VectorAssembler",
    "convert_batch",
    "load_raster",
    "run_vectorization_pipeline",
    "EdgeDetectionConfig",
    "PathTracingConfig",
    "RenderConfig",
    "SegmentationConfig",
    "VectorizationSettings",
    "settings_from_params",
    "ColorMode",
    "EdgeDetectionType",
    "HierarchicalMode",
    "PathTracingAlgorithm",
    "Raster",
    "VectorizationResult",
]
