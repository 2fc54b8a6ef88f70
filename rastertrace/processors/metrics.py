from typing import Sequence

from .. import config
from ..types import ConversionMetadata, Path, QualityMetrics, Raster, Region, round_half_up
from .segmentation import distinct_colors
from .svg_writer import count_path_elements


def _clamp(value: float, bounds) -> float:
    low, high = bounds
    return min(high, max(low, value))


def quality_metrics(svg: str, elapsed_ms: float) -> QualityMetrics:
    """
    Heuristic quality scores for a finished conversion.

    Accuracy drops 10 points per second of processing, smoothness 2 points
    per emitted path element; both are clamped to their configured ranges.
    """
    accuracy = _clamp(100 - (elapsed_ms / 1000) * 10, config.ACCURACY_RANGE)
    smoothness = _clamp(100 - count_path_elements(svg) * 2, config.SMOOTHNESS_RANGE)
    return QualityMetrics(
        accuracy=round_half_up(accuracy),
        smoothness=round_half_up(smoothness),
        file_size=len(svg.encode("utf-8")),
        processing_time=round_half_up(elapsed_ms),
    )


def conversion_metadata(raster: Raster, paths: Sequence[Path], regions: Sequence[Region]) -> ConversionMetadata:
    """Sizes, total path points and distinct region colors."""
    return ConversionMetadata(
        original_size=raster.size,
        vectorized_size=raster.size,
        path_count=sum(len(p) for p in paths),
        color_count=distinct_colors(regions),
    )
