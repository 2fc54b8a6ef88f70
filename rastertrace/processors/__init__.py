from .kmeans import KMeansColorQuantizer, quantize_colors, snap_to_centroids
from .loader import load_raster, raster_from_image
from .metrics import conversion_metadata, quality_metrics
from .segmentation import detect_regions, merge_similar_regions, organize_regions
from .svg_writer import build_svg, write_svg
from .vectorizer import VectorAssembler, convert_batch, run_vectorization_pipeline

__all__ = [
    "KMeansColorQuantizer",
    "quantize_colors",
    "snap_to_centroids",
    "load_raster",
    "raster_from_image",
    "conversion_metadata",
    "quality_metrics",
    "detect_regions",
    "organize_regions",
    "merge_similar_regions",
    "build_svg",
    "write_svg",
    "VectorAssembler",
    "run_vectorization_pipeline",
    "convert_batch",
]
