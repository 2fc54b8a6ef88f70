#!/usr/bin/env python3
"""
Raster to SVG CLI

Converts an image through: Edge detection → Contour tracing → Segmentation → SVG

Usage:
    python main.py logo.png
    python main.py logo.png -o logo.svg --edge canny --tracer moore-neighbor
    python main.py logo.png --all  # Compare every edge detector / tracer combination
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from rastertrace import config
from rastertrace.errors import ConversionError, InvalidSettingsError, RasterError
from rastertrace.processors import VectorAssembler, load_raster, write_svg
from rastertrace.settings import settings_from_params
from rastertrace.types import EdgeDetectionType, PathTracingAlgorithm

# CLI option -> settings parameter
_OPTION_PARAMS = {
    "edge": "edge",
    "threshold": "threshold",
    "low_threshold": "lowThreshold",
    "high_threshold": "highThreshold",
    "tracer": "tracer",
    "smoothing": "smoothingFactor",
    "simplification": "simplificationThreshold",
    "min_path_length": "minPathLength",
    "clusters": "kMeansClusters",
    "region_threshold": "regionGrowingThreshold",
    "similarity_threshold": "colorSimilarityThreshold",
    "hierarchical": "hierarchical",
    "color_mode": "colorMode",
    "precision": "pathPrecision",
    "seed": "seed",
}


def params_from_args(args: argparse.Namespace) -> dict:
    """Collect the options the user actually passed as settings parameters."""
    params = {}
    for option, key in _OPTION_PARAMS.items():
        value = getattr(args, option)
        if value is not None:
            params[key] = str(value)
    if args.no_blur:
        params["gaussianBlur"] = "false"
    if args.use_kmeans:
        params["useKmeans"] = "true"
    return params


def print_result(result) -> None:
    quality = result.quality
    meta = result.metadata
    print(f"  Accuracy:     {quality.accuracy}")
    print(f"  Smoothness:   {quality.smoothness}")
    print(f"  File size:    {quality.file_size / 1024:.1f} KB")
    print(f"  Time:         {quality.processing_time} ms")
    print(f"  Path points:  {meta.path_count}")
    print(f"  Colors:       {meta.color_count}")


def compare_all(raster, params: dict, output_dir: Path) -> None:
    """Convert with every edge detector / tracer combination and print a summary."""
    output_dir.mkdir(parents=True, exist_ok=True)
    combos = [(e.value, t.value) for e in EdgeDetectionType for t in PathTracingAlgorithm]
    print(f"\nTesting all edge/tracer combinations ({len(combos)} total):")

    results = []
    for edge, tracer in combos:
        name = f"{edge}/{tracer}"
        try:
            print(f"  [{name}] Processing...", end=" ", flush=True)
            settings = settings_from_params({**params, "edge": edge, "tracer": tracer})
            result = VectorAssembler(settings).vectorize(raster)
            output_path = output_dir / f"vec_{edge}_{tracer}.svg"
            write_svg(output_path, result.svg)
            print(f"Done -> {output_path}")
            results.append((name, result, "success"))
        except ConversionError as e:
            print(f"Failed: {e}")
            results.append((name, None, str(e)))

    print(f"\n{'=' * 72}")
    print("SUMMARY - Compare these SVGs to find the best combination:")
    print(f"{'=' * 72}")
    print(f"{'Edge/Tracer':<30} {'Size (KB)':<12} {'Time (ms)':<12} {'Paths':<8} {'Status'}")
    print(f"{'-' * 72}")
    for name, result, status in results:
        if status == "success":
            q = result.quality
            paths = result.svg.count("<path")
            print(f"{name:<30} {q.file_size / 1024:<12.1f} {q.processing_time:<12} {paths:<8} OK")
        else:
            print(f"{name:<30} {'-':<12} {'-':<12} {'-':<8} FAILED")

    print(f"\nAll outputs saved to: {output_dir}")


def main():
    parser = argparse.ArgumentParser(
        description="Convert a raster image to SVG",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input", help="Path to the input image")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output SVG path, or output directory with --all (default: next to the input)",
    )
    parser.add_argument("--edge", choices=[e.value for e in EdgeDetectionType], help="Edge detector")
    parser.add_argument("--threshold", type=float, help="Sobel magnitude threshold")
    parser.add_argument("--low-threshold", type=float, help="Canny low threshold")
    parser.add_argument("--high-threshold", type=float, help="Canny high threshold")
    parser.add_argument("--no-blur", action="store_true", help="Skip the Gaussian blur before Canny")
    parser.add_argument("--tracer", choices=[t.value for t in PathTracingAlgorithm], help="Contour tracer")
    parser.add_argument("--smoothing", type=float, help="Smoothing factor in [0, 1]")
    parser.add_argument("--simplification", type=float, help="Simplification distance threshold")
    parser.add_argument("--min-path-length", type=int, help="Shortest path to keep")
    parser.add_argument("--use-kmeans", action="store_true", help="Quantize colors before region growing")
    parser.add_argument("--clusters", type=int, help="Number of k-means clusters")
    parser.add_argument("--region-threshold", type=float, help="Region growing color distance")
    parser.add_argument("--similarity-threshold", type=float, help="Region merge color distance")
    parser.add_argument("--hierarchical", choices=["stacked", "cutout"], help="Region paint order")
    parser.add_argument("--color-mode", choices=["color", "binary"], help="Stroke color mode")
    parser.add_argument("--precision", type=int, help="Path precision (stroke width)")
    parser.add_argument("--seed", type=int, help="Random seed for k-means")
    parser.add_argument("--all", action="store_true", help="Test all edge/tracer combinations")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        sys.exit(1)

    params = params_from_args(args)
    try:
        settings = settings_from_params(params)
        raster = load_raster(args.input)
    except (InvalidSettingsError, RasterError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    input_path = Path(args.input)
    print(f"Processing: {args.input} ({raster.width}x{raster.height})")

    if args.all:
        output_dir = Path(args.output) if args.output else input_path.parent / f"{input_path.stem}_vectors"
        compare_all(raster, params, output_dir)
        return

    try:
        result = VectorAssembler(settings).vectorize(raster)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output_path = args.output or str(input_path.with_suffix(".svg"))
    write_svg(output_path, result.svg)
    print(f"Wrote {output_path}")

    if args.json:
        print(json.dumps({k: v for k, v in result.to_dict().items() if k != "svg"}, indent=2))
    else:
        print_result(result)


if __name__ == "__main__":
    main()
