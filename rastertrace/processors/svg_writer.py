from pathlib import Path as FilePath
from typing import List, Sequence, Union

from ..settings import RenderConfig
from ..types import Color, ColorMode, Path, Region

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _number(value: float) -> str:
    """Shortest text for a number: whole values without a decimal point."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _stop(offset: str, color: Color) -> str:
    return (
        f'      <stop offset="{offset}" style="stop-color:{color.to_rgb()};'
        f'stop-opacity:{_number(color.opacity)}" />'
    )


def _gradient_defs(regions: Sequence[Region]) -> List[str]:
    """One two-stop linear gradient per region, ids gradient-0, gradient-1, ..."""
    lines = ["  <defs>"]
    for i, region in enumerate(regions):
        color = region.average_color
        lines.append(f'    <linearGradient id="gradient-{i}" x1="0%" y1="0%" x2="100%" y2="100%">')
        lines.append(_stop("0%", color))
        lines.append(_stop("100%", color))
        lines.append("    </linearGradient>")
    lines.append("  </defs>")
    return lines


def _region_to_rect(region: Region) -> str:
    box = region.bounding_box
    color = region.average_color
    return (
        f'  <rect x="{box.min_x}" y="{box.min_y}" width="{box.width}" height="{box.height}" '
        f'fill="{color.to_rgb()}" opacity="{_number(color.opacity)}" />'
    )


def stroke_color(color_mode: ColorMode) -> str:
    return "#000000" if color_mode == ColorMode.BINARY else "#ffffff"


def _path_to_element(path: Path, render: RenderConfig) -> str:
    stroke_width = max(1, render.path_precision)
    return (
        f'  <path d="{path.to_svg_data()}" stroke="{stroke_color(render.color_mode)}" '
        f'stroke-width="{stroke_width}" fill="none" />'
    )


def build_svg(
    width: int,
    height: int,
    regions: Sequence[Region],
    paths: Sequence[Path],
    render: RenderConfig | None = None,
) -> str:
    """
    Render regions and paths as an SVG document.

    Regions are painted first, in the given order, as bounding-box rectangles
    filled with their average color; edge paths are stroked on top. Paths
    with fewer than 2 points are skipped.

    Args:
        width: Canvas width in pixels
        height: Canvas height in pixels
        regions: Regions in paint order
        paths: Traced edge paths
        render: Stroke settings

    Returns:
        SVG document as a string
    """
    render = render or RenderConfig()

    lines = [
        f'<svg xmlns="{SVG_NAMESPACE}" viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}">'
    ]
    lines.extend(_gradient_defs(regions))
    lines.extend(_region_to_rect(region) for region in regions)
    lines.extend(_path_to_element(path, render) for path in paths if len(path) >= 2)
    lines.append("</svg>")
    return "\n".join(lines)


def count_path_elements(svg: str) -> int:
    """Number of <path> elements in an SVG document."""
    return svg.count("<path")


def write_svg(output_path: Union[str, FilePath], svg: str) -> str:
    """
    Write an SVG document to disk.

    Returns:
        Path to the output SVG file
    """
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(svg)
    return str(output_path)
