"""Core types shared by every vectorization stage."""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .errors import RasterError


class EdgeDetectionType(str, Enum):
    SOBEL = "sobel"
    CANNY = "canny"
    ADAPTIVE = "adaptive"


class PathTracingAlgorithm(str, Enum):
    MOORE_NEIGHBOR = "moore-neighbor"
    SQUARE_TRACING = "square-tracing"
    CUSTOM = "custom"


class ColorMode(Enum):
    COLOR = 0
    BINARY = 1


class HierarchicalMode(Enum):
    STACKED = 0
    CUTOUT = 1


def round_half_up(value: float) -> int:
    """Round a non-negative value the way the web client did (0.5 goes up)."""
    return int(math.floor(value + 0.5))


class Color(NamedTuple):
    """RGBA sample, every channel in [0, 255]."""
    r: int
    g: int
    b: int
    a: int = 255

    def distance(self, other: "Color") -> float:
        """Euclidean distance in RGBA space."""
        dr = self.r - other.r
        dg = self.g - other.g
        db = self.b - other.b
        da = self.a - other.a
        return math.sqrt(dr * dr + dg * dg + db * db + da * da)

    def to_rgb(self) -> str:
        return f"rgb({self.r},{self.g},{self.b})"

    @property
    def opacity(self) -> float:
        return self.a / 255


def average_color(colors: Sequence[Color]) -> Color:
    """Per-channel rounded mean; transparent black for an empty sequence."""
    n = len(colors)
    if n == 0:
        return Color(0, 0, 0, 0)
    r = g = b = a = 0
    for c in colors:
        r += c.r
        g += c.g
        b += c.b
        a += c.a
    return Color(
        round_half_up(r / n),
        round_half_up(g / n),
        round_half_up(b / n),
        round_half_up(a / n),
    )


class Point(NamedTuple):
    """Integer pixel coordinate."""
    x: int
    y: int


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive pixel extent."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def empty(cls) -> "BoundingBox":
        return cls(0, 0, 0, 0)

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "BoundingBox":
        xs = []
        ys = []
        for p in points:
            xs.append(p.x)
            ys.append(p.y)
        if not xs:
            return cls.empty()
        return cls(min(xs), min(ys), max(xs), max(ys))

    def union(self, other: "BoundingBox") -> "BoundingBox":
        return BoundingBox(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1


class Raster:
    """
    Immutable view of width x height RGBA samples.

    Accepts either a flat row-major RGBA byte sequence (4 bytes per pixel, no
    padding) or an array already shaped (height, width, 4). The samples are
    copied into a read-only uint8 array.
    """

    def __init__(self, width: int, height: int, data):
        if width < 0 or height < 0:
            raise RasterError(f"Raster dimensions must be non-negative, got {width}x{height}")

        if isinstance(data, (bytes, bytearray, memoryview)):
            flat = np.frombuffer(data, dtype=np.uint8)
        else:
            arr = np.asarray(data)
            if arr.ndim == 3:
                if arr.shape != (height, width, 4):
                    raise RasterError(
                        f"Expected array of shape {(height, width, 4)}, got {arr.shape}"
                    )
            if not np.issubdtype(arr.dtype, np.number):
                raise RasterError(f"RGBA samples must be numeric, got dtype {arr.dtype}")
            if arr.size and (arr.min() < 0 or arr.max() > 255):
                raise RasterError("RGBA samples must be within [0, 255]")
            flat = arr.reshape(-1)

        expected = width * height * 4
        if flat.size != expected:
            raise RasterError(
                f"Buffer holds {flat.size} bytes but {width}x{height} RGBA needs {expected}"
            )

        pixels = flat.astype(np.uint8).reshape(height, width, 4).copy()
        pixels.flags.writeable = False
        self._pixels = pixels
        self.width = width
        self.height = height

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "Raster":
        """Build a raster from an (H, W, 4) array."""
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise RasterError(f"Expected an (H, W, 4) array, got shape {pixels.shape}")
        h, w = pixels.shape[:2]
        return cls(w, h, pixels)

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 array."""
        return self._pixels

    @property
    def data(self) -> bytes:
        return self._pixels.tobytes()

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def color_at(self, x: int, y: int) -> Color:
        r, g, b, a = self._pixels[y, x].tolist()
        return Color(r, g, b, a)

    def colors(self) -> List[Color]:
        """Every pixel's color in row-major order."""
        return [Color(*p) for p in self._pixels.reshape(-1, 4).tolist()]

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height})"


@dataclass(frozen=True)
class EdgeDetectionResult:
    """Binary edge mask plus the gradient field used to produce it."""
    mask: np.ndarray  # (H, W) bool
    magnitude: np.ndarray  # (H, W) float64, >= 0
    direction: np.ndarray  # (H, W) float64, radians in (-pi, pi]

    def __post_init__(self):
        for arr in (self.mask, self.magnitude, self.direction):
            arr.flags.writeable = False

    @property
    def edge_count(self) -> int:
        return int(self.mask.sum())


@dataclass(frozen=True)
class Path:
    """Ordered sequence of pixel points."""
    points: Tuple[Point, ...]
    is_closed: bool
    bounding_box: BoundingBox

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> "Path":
        points = tuple(points)
        if not points:
            return cls.empty()
        first, last = points[0], points[-1]
        is_closed = (
            len(points) > 2
            and abs(first.x - last.x) <= 1
            and abs(first.y - last.y) <= 1
        )
        return cls(points, is_closed, BoundingBox.from_points(points))

    @classmethod
    def empty(cls) -> "Path":
        return cls((), False, BoundingBox.empty())

    def __len__(self) -> int:
        return len(self.points)

    def to_svg_data(self) -> str:
        """SVG path data as a poly-line: "M x y L x y ... [Z]"."""
        if len(self.points) < 2:
            return ""
        parts = [f"M {self.points[0].x} {self.points[0].y}"]
        for p in self.points[1:]:
            parts.append(f"L {p.x} {p.y}")
        if self.is_closed:
            parts.append("Z")
        return " ".join(parts)


@dataclass(frozen=True)
class Region:
    """Connected, color-homogeneous set of pixels."""
    id: int
    pixels: Tuple[Point, ...]
    colors: Tuple[Color, ...]
    bounding_box: BoundingBox
    area: int
    average_color: Color

    @classmethod
    def build(
        cls,
        region_id: int,
        pixels: Sequence[Point],
        colors: Sequence[Color],
        bounding_box: Optional[BoundingBox] = None,
    ) -> "Region":
        pixels = tuple(pixels)
        colors = tuple(colors)
        if bounding_box is None:
            bounding_box = BoundingBox.from_points(pixels)
        return cls(
            id=region_id,
            pixels=pixels,
            colors=colors,
            bounding_box=bounding_box,
            area=len(pixels),
            average_color=average_color(colors),
        )


@dataclass(frozen=True)
class Cluster:
    """K-means centroid and the unique colors assigned to it."""
    centroid: Color
    members: Tuple[Color, ...]
    bounding_box: BoundingBox


@dataclass(frozen=True)
class QualityMetrics:
    accuracy: int
    smoothness: int
    file_size: int
    processing_time: int  # milliseconds

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "smoothness": self.smoothness,
            "fileSize": self.file_size,
            "processingTime": self.processing_time,
        }


@dataclass(frozen=True)
class ConversionMetadata:
    original_size: Tuple[int, int]
    vectorized_size: Tuple[int, int]
    path_count: int
    color_count: int

    def to_dict(self) -> dict:
        return {
            "originalSize": {"width": self.original_size[0], "height": self.original_size[1]},
            "vectorizedSize": {"width": self.vectorized_size[0], "height": self.vectorized_size[1]},
            "pathCount": self.path_count,
            "colorCount": self.color_count,
        }


@dataclass(frozen=True)
class VectorizationResult:
    svg: str
    quality: QualityMetrics
    metadata: ConversionMetadata
    timings: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "svg": self.svg,
            "quality": self.quality.to_dict(),
            "metadata": self.metadata.to_dict(),
        }
