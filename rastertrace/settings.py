"""
Immutable, validated conversion settings.

Settings are built once per conversion and passed down the pipeline; every
stage reads from its own section and never mutates it.
"""
from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional

from . import config
from .errors import InvalidSettingsError
from .types import ColorMode, EdgeDetectionType, HierarchicalMode, PathTracingAlgorithm


def _coerce_enum(instance, name: str, enum_cls):
    """Accept an enum member, its value, its numeric code or its name."""
    value = getattr(instance, name)
    if isinstance(value, enum_cls):
        return
    coerced = None
    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            value = int(text)
        else:
            for member in enum_cls:
                if text in (str(member.value).lower(), member.name.lower()):
                    coerced = member
                    break
    if coerced is None:
        try:
            coerced = enum_cls(value)
        except ValueError:
            choices = ", ".join(m.name.lower() for m in enum_cls)
            raise InvalidSettingsError(f"{name} must be one of: {choices} (got {value!r})")
    object.__setattr__(instance, name, coerced)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidSettingsError(message)


@dataclass(frozen=True)
class EdgeDetectionConfig:
    variant: EdgeDetectionType = EdgeDetectionType(config.DEFAULT_EDGE_DETECTOR)
    threshold: float = config.DEFAULT_SOBEL_THRESHOLD
    low_threshold: float = config.DEFAULT_CANNY_LOW_THRESHOLD
    high_threshold: float = config.DEFAULT_CANNY_HIGH_THRESHOLD
    gaussian_blur_enabled: bool = config.DEFAULT_GAUSSIAN_BLUR

    def __post_init__(self):
        _coerce_enum(self, "variant", EdgeDetectionType)
        _require(self.threshold >= 0, "threshold must be >= 0")
        _require(self.low_threshold >= 0, "low_threshold must be >= 0")
        _require(
            self.low_threshold <= self.high_threshold,
            "low_threshold must not exceed high_threshold",
        )


@dataclass(frozen=True)
class PathTracingConfig:
    variant: PathTracingAlgorithm = PathTracingAlgorithm(config.DEFAULT_PATH_TRACER)
    smoothing_factor: float = config.DEFAULT_SMOOTHING_FACTOR
    simplification_threshold: float = config.DEFAULT_SIMPLIFICATION_THRESHOLD
    min_path_length: int = config.DEFAULT_MIN_PATH_LENGTH

    def __post_init__(self):
        _coerce_enum(self, "variant", PathTracingAlgorithm)
        _require(0 <= self.smoothing_factor <= 1, "smoothing_factor must be within [0, 1]")
        _require(self.simplification_threshold >= 0, "simplification_threshold must be >= 0")
        _require(self.min_path_length >= 0, "min_path_length must be >= 0")


@dataclass(frozen=True)
class SegmentationConfig:
    k_means_clusters: int = config.DEFAULT_KMEANS_CLUSTERS
    color_similarity_threshold: float = config.DEFAULT_COLOR_SIMILARITY_THRESHOLD
    region_growing_threshold: float = config.DEFAULT_REGION_GROWING_THRESHOLD
    max_iterations: int = config.DEFAULT_MAX_ITERATIONS
    convergence_threshold: float = config.DEFAULT_CONVERGENCE_THRESHOLD
    use_kmeans: bool = False
    random_seed: Optional[int] = config.DEFAULT_RANDOM_SEED
    hierarchical: HierarchicalMode = HierarchicalMode.STACKED

    def __post_init__(self):
        _coerce_enum(self, "hierarchical", HierarchicalMode)
        _require(self.k_means_clusters >= 1, "k_means_clusters must be >= 1")
        _require(self.color_similarity_threshold >= 0, "color_similarity_threshold must be >= 0")
        _require(self.region_growing_threshold >= 0, "region_growing_threshold must be >= 0")
        _require(self.max_iterations >= 1, "max_iterations must be >= 1")
        _require(self.convergence_threshold >= 0, "convergence_threshold must be >= 0")


@dataclass(frozen=True)
class RenderConfig:
    color_mode: ColorMode = ColorMode.COLOR
    path_precision: int = config.DEFAULT_PATH_PRECISION

    def __post_init__(self):
        _coerce_enum(self, "color_mode", ColorMode)
        _require(self.path_precision >= 1, "path_precision must be >= 1")


@dataclass(frozen=True)
class VectorizationSettings:
    edge: EdgeDetectionConfig = field(default_factory=EdgeDetectionConfig)
    path: PathTracingConfig = field(default_factory=PathTracingConfig)
    segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def _parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {raw!r}")


# query parameter -> (section, field, parser)
_PARAMS = {
    "edge": ("edge", "variant", str),
    "threshold": ("edge", "threshold", float),
    "lowThreshold": ("edge", "low_threshold", float),
    "highThreshold": ("edge", "high_threshold", float),
    "gaussianBlur": ("edge", "gaussian_blur_enabled", _parse_bool),
    "tracer": ("path", "variant", str),
    "smoothingFactor": ("path", "smoothing_factor", float),
    "simplificationThreshold": ("path", "simplification_threshold", float),
    "minPathLength": ("path", "min_path_length", int),
    "kMeansClusters": ("segmentation", "k_means_clusters", int),
    "colorSimilarityThreshold": ("segmentation", "color_similarity_threshold", float),
    "regionGrowingThreshold": ("segmentation", "region_growing_threshold", float),
    "maxIterations": ("segmentation", "max_iterations", int),
    "convergenceThreshold": ("segmentation", "convergence_threshold", float),
    "useKmeans": ("segmentation", "use_kmeans", _parse_bool),
    "seed": ("segmentation", "random_seed", int),
    "hierarchical": ("segmentation", "hierarchical", str),
    "colorMode": ("render", "color_mode", str),
    "pathPrecision": ("render", "path_precision", int),
}


def settings_from_params(
    params: Mapping[str, str],
    base: Optional[VectorizationSettings] = None,
) -> VectorizationSettings:
    """
    Build settings from flat string parameters (query string, CLI flags).

    Unknown keys are ignored. ``colorMode`` and ``hierarchical`` accept either
    their name ("binary", "cutout") or the numeric code ("1"); ``edge`` and
    ``tracer`` take names only.

    Raises:
        InvalidSettingsError: if a value cannot be parsed or is out of range
    """
    base = base or VectorizationSettings()
    overrides = {"edge": {}, "path": {}, "segmentation": {}, "render": {}}

    for key, (section, name, parser) in _PARAMS.items():
        raw = params.get(key)
        if raw is None or raw == "":
            continue
        try:
            value = parser(raw)
        except ValueError as e:
            raise InvalidSettingsError(f"Invalid value for {key}: {e}") from e
        overrides[section][name] = value

    return VectorizationSettings(
        edge=replace(base.edge, **overrides["edge"]),
        path=replace(base.path, **overrides["path"]),
        segmentation=replace(base.segmentation, **overrides["segmentation"]),
        render=replace(base.render, **overrides["render"]),
    )


def settings_to_dict(settings: VectorizationSettings) -> dict:
    """Plain-value dump of the settings, used for logging."""
    out = {}
    for section in fields(settings):
        values = {}
        for f in fields(getattr(settings, section.name)):
            value = getattr(getattr(settings, section.name), f.name)
            values[f.name] = value.value if hasattr(value, "value") else value
        out[section.name] = values
    return out
