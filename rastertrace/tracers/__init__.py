from ..settings import PathTracingConfig
from ..types import PathTracingAlgorithm
from .base import ContourTracer
from .contours import trace_all_paths
from .moore_tracer import MooreNeighborTracer
from .smoothed_tracer import SmoothedTracer
from .square_tracer import SquareTracer

_TRACERS = {
    PathTracingAlgorithm.MOORE_NEIGHBOR: MooreNeighborTracer,
    PathTracingAlgorithm.SQUARE_TRACING: SquareTracer,
    PathTracingAlgorithm.CUSTOM: SmoothedTracer,
}


def get_path_tracer(config: PathTracingConfig) -> ContourTracer:
    """Instantiate the tracer selected by ``config.variant``."""
    return _TRACERS[config.variant](config)


__all__ = [
    "ContourTracer",
    "MooreNeighborTracer",
    "SquareTracer",
    "SmoothedTracer",
    "get_path_tracer",
    "trace_all_paths",
]
