from .config import RunConfig, get_run_config, set_run_config
from .errors import (
    PuzzleError,
    MalformedInputError,
    UnsolvableError,
    ProductOverflowError,
    MissingInputError,
    checked_int32,
    checked_int64,
)
from .puzzle_input import PuzzleInput
from .day import PuzzleDay
from .beam_tracer import BeamTracer, Manifold, TimelineCache, trace_beam, count_timelines
from .circuits import (
    ConnectivityBuilder,
    Circuits,
    DistanceQueue,
    JunctionBox,
    parse_junction_boxes,
    largest_circuit_product,
)
from .tiles import (
    RectangleValidator,
    AreaQueue,
    BoundingHull,
    RedTile,
    parse_red_tiles,
    rectangle_area,
    is_valid_rectangle,
)
from .dispatcher import KERNELS, DayResult, StopWatch, build_kernel, exit_code, register_kernel, run_days

__all__ = [
    'RunConfig',
    'get_run_config',
    'set_run_config',
    'PuzzleError',
    'MalformedInputError',
    'UnsolvableError',
    'ProductOverflowError',
    'MissingInputError',
    'checked_int32',
    'checked_int64',
    'PuzzleInput',
    'PuzzleDay',
    'BeamTracer',
    'Manifold',
    'TimelineCache',
    'trace_beam',
    'count_timelines',
    'ConnectivityBuilder',
    'Circuits',
    'DistanceQueue',
    'JunctionBox',
    'parse_junction_boxes',
    'largest_circuit_product',
    'RectangleValidator',
    'AreaQueue',
    'BoundingHull',
    'RedTile',
    'parse_red_tiles',
    'rectangle_area',
    'is_valid_rectangle',
    'KERNELS',
    'DayResult',
    'StopWatch',
    'build_kernel',
    'exit_code',
    'register_kernel',
    'run_days',
]
