"""Day 07: tachyon beams through a manifold of splitters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import RunConfig
from .errors import MalformedInputError, checked_int64
from .logging_utils import apply_debug_logging
from .puzzle_input import PuzzleInput

logger = logging.getLogger(__name__)

SOURCE = "S"
SPLITTER = "^"
BEAM = "|"
EMPTY = "."
PADDING = " "

ALPHABET = (SOURCE, SPLITTER, BEAM, EMPTY, PADDING)

Coord = Tuple[int, int]


def _validate_grid(grid: np.ndarray) -> None:
    if grid.ndim != 2 or grid.shape[0] < 2:
        raise MalformedInputError("manifold needs at least two rows")
    if grid.shape[1] == 0:
        raise MalformedInputError("manifold rows are empty")

    unknown = np.argwhere(~np.isin(grid, ALPHABET))
    if unknown.size:
        y, x = (int(v) for v in unknown[0])
        raise MalformedInputError(f"unexpected character {grid[y, x]!r} at x={x}, y={y}")

    sources = np.argwhere(grid == SOURCE)
    if len(sources) != 1:
        raise MalformedInputError(f"expected exactly one source, found {len(sources)}")
    y, x = (int(v) for v in sources[0])
    if y != 0:
        raise MalformedInputError(f"source must be on the top row, found at x={x}, y={y}")

    edge_rows = np.flatnonzero((grid[:, 0] == SPLITTER) | (grid[:, -1] == SPLITTER))
    if edge_rows.size:
        raise MalformedInputError(f"splitter on the manifold boundary at row {int(edge_rows[0])}")


@dataclass
class Manifold:
    """Rectangular character grid; ``grid[y, x]`` addresses row ``y``, column ``x``."""

    grid: np.ndarray

    def __post_init__(self) -> None:
        self.grid = np.array(self.grid, dtype="<U1", copy=True)
        _validate_grid(self.grid)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Manifold":
        rows = list(rows)
        if not rows:
            raise MalformedInputError("manifold needs at least two rows")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise MalformedInputError(f"manifold rows are not rectangular (widths {sorted(widths)})")
        return cls(np.array([list(row) for row in rows], dtype="<U1"))

    @classmethod
    def from_grid(cls, grid: np.ndarray) -> "Manifold":
        return cls(np.asarray(grid))

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def source(self) -> Coord:
        return int(np.flatnonzero(self.grid[0] == SOURCE)[0]), 0

    def copy(self) -> "Manifold":
        return Manifold(self.grid)

    def rows(self) -> List[str]:
        return ["".join(row) for row in self.grid]

    def __str__(self) -> str:
        return "\n".join(self.rows())


def trace_beam(manifold: Manifold) -> int:
    """Propagate the beam downward in place and return how many splitters it hit."""

    grid = manifold.grid
    last = manifold.height - 1
    width = manifold.width
    splits = 0
    for y in range(last):
        row = grid[y]
        # writes only land on row y + 1, so the active cells of row y are fixed up front
        for x in np.flatnonzero((row == SOURCE) | (row == BEAM)):
            x = int(x)
            if row[x] == SOURCE:
                grid[y + 1, x] = BEAM
            elif grid[y + 1, x] == SPLITTER:
                if x == 0 or x == width - 1:
                    raise MalformedInputError(f"beam split at x={x}, y={y + 1} leaves the manifold")
                grid[y + 1, x - 1] = BEAM
                grid[y + 1, x + 1] = BEAM
                splits += 1
            else:
                grid[y + 1, x] = BEAM
    logger.debug("Traced beam through %dx%d manifold: %d splits", width, manifold.height, splits)
    return splits


class TimelineCache:
    """Write-once timeline counts keyed by the cell above a splitter."""

    def __init__(self, height: int, width: int):
        self._values = np.full((height, width), -1, dtype=np.int64)
        self._size = 0

    def _in_range(self, x: int, y: int) -> bool:
        height, width = self._values.shape
        return 0 <= y < height and 0 <= x < width

    def __contains__(self, key: Coord) -> bool:
        x, y = key
        return self._in_range(x, y) and self._values[y, x] >= 0

    def __len__(self) -> int:
        return self._size

    def get(self, x: int, y: int) -> Optional[int]:
        if not self._in_range(x, y):
            return None
        value = int(self._values[y, x])
        return value if value >= 0 else None

    def items(self) -> List[Tuple[Coord, int]]:
        return [((int(x), int(y)), int(self._values[y, x])) for y, x in np.argwhere(self._values >= 0)]

    def store(self, x: int, y: int, value: int) -> None:
        value = checked_int64(value, f"timeline count at x={x}, y={y}")
        existing = int(self._values[y, x])
        if existing >= 0:
            if existing != value:
                raise ValueError(f"timeline count at x={x}, y={y} already stored as {existing}, got {value}")
            return
        self._values[y, x] = value
        self._size += 1


def _walk_up(grid: np.ndarray, x: int, y: int) -> Tuple[bool, List[Coord]]:
    """Follow a beam up column ``x`` from row ``y``.

    Returns whether the source was reached and the cells above every splitter
    found beside the beam on the way up, in the order they were passed.
    """

    width = grid.shape[1]
    anchors: List[Coord] = []
    while y >= 0:
        cell = grid[y, x]
        if cell == SOURCE:
            return True, anchors
        if cell != BEAM:
            return False, anchors
        if y > 0:
            if x > 0 and grid[y, x - 1] == SPLITTER:
                anchors.append((x - 1, y - 1))
            if x + 1 < width and grid[y, x + 1] == SPLITTER:
                anchors.append((x + 1, y - 1))
        y -= 1
    return False, anchors


@dataclass
class _Frame:
    x: int
    y: int
    anchors: List[Coord] = field(default_factory=list)
    total: int = 0
    cursor: int = 0


def _open_frame(grid: np.ndarray, x: int, y: int) -> _Frame:
    reached, anchors = _walk_up(grid, x, y)
    if reached:
        return _Frame(x, y, total=1)
    return _Frame(x, y, anchors)


def _back_trace(grid: np.ndarray, x: int, y: int, cache: Optional[TimelineCache]) -> int:
    if cache is not None and (x, y) in cache:
        return cache.get(x, y)

    stack = [_open_frame(grid, x, y)]
    while True:
        frame = stack[-1]
        if frame.cursor < len(frame.anchors):
            ax, ay = frame.anchors[frame.cursor]
            frame.cursor += 1
            if cache is not None and (ax, ay) in cache:
                frame.total += cache.get(ax, ay)
            else:
                stack.append(_open_frame(grid, ax, ay))
            continue

        stack.pop()
        if not stack:
            return frame.total
        if cache is not None:
            cache.store(frame.x, frame.y, frame.total)
        stack[-1].total += frame.total


def count_timelines(manifold: Manifold, cache: Optional[TimelineCache] = None) -> int:
    """Count the distinct paths from every bottom-row beam back up to the source.

    ``manifold`` must already be traced by :func:`trace_beam`.
    """

    grid = manifold.grid
    bottom = manifold.height - 1
    total = 0
    for x in np.flatnonzero(grid[bottom] == BEAM):
        total += _back_trace(grid, int(x), bottom, cache)
    if cache is not None:
        logger.debug("Timeline cache holds %d entries", len(cache))
    return total


class BeamTracer:
    """Day 07 kernel.

    Part one traces the beam forward and counts splitter hits; part two reuses the
    traced manifold and counts the timelines that lead back to the source.
    """

    day_number = 7

    def __init__(self, puzzle_input: PuzzleInput, *, memoize: bool = True):
        self.puzzle_input = puzzle_input
        self.memoize = memoize
        self._manifold: Optional[Manifold] = None
        self._cache: Optional[TimelineCache] = None
        self._splits: Optional[int] = None
        self._timelines: Optional[int] = None

    @classmethod
    def from_config(cls, config: RunConfig) -> "BeamTracer":
        return cls(PuzzleInput.for_day(cls.day_number, config), memoize=config.memoize_timelines)

    @property
    def state(self) -> str:
        if self._timelines is not None:
            return "back-done"
        if self._splits is not None:
            return "forward-done"
        return "new"

    @property
    def manifold(self) -> Optional[Manifold]:
        return self._manifold

    @property
    def cache(self) -> Optional[TimelineCache]:
        return self._cache

    def _trace_forward(self) -> int:
        if self._splits is None:
            manifold = Manifold.from_grid(self.puzzle_input.as_grid())
            logger.info("Loaded %dx%d manifold, source at %s", manifold.width, manifold.height, manifold.source)
            self._splits = trace_beam(manifold)
            manifold.grid.flags.writeable = False
            self._manifold = manifold
        return self._splits

    def solve_part_one(self) -> int:
        splits = self._trace_forward()
        logger.info("Beam was split %d times", splits)
        return checked_int64(splits, "split count", day=self.day_number, phase=1)

    def solve_part_two(self) -> int:
        if self._timelines is None:
            self._trace_forward()
            manifold = self._manifold
            self._cache = TimelineCache(manifold.height, manifold.width) if self.memoize else None
            self._timelines = count_timelines(manifold, self._cache)
            logger.info("Counted %d timelines", self._timelines)
        return checked_int64(self._timelines, "timeline count", day=self.day_number, phase=2)


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"TimelineCache", "_Frame", "_walk_up", "_open_frame", "_in_range", "rows"},
)
