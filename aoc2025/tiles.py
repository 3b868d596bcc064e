"""Day 09: the largest rectangle spanned by two red tiles."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .config import RunConfig
from .errors import MalformedInputError, UnsolvableError, checked_int32, checked_int64
from .logging_utils import apply_debug_logging
from .puzzle_input import PuzzleInput

logger = logging.getLogger(__name__)

_TILE_RE = re.compile(r"^(\d+),(\d+)$")

NO_ENTRY = -1


@dataclass(frozen=True)
class RedTile:
    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


Pair = Tuple[RedTile, RedTile]


def parse_red_tiles(lines: Iterable[str]) -> List[RedTile]:
    tiles: List[RedTile] = []
    for line_no, line in enumerate(lines, start=1):
        m = _TILE_RE.match(line)
        if not m:
            raise MalformedInputError(f"line {line_no}: expected '<int>,<int>', got {line!r}")
        tiles.append(RedTile(*(checked_int32(part, f"line {line_no}: coordinate") for part in m.groups())))
    return list(dict.fromkeys(tiles))


def rectangle_area(a: RedTile, b: RedTile) -> int:
    return (abs(a.x - b.x) + 1) * (abs(a.y - b.y) + 1)


def _sweeps(keys: np.ndarray, values: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Per distinct key, the smallest and largest value seen with it."""

    uniq, inverse = np.unique(keys, return_inverse=True)
    inverse = inverse.reshape(-1)
    lo = np.full(len(uniq), np.iinfo(np.int64).max, dtype=np.int64)
    hi = np.full(len(uniq), NO_ENTRY, dtype=np.int64)
    np.minimum.at(lo, inverse, values)
    np.maximum.at(hi, inverse, values)
    return uniq, lo, hi


def _widen(lows: np.ndarray, highs: np.ndarray, start: int, stop: int, value: int) -> None:
    seg_lo = lows[start : stop + 1]
    seg_hi = highs[start : stop + 1]
    fresh = seg_lo == NO_ENTRY
    seg_lo[fresh] = value
    seg_hi[fresh] = value
    np.minimum(seg_lo, value, out=seg_lo)
    np.maximum(seg_hi, value, out=seg_hi)


@dataclass
class BoundingHull:
    """Row and column extents swept out by the red tiles.

    ``x_min_by_y[y]``/``x_max_by_y[y]`` come from the vertical sweeps between the
    lowest and highest tile of every column, ``y_min_by_x``/``y_max_by_x`` from the
    horizontal sweeps of every row. ``NO_ENTRY`` marks coordinates no sweep covers.
    """

    x_min_by_y: np.ndarray
    x_max_by_y: np.ndarray
    y_min_by_x: np.ndarray
    y_max_by_x: np.ndarray

    @classmethod
    def from_tiles(cls, tiles: Sequence[RedTile]) -> "BoundingHull":
        if not tiles:
            empty = np.empty(0, dtype=np.int64)
            return cls(empty, empty.copy(), empty.copy(), empty.copy())

        xs = np.array([tile.x for tile in tiles], dtype=np.int64)
        ys = np.array([tile.y for tile in tiles], dtype=np.int64)
        width = int(xs.max()) + 1
        height = int(ys.max()) + 1

        x_min_by_y = np.full(height, NO_ENTRY, dtype=np.int64)
        x_max_by_y = np.full(height, NO_ENTRY, dtype=np.int64)
        for x, y_lo, y_hi in zip(*_sweeps(xs, ys)):
            _widen(x_min_by_y, x_max_by_y, int(y_lo), int(y_hi), int(x))

        y_min_by_x = np.full(width, NO_ENTRY, dtype=np.int64)
        y_max_by_x = np.full(width, NO_ENTRY, dtype=np.int64)
        for y, x_lo, x_hi in zip(*_sweeps(ys, xs)):
            _widen(y_min_by_x, y_max_by_x, int(x_lo), int(x_hi), int(y))

        logger.info(
            "Built bounding hull over %d tiles: %d rows, %d columns covered",
            len(tiles),
            int(np.count_nonzero(x_min_by_y != NO_ENTRY)),
            int(np.count_nonzero(y_min_by_x != NO_ENTRY)),
        )
        return cls(x_min_by_y, x_max_by_y, y_min_by_x, y_max_by_x)

    def contains(self, x: int, y: int) -> bool:
        if not (0 <= y < len(self.x_min_by_y) and 0 <= x < len(self.y_min_by_x)):
            return False
        x_min = self.x_min_by_y[y]
        y_min = self.y_min_by_x[x]
        if x_min == NO_ENTRY or y_min == NO_ENTRY:
            return False
        return bool(x_min <= x <= self.x_max_by_y[y] and y_min <= y <= self.y_max_by_x[x])

    def contains_many(self, xs, ys) -> np.ndarray:
        """Vectorised :meth:`contains`; ``xs`` and ``ys`` broadcast against each other."""

        xs, ys = np.broadcast_arrays(np.asarray(xs, dtype=np.int64), np.asarray(ys, dtype=np.int64))
        inside = (xs >= 0) & (ys >= 0) & (ys < len(self.x_min_by_y)) & (xs < len(self.y_min_by_x))
        if not inside.any():
            return inside
        cx = np.where(inside, xs, 0)
        cy = np.where(inside, ys, 0)
        x_min = self.x_min_by_y[cy]
        y_min = self.y_min_by_x[cx]
        inside &= (x_min != NO_ENTRY) & (y_min != NO_ENTRY)
        inside &= (x_min <= xs) & (xs <= self.x_max_by_y[cy])
        inside &= (y_min <= ys) & (ys <= self.y_max_by_x[cx])
        return inside


def is_valid_rectangle(hull: BoundingHull, a: RedTile, b: RedTile) -> bool:
    """Whether every cell on the border of the rectangle spanned by ``a`` and ``b`` is in ``hull``."""

    x_lo, x_hi = min(a.x, b.x), max(a.x, b.x)
    y_lo, y_hi = min(a.y, b.y), max(a.y, b.y)

    for x, y in ((x_lo, y_lo), (x_hi, y_lo), (x_lo, y_hi), (x_hi, y_hi)):
        if not hull.contains(x, y):
            return False

    span_x = np.arange(x_lo, x_hi + 1)
    span_y = np.arange(y_lo, y_hi + 1)
    for xs, ys in ((span_x, y_lo), (span_x, y_hi), (x_lo, span_y), (x_hi, span_y)):
        if not hull.contains_many(xs, ys).all():
            return False
    return True


class AreaQueue:
    """Tile pairs (self-pairs included) handed out largest area first."""

    def __init__(self, tiles: Sequence[RedTile], areas: np.ndarray, first: np.ndarray, second: np.ndarray):
        self.tiles = list(tiles)
        self.areas = areas
        self.first = first
        self.second = second
        self._cursor = 0

    @classmethod
    def from_tiles(cls, tiles: Sequence[RedTile]) -> "AreaQueue":
        if tiles:
            # every pair area is bounded by the area of the tiles' bounding box
            bound = rectangle_area(
                RedTile(min(t.x for t in tiles), min(t.y for t in tiles)),
                RedTile(max(t.x for t in tiles), max(t.y for t in tiles)),
            )
            checked_int64(bound, "largest possible rectangle area")
        xs = np.array([tile.x for tile in tiles], dtype=np.int64)
        ys = np.array([tile.y for tile in tiles], dtype=np.int64)
        first, second = np.triu_indices(len(tiles), k=0)
        areas = (np.abs(xs[first] - xs[second]) + 1) * (np.abs(ys[first] - ys[second]) + 1)
        order = np.argsort(-areas, kind="stable")
        logger.info("Ranked %d tile pairs by area", len(order))
        return cls(tiles, areas[order], first[order], second[order])

    def fresh(self) -> "AreaQueue":
        return AreaQueue(self.tiles, self.areas, self.first, self.second)

    def __len__(self) -> int:
        return len(self.areas) - self._cursor

    def __bool__(self) -> bool:
        return self._cursor < len(self.areas)

    def peek(self) -> Tuple[int, Pair]:
        if not self:
            raise IndexError("peek into an empty area queue")
        idx = self._cursor
        return int(self.areas[idx]), (self.tiles[self.first[idx]], self.tiles[self.second[idx]])

    def pop(self) -> Tuple[int, Pair]:
        entry = self.peek()
        self._cursor += 1
        return entry

    def __iter__(self) -> Iterator[Tuple[int, Pair]]:
        while self:
            yield self.pop()


class RectangleValidator:
    """Day 09 kernel: the largest rectangle overall, then the largest one inside the hull."""

    day_number = 9

    def __init__(self, puzzle_input: PuzzleInput):
        self.puzzle_input = puzzle_input
        self._tiles: Optional[List[RedTile]] = None
        self._hull: Optional[BoundingHull] = None
        self._queue: Optional[AreaQueue] = None

    @classmethod
    def from_config(cls, config: RunConfig) -> "RectangleValidator":
        return cls(PuzzleInput.for_day(cls.day_number, config))

    @property
    def tiles(self) -> List[RedTile]:
        if self._tiles is None:
            self._tiles = parse_red_tiles(self.puzzle_input.as_lines())
            logger.info("Parsed %d red tiles", len(self._tiles))
        return self._tiles

    @property
    def hull(self) -> BoundingHull:
        if self._hull is None:
            self._hull = BoundingHull.from_tiles(self.tiles)
        return self._hull

    def area_queue(self) -> AreaQueue:
        if self._queue is None:
            self._queue = AreaQueue.from_tiles(self.tiles)
        return self._queue.fresh()

    def solve_part_one(self) -> int:
        queue = self.area_queue()
        if not queue:
            raise UnsolvableError("no red tiles to span a rectangle", day=self.day_number, phase=1)
        area, (a, b) = queue.peek()
        logger.info("Largest rectangle spans %s and %s", a, b)
        return checked_int64(area, "rectangle area", day=self.day_number, phase=1)

    def solve_part_two(self) -> int:
        hull = self.hull
        checked = 0
        for area, (a, b) in self.area_queue():
            checked += 1
            if is_valid_rectangle(hull, a, b):
                logger.info("Largest hull rectangle spans %s and %s (checked %d pairs)", a, b, checked)
                return checked_int64(area, "rectangle area", day=self.day_number, phase=2)
        raise UnsolvableError(
            f"none of the {checked} tile pairs spans a rectangle inside the hull",
            day=self.day_number,
            phase=2,
        )


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"RedTile", "rectangle_area", "_widen", "is_valid_rectangle", "BoundingHull.contains", "BoundingHull.contains_many", "AreaQueue.pop", "AreaQueue.peek"},
)
