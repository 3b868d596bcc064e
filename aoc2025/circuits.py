"""Day 08: wiring junction boxes into circuits, shortest connections first."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

import numpy as np
from scipy.cluster.hierarchy import DisjointSet
from scipy.spatial.distance import pdist

from .config import RunConfig, get_run_config
from .errors import MalformedInputError, UnsolvableError, checked_int32, checked_int64
from .logging_utils import apply_debug_logging
from .puzzle_input import PuzzleInput

logger = logging.getLogger(__name__)

_BOX_RE = re.compile(r"^(\d+),(\d+),(\d+)$")


@dataclass(frozen=True)
class JunctionBox:
    """A junction box; its coordinates are its label, so equal points are the same box."""

    x: int
    y: int
    z: int

    @property
    def label(self) -> Tuple[int, int, int]:
        return self.x, self.y, self.z

    def distance_to(self, other: "JunctionBox") -> float:
        return math.dist(self.label, other.label)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"


def parse_junction_boxes(lines: Iterable[str]) -> List[JunctionBox]:
    boxes: List[JunctionBox] = []
    for line_no, line in enumerate(lines, start=1):
        m = _BOX_RE.match(line)
        if not m:
            raise MalformedInputError(f"line {line_no}: expected '<int>,<int>,<int>', got {line!r}")
        boxes.append(JunctionBox(*(checked_int32(part, f"line {line_no}: coordinate") for part in m.groups())))
    unique = list(dict.fromkeys(boxes))
    if len(unique) != len(boxes):
        logger.info("Collapsed %d duplicate junction box(es)", len(boxes) - len(unique))
    return unique


Pair = Tuple[JunctionBox, JunctionBox]


class DistanceQueue:
    """Every unordered pair of distinct boxes, handed out shortest first.

    Equal distances come out in the order the pairs appear in the input
    (``(i, j)`` with ``i < j``, lexicographically).
    """

    def __init__(
        self,
        boxes: Sequence[JunctionBox],
        distances: np.ndarray,
        first: np.ndarray,
        second: np.ndarray,
    ):
        self.boxes = list(boxes)
        self.distances = distances
        self.first = first
        self.second = second
        self._cursor = 0

    @classmethod
    def from_boxes(cls, boxes: Sequence[JunctionBox]) -> "DistanceQueue":
        count = len(boxes)
        if count < 2:
            empty = np.empty(0, dtype=np.intp)
            return cls(boxes, np.empty(0, dtype=np.float64), empty, empty)
        coords = np.array([box.label for box in boxes], dtype=np.float64)
        distances = pdist(coords, metric="euclidean")
        first, second = np.triu_indices(count, k=1)
        order = np.argsort(distances, kind="stable")
        logger.info("Ranked %d junction box pairs by distance", len(order))
        return cls(boxes, distances[order], first[order], second[order])

    def fresh(self) -> "DistanceQueue":
        """Return an unconsumed queue sharing this queue's ranking."""

        return DistanceQueue(self.boxes, self.distances, self.first, self.second)

    def __len__(self) -> int:
        return len(self.distances) - self._cursor

    def __bool__(self) -> bool:
        return self._cursor < len(self.distances)

    def peek(self) -> Tuple[float, Pair]:
        if not self:
            raise IndexError("peek into an empty distance queue")
        idx = self._cursor
        return float(self.distances[idx]), (self.boxes[self.first[idx]], self.boxes[self.second[idx]])

    def pop(self) -> Tuple[float, Pair]:
        entry = self.peek()
        self._cursor += 1
        return entry

    def __iter__(self) -> Iterator[Tuple[float, Pair]]:
        while self:
            yield self.pop()


class Circuits:
    """Disjoint circuits over a fixed set of labels.

    Only labels that took part in a connection belong to a circuit; the rest are
    still loose. ``component_count`` counts loose labels as their own component.
    """

    def __init__(self, labels: Iterable[Hashable]):
        self.labels = list(dict.fromkeys(labels))
        self._sets = DisjointSet(self.labels)
        self._connected: Set[Hashable] = set()
        self._circuit_count = 0
        self.merge_count = 0

    def __len__(self) -> int:
        return self._circuit_count

    def __contains__(self, label: Hashable) -> bool:
        return label in self._connected

    def same_circuit(self, a: Hashable, b: Hashable) -> bool:
        return a in self._connected and self._sets.connected(a, b)

    def connect(self, a: Hashable, b: Hashable) -> bool:
        """Join the circuits of ``a`` and ``b``; ``False`` when they already share one."""

        if self.same_circuit(a, b):
            return False
        known = (a in self._connected) + (b in self._connected)
        if known == 0:
            self._circuit_count += 1
        elif known == 2:
            self._circuit_count -= 1
        self._sets.merge(a, b)
        self._connected.add(a)
        self._connected.add(b)
        self.merge_count += 1
        return True

    def circuit_of(self, label: Hashable) -> Optional[Set[Hashable]]:
        if label not in self._connected:
            return None
        return set(self._sets.subset(label))

    def circuits(self) -> List[Set[Hashable]]:
        return [set(subset) for subset in self._sets.subsets() if len(subset) > 1]

    def sizes(self) -> List[int]:
        return sorted((len(subset) for subset in self._sets.subsets() if len(subset) > 1), reverse=True)

    @property
    def component_count(self) -> int:
        return self._sets.n_subsets

    @property
    def connected_count(self) -> int:
        return len(self._connected)

    @property
    def is_complete(self) -> bool:
        return len(self.labels) > 1 and self._sets.n_subsets == 1


def largest_circuit_product(circuits: Circuits, count: int = 3) -> int:
    """Multiply the sizes of the ``count`` largest circuits; absent circuits count as 1."""

    return math.prod(circuits.sizes()[:count])


class ConnectivityBuilder:
    """Day 08 kernel.

    Part one spends a fixed connection budget on the closest pairs and multiplies
    the three largest circuit sizes. Part two keeps connecting until one circuit
    holds every box and multiplies the x coordinates of the final pair.
    """

    day_number = 8

    def __init__(
        self,
        puzzle_input: PuzzleInput,
        *,
        connection_budget: Optional[int] = None,
        config: Optional[RunConfig] = None,
    ):
        if connection_budget is not None and connection_budget < 0:
            raise ValueError("connection_budget must be non-negative")
        self.puzzle_input = puzzle_input
        self.config = config or get_run_config()
        self._budget = connection_budget
        self._boxes: Optional[List[JunctionBox]] = None
        self._queue: Optional[DistanceQueue] = None

    @classmethod
    def from_config(cls, config: RunConfig) -> "ConnectivityBuilder":
        return cls(PuzzleInput.for_day(cls.day_number, config), config=config)

    @property
    def boxes(self) -> List[JunctionBox]:
        if self._boxes is None:
            self._boxes = parse_junction_boxes(self.puzzle_input.as_lines())
            logger.info("Parsed %d junction boxes", len(self._boxes))
        return self._boxes

    @property
    def connection_budget(self) -> int:
        if self._budget is not None:
            return self._budget
        return self.config.budget_for(len(self.boxes))

    def distance_queue(self) -> DistanceQueue:
        if self._queue is None:
            self._queue = DistanceQueue.from_boxes(self.boxes)
        return self._queue.fresh()

    def solve_part_one(self) -> int:
        queue = self.distance_queue()
        circuits = Circuits(self.boxes)
        budget = self.connection_budget
        used = 0
        while used < budget and queue:
            _, (a, b) = queue.pop()
            circuits.connect(a, b)
            used += 1
        logger.info(
            "Used %d/%d connections: %d circuit(s), largest sizes %s",
            used,
            budget,
            len(circuits),
            circuits.sizes()[:3],
        )
        return checked_int64(largest_circuit_product(circuits), "circuit size product", day=self.day_number, phase=1)

    def solve_part_two(self) -> int:
        circuits = Circuits(self.boxes)
        for distance, (a, b) in self.distance_queue():
            if circuits.connect(a, b) and circuits.is_complete:
                logger.info(
                    "Circuit completed after %d merges by %s and %s (distance %.3f)",
                    circuits.merge_count,
                    a,
                    b,
                    distance,
                )
                return checked_int64(
                    a.x * b.x, f"product of x coordinates {a.x} * {b.x}", day=self.day_number, phase=2
                )
        raise UnsolvableError(
            f"ran out of connections before all {len(self.boxes)} junction boxes formed one circuit",
            day=self.day_number,
            phase=2,
        )


apply_debug_logging(
    globals(),
    logger=logger,
    skip={"JunctionBox", "DistanceQueue.pop", "DistanceQueue.peek", "Circuits.connect", "Circuits.same_circuit"},
)
