"""Run registered kernels day by day, timing each phase."""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Tuple

from .beam_tracer import BeamTracer
from .circuits import ConnectivityBuilder
from .config import RunConfig, get_run_config
from .day import PuzzleDay, PuzzleDayFactory
from .errors import PuzzleError
from .tiles import RectangleValidator

logger = logging.getLogger(__name__)

KERNELS: Dict[int, PuzzleDayFactory] = {}


def register_kernel(factory: PuzzleDayFactory) -> PuzzleDayFactory:
    day = factory.day_number
    if day in KERNELS and KERNELS[day] is not factory:
        raise ValueError(f"day {day} already registered to {KERNELS[day].__name__}")
    KERNELS[day] = factory
    return factory


for _factory in (BeamTracer, ConnectivityBuilder, RectangleValidator):
    register_kernel(_factory)


def known_days() -> List[int]:
    return sorted(KERNELS)


def build_kernel(day: int, config: Optional[RunConfig] = None) -> PuzzleDay:
    try:
        factory = KERNELS[day]
    except KeyError:
        raise ValueError(f"no kernel registered for day {day} (known days: {known_days()})") from None
    return factory.from_config(config or get_run_config())


@dataclass
class StopWatch:
    """Named task timer with a per-task summary table."""

    name: str = ""
    tasks: List[Tuple[str, float]] = field(default_factory=list)
    _current: Optional[str] = field(default=None, repr=False)
    _started: float = field(default=0.0, repr=False)

    def start(self, task: str) -> None:
        if self._current is not None:
            raise RuntimeError(f"stopwatch already running task {self._current!r}")
        self._current = task
        self._started = time.perf_counter()

    def stop(self) -> float:
        if self._current is None:
            raise RuntimeError("stopwatch is not running")
        elapsed = time.perf_counter() - self._started
        self.tasks.append((self._current, elapsed))
        self._current = None
        return elapsed

    @property
    def running(self) -> bool:
        return self._current is not None

    @property
    def total_seconds(self) -> float:
        return sum(seconds for _, seconds in self.tasks)

    def pretty_print(self) -> str:
        total = self.total_seconds
        lines = [f"StopWatch '{self.name}': {total:.6f} seconds"]
        lines.append("-" * 42)
        lines.append(f"{'Seconds':>12}  {'%':>5}  Task name")
        lines.append("-" * 42)
        for task, seconds in self.tasks:
            share = 100.0 * seconds / total if total > 0 else 0.0
            lines.append(f"{seconds:>12.6f}  {share:>4.0f}%  {task}")
        return "\n".join(lines)


@dataclass
class DayResult:
    day: int
    part_one: Optional[int] = None
    part_two: Optional[int] = None
    error: Optional[PuzzleError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _run_phase(
    day: int,
    phase: int,
    solve: Callable[[], int],
    watch: StopWatch,
    out: TextIO,
) -> int:
    watch.start(f"Day {day}.{phase}")
    try:
        value = solve()
    finally:
        watch.stop()
    print(f"Day {day}.{phase}'s solution is: {value}", file=out)
    return value


def run_days(
    days: Optional[Iterable[int]] = None,
    config: Optional[RunConfig] = None,
    out: Optional[TextIO] = None,
) -> List[DayResult]:
    """Solve ``days`` in order, printing solutions and a timing table to ``out``.

    A failing phase ends that day's run; the remaining days still run. Errors that
    are not :class:`PuzzleError` are wrapped in one tagged with the failing phase.
    """

    config = config or get_run_config()
    out = out or sys.stdout
    days = known_days() if days is None else list(days)
    watch = StopWatch("Advent of Code 2025")
    results: List[DayResult] = []

    for day in days:
        print(f"----- Day {day} -----", file=out)
        result = DayResult(day)
        results.append(result)
        phase = 1
        try:
            kernel = build_kernel(day, config)
            result.part_one = _run_phase(day, 1, kernel.solve_part_one, watch, out)
            phase = 2
            result.part_two = _run_phase(day, 2, kernel.solve_part_two, watch, out)
        except PuzzleError as exc:
            result.error = exc.located(day, phase)
            logger.error("Day %d failed: %s", day, result.error)
            print(f"Day {day}.{result.error.phase} failed: {result.error.message}", file=out)
        except Exception as exc:
            error = PuzzleError(f"{type(exc).__name__}: {exc}", day=day, phase=phase)
            error.__cause__ = exc
            result.error = error
            logger.error("Day %d failed unexpectedly", day, exc_info=exc)
            print(f"Day {day}.{phase} failed: {error.message}", file=out)
        print(file=out)

    print(watch.pretty_print(), file=out)
    failed = [result.day for result in results if not result.ok]
    if failed:
        logger.warning("%d day(s) failed: %s", len(failed), failed)
    return results


def exit_code(results: Iterable[DayResult]) -> int:
    return 0 if all(result.ok for result in results) else 1


__all__ = [
    "KERNELS",
    "DayResult",
    "StopWatch",
    "build_kernel",
    "exit_code",
    "known_days",
    "register_kernel",
    "run_days",
]
