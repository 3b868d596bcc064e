"""Contract shared by every puzzle kernel."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .config import RunConfig


@runtime_checkable
class PuzzleDay(Protocol):
    """A day's solver: an identity plus two independent phases."""

    day_number: int

    def solve_part_one(self) -> int:
        """Return the part one answer as a signed 64-bit value."""

    def solve_part_two(self) -> int:
        """Return the part two answer as a signed 64-bit value."""


class PuzzleDayFactory(Protocol):
    day_number: int

    def from_config(self, config: RunConfig) -> PuzzleDay:
        """Build the production kernel reading the configured input file."""


__all__ = ["PuzzleDay", "PuzzleDayFactory"]
