"""Exception hierarchy shared by the puzzle kernels."""

from __future__ import annotations

from typing import Optional

import numpy as np

_INT32 = np.iinfo(np.int32)
_INT64 = np.iinfo(np.int64)


class PuzzleError(Exception):
    """Base class for failures raised while solving a day."""

    def __init__(self, message: str, *, day: Optional[int] = None, phase: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.day = day
        self.phase = phase

    def located(self, day: int, phase: int) -> "PuzzleError":
        if self.day is None:
            self.day = day
        if self.phase is None:
            self.phase = phase
        return self

    def __str__(self) -> str:
        parts = []
        if self.day is not None:
            parts.append(f"day {self.day}")
        if self.phase is not None:
            parts.append(f"part {self.phase}")
        if not parts:
            return self.message
        return f"[{', '.join(parts)}] {self.message}"


class MalformedInputError(PuzzleError, ValueError):
    """Raised when puzzle input violates its structural rules."""


class UnsolvableError(PuzzleError, RuntimeError):
    """Raised when valid input leaves the algorithm without an answer."""


class ProductOverflowError(PuzzleError, OverflowError):
    """Raised when a result does not fit in a signed 64-bit integer."""


class MissingInputError(PuzzleError, FileNotFoundError):
    """Raised when an input file is absent or unreadable."""


def checked_int64(value: int, what: str = "result", **location: Optional[int]) -> int:
    """Return ``value`` unchanged if it fits in a signed 64-bit integer."""

    value = int(value)
    if value < _INT64.min or value > _INT64.max:
        raise ProductOverflowError(f"{what} {value} does not fit in a signed 64-bit integer", **location)
    return value



def checked_int32(value: int, what: str = "value", **location: Optional[int]) -> int:
    """Return ``value`` as an ``int`` if it fits in a signed 32-bit integer, else reject the input."""

    value = int(value)
    if value < _INT32.min or value > _INT32.max:
        raise MalformedInputError(f"{what} {value} does not fit in a signed 32-bit integer", **location)
    return value

__all__ = [
    "PuzzleError",
    "MalformedInputError",
    "UnsolvableError",
    "ProductOverflowError",
    "MissingInputError",
    "checked_int32",
    "checked_int64",
]
