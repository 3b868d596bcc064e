"""Read-only access to a day's puzzle text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .config import RunConfig, get_run_config
from .errors import MissingInputError

logger = logging.getLogger(__name__)

PAD = " "


class PuzzleInput:
    """Puzzle text exposed as a string, a list of lines or a padded character grid."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.name = str(self.path)
        self._text: Optional[str] = None

    @classmethod
    def from_text(cls, text: str, name: str = "<memory>") -> "PuzzleInput":
        inst = cls.__new__(cls)
        inst.path = None
        inst.name = name
        inst._text = text.replace("\r\n", "\n")
        return inst

    @classmethod
    def for_day(cls, day: int, config: Optional[RunConfig] = None) -> "PuzzleInput":
        config = config or get_run_config()
        return cls(config.input_path(day))

    def _load(self) -> str:
        if self._text is None:
            try:
                raw = self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise MissingInputError(f"unable to read puzzle input {self.path}: {exc}") from exc
            self._text = raw.replace("\r\n", "\n")
            logger.info("Read %d characters from %s", len(self._text), self.path)
        return self._text

    def as_string(self) -> str:
        return self._load()

    def as_lines(self) -> List[str]:
        lines = self._load().split("\n")
        while lines and not lines[-1]:
            lines.pop()
        return lines

    def as_grid(self) -> np.ndarray:
        """Return the lines as a ``(rows, cols)`` array of single characters, right-padded with spaces."""

        lines = self.as_lines()
        width = max((len(line) for line in lines), default=0)
        grid = np.full((len(lines), width), PAD, dtype="<U1")
        for row, line in enumerate(lines):
            if line:
                grid[row, : len(line)] = list(line)
        return grid

    def __repr__(self) -> str:
        return f"PuzzleInput({self.name!r})"


__all__ = ["PuzzleInput", "PAD"]
