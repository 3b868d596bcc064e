"""Configuration helpers for the puzzle runner."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class RunConfig:
    """Where inputs live and the knobs the kernels read."""

    input_dir: Path = field(default_factory=lambda: Path("inputs"))
    connection_budget: int = 1000
    sample_connection_budget: int = 10
    sample_threshold: int = 1000
    memoize_timelines: bool = True

    def input_path(self, day: int) -> Path:
        return Path(self.input_dir) / f"{day}.txt"

    def budget_for(self, box_count: int) -> int:
        """Return the Day 08 connection budget for an input of ``box_count`` boxes."""

        if box_count >= self.sample_threshold:
            return self.connection_budget
        return self.sample_connection_budget


_RUN_CONFIG = RunConfig()


def get_run_config() -> RunConfig:
    return copy.deepcopy(_RUN_CONFIG)


def set_run_config(config: RunConfig) -> None:
    global _RUN_CONFIG
    _RUN_CONFIG = copy.deepcopy(config)


__all__ = ["RunConfig", "get_run_config", "set_run_config"]
