import logging

import numpy as np
import pytest

from aoc2025.logging_utils import apply_debug_logging, debug_log_call, describe

LOGGER_NAME = "aoc2025.tests.logging"


def test_describe_summarises_arrays():
    assert describe(np.arange(3)) == "ndarray(shape=(3,), dtype=int64) values=[0, 1, 2]"
    big = describe(np.arange(100, dtype=np.int64))
    assert big.startswith("ndarray(shape=(100,), dtype=int64)")
    assert "min=" in big and "max=" in big


def test_describe_truncates_long_containers():
    rendered = describe(list(range(50)))
    assert rendered.endswith("... (50 items)]")
    assert "... (20 entries)" in describe({i: i for i in range(20)})


def test_debug_log_call_logs_entry_and_exit(caplog):
    logger = logging.getLogger(LOGGER_NAME)

    @debug_log_call(logger)
    def add(a, b=0):
        return a + b

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        assert add(2, b=3) == 5

    messages = [record.getMessage() for record in caplog.records]
    assert any(msg.startswith("Entering") and "add" in msg and "b=3" in msg for msg in messages)
    assert any(msg.startswith("Exiting") and msg.endswith("-> 5") for msg in messages)


def test_debug_log_call_reraises(caplog):
    logger = logging.getLogger(LOGGER_NAME)

    @debug_log_call(logger)
    def fail():
        raise KeyError("nope")

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        with pytest.raises(KeyError):
            fail()
    assert any(record.exc_info for record in caplog.records if "Exception in" in record.getMessage())


def test_debug_log_call_is_silent_above_debug(caplog):
    logger = logging.getLogger(LOGGER_NAME)
    wrapped = debug_log_call(logger)(lambda: 1)
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        assert wrapped() == 1
    assert not caplog.records


def test_apply_debug_logging_wraps_module_members():
    def helper():
        return "helper"

    class Kernel:
        def solve(self):
            return 42

        def quiet(self):
            return 0

    class Failure(Exception):
        pass

    for obj in (helper, Kernel, Failure):
        obj.__module__ = "fake_kernel"
    Kernel.solve.__module__ = Kernel.quiet.__module__ = "fake_kernel"

    namespace = {"__name__": "fake_kernel", "helper": helper, "Kernel": Kernel, "Failure": Failure, "np": np}
    apply_debug_logging(namespace, logger=logging.getLogger(LOGGER_NAME), skip={"Kernel.quiet"})

    assert getattr(namespace["helper"], "_aoc_debug_wrapped", False)
    assert getattr(Kernel.__dict__["solve"], "_aoc_debug_wrapped", False)
    assert not getattr(Kernel.__dict__["quiet"], "_aoc_debug_wrapped", False)
    assert namespace["np"] is np
    assert Kernel().solve() == 42


def test_kernel_modules_emit_debug_traces(caplog):
    from aoc2025.beam_tracer import BeamTracer
    from aoc2025.puzzle_input import PuzzleInput

    with caplog.at_level(logging.DEBUG, logger="aoc2025"):
        BeamTracer(PuzzleInput.from_text(".S.\n...\n")).solve_part_one()
    assert any("Entering BeamTracer.solve_part_one" in record.getMessage() for record in caplog.records)
