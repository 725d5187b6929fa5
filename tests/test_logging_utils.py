import asyncio
import logging

import numpy as np
import pytest

from euclid_diagram.logging_utils import _safe_repr, debug_log_call
from euclid_diagram.terms import app, const

logger = logging.getLogger("tests.logging_utils")


def test_sync_calls_are_traced(caplog):
    @debug_log_call(logger)
    def add(x, y):
        return x + y

    with caplog.at_level(logging.DEBUG, logger="tests.logging_utils"):
        assert add(2, y=3) == 5

    assert "Entering " in caplog.text
    assert "args=[2], kwargs={y=3}" in caplog.text
    assert "-> 5" in caplog.text


def test_coroutines_are_traced_after_await(caplog):
    @debug_log_call(logger, name="fetch")
    async def fetch():
        await asyncio.sleep(0)
        return "done"

    with caplog.at_level(logging.DEBUG, logger="tests.logging_utils"):
        assert asyncio.run(fetch()) == "done"

    assert "Exiting fetch -> 'done'" in caplog.text


def test_exceptions_propagate():
    @debug_log_call(logger)
    def boom():
        raise RuntimeError("bad")

    with pytest.raises(RuntimeError):
        boom()


def test_wrapping_is_idempotent():
    def f():
        return 1

    once = debug_log_call(logger)(f)

    assert debug_log_call(logger)(once) is once


def test_safe_repr_summaries():
    assert _safe_repr(app("OnLine", const("a"), const("L"))) == "OnLine(a, L)"
    assert _safe_repr(np.array([1.0, 3.0])).startswith("ndarray(shape=(2,), dtype=float64)")
    assert _safe_repr(list(range(8))) == "[0, 1, 2, 3, 4, ... (8 total)]"
