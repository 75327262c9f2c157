# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""Context-scoped "current timer" for code that cannot take one explicitly.

Uses Python's `contextvars` module so each thread and asyncio task sees its own
current timer. There is no process-wide default: code outside any
`timer_context` gets None and should treat instrumentation as disabled.

Usage:
    timer = PerformanceTimer()
    with timer_context(timer):
        run_checks()   # helpers call get_current_timer() to find `timer`
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Generator

if TYPE_CHECKING:
    from perftimer.timer import PerformanceTimer

_timer_var: contextvars.ContextVar[PerformanceTimer | None] = contextvars.ContextVar(
    "perftimer_current_timer", default=None
)


def get_current_timer() -> PerformanceTimer | None:
    """Return the timer installed for this context, or None."""
    return _timer_var.get()


@contextmanager
def timer_context(timer: PerformanceTimer) -> Generator[PerformanceTimer, None, None]:
    """Make `timer` the current timer until the block exits.

    Nested contexts shadow the outer timer and restore it on exit.

    Yields:
        The same timer, for convenience.
    """
    token = _timer_var.set(timer)
    try:
        yield timer
    finally:
        _timer_var.reset(token)


def clear_context() -> None:
    """Forget the current timer. Primarily for testing."""
    _timer_var.set(None)
