# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""@measured decorator and measure_block() context manager.

Both wrap a unit of work in a ``{name}_start``/``{name}_end`` mark pair and
store the measure ``name`` on the timer. Instrumentation never breaks the
caller: timer failures are logged at DEBUG, while exceptions raised by the
wrapped code always propagate.

Usage:
    @measured(timer=timer)
    def load_rules():
        ...

    with measure_block("color_contrast", timer):
        check_contrast()
"""

from __future__ import annotations

import functools
import inspect
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Generator, TypeVar, overload

from perftimer.context import get_current_timer

if TYPE_CHECKING:
    from perftimer.models import Mark
    from perftimer.timer import PerformanceTimer

logger = logging.getLogger("perftimer")

F = TypeVar("F", bound=Callable[..., Any])


def _resolve_timer(timer: PerformanceTimer | None) -> PerformanceTimer | None:
    return timer if timer is not None else get_current_timer()


def _safe_mark(timer: PerformanceTimer, mark_name: str) -> Mark | None:
    try:
        timer.mark(mark_name)
        return timer.marks.get(mark_name)
    except Exception:
        logger.debug("Failed to record mark %s", mark_name, exc_info=True)
        return None


def _safe_finish(timer: PerformanceTimer, name: str, start: Mark | None, log: bool) -> None:
    _safe_mark(timer, f"{name}_end")
    try:
        if start is None or not timer.is_started:
            return
        # start() and reset() drop the mark; a nested call of the same name
        # only shadows it
        if start.name not in timer.marks:
            return
        timer.restore_mark(start)
        timer.measure(name, f"{name}_start", f"{name}_end")
        if log:
            timer.log_measures(name)
    except Exception:
        logger.debug("Failed to record measure %s", name, exc_info=True)


@contextmanager
def measure_block(
    name: str,
    timer: PerformanceTimer | None = None,
    *,
    log: bool = False,
) -> Generator[PerformanceTimer | None, None, None]:
    """Measure the enclosed block as ``name``.

    Args:
        name: Measure name. Marks ``{name}_start`` and ``{name}_end`` are
            recorded alongside it.
            Nested or recursive blocks with the same name each measure
            from their own start.
        timer: Timer to record on. Defaults to the current context timer;
            with neither the block runs unmeasured.
        log: Also call ``log_measures(name)`` when the block finishes.

    Yields:
        The timer in use, or None.
    """
    active = _resolve_timer(timer)
    if active is None:
        yield None
        return

    start = _safe_mark(active, f"{name}_start")
    try:
        yield active
    finally:
        _safe_finish(active, name, start, log)


def _make_measure_name(func: Callable, custom_name: str | None) -> str:
    """Determine the measure name for a decorated function."""
    if custom_name:
        return custom_name
    module = getattr(func, "__module__", "")
    qualname = getattr(func, "__qualname__", func.__name__)
    if module and module != "__main__":
        return f"{module}.{qualname}"
    return qualname


def _wrap_sync(
    func: Callable,
    measure_name: str,
    timer: PerformanceTimer | None,
    log: bool,
) -> Callable:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        with measure_block(measure_name, timer, log=log):
            return func(*args, **kwargs)

    return wrapper


def _wrap_async(
    func: Callable,
    measure_name: str,
    timer: PerformanceTimer | None,
    log: bool,
) -> Callable:
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        with measure_block(measure_name, timer, log=log):
            return await func(*args, **kwargs)

    return wrapper


# ── Public API ─────────────────────────────────────────────────────────


@overload
def measured(func: F) -> F: ...


@overload
def measured(
    func: None = None,
    *,
    name: str | None = None,
    timer: PerformanceTimer | None = None,
    log: bool = False,
) -> Callable[[F], F]: ...


def measured(
    func: F | None = None,
    *,
    name: str | None = None,
    timer: PerformanceTimer | None = None,
    log: bool = False,
) -> F | Callable[[F], F]:
    """Decorator that measures every call of a sync or async function.

    The timer is resolved per call, so ``@measured`` without ``timer=``
    follows whatever ``timer_context`` is active when the function runs.

    Args:
        func: The function to decorate (auto-filled when used as @measured).
        name: Measure name. Defaults to "module.qualname".
        timer: Explicit timer. Defaults to the current context timer.
        log: Log the measure after each call.

    Examples:
        @measured
        def parse(tree):
            ...

        @measured(name="fetch", timer=timer, log=True)
        async def fetch(url):
            ...
    """

    def decorator(fn: F) -> F:
        measure_name = _make_measure_name(fn, name)
        if inspect.iscoroutinefunction(fn):
            return _wrap_async(fn, measure_name, timer, log)  # type: ignore[return-value]
        return _wrap_sync(fn, measure_name, timer, log)  # type: ignore[return-value]

    if func is not None:
        return decorator(func)
    return decorator
