# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""PerformanceTimer: the heart of perftimer.

The timer records named marks, derives named measures from pairs of marks,
and writes one human-readable line per duration to its sink. It also tracks
two timing sessions: a primary run bounded by ``start()``/``end()`` and an
audit run bounded by ``audit_start()``/``audit_end()``.

Usage:
    timer = PerformanceTimer()
    timer.start()
    timer.mark("rules_start")
    run_rules()
    timer.mark("rules_end")
    timer.measure("rules", "rules_start", "rules_end")
    timer.log_measures()          # "Measure rules took 12.345ms"
    timer.end()                   # "Measure axe took 20.001ms"

The line formats are scraped by downstream tooling and must not change.
"""

from __future__ import annotations

import logging

from perftimer._internal.clock import Clock, elapsed_ms, monotonic_ms
from perftimer._internal.sink import Sink, logging_sink
from perftimer.config import get_config
from perftimer.errors import MissingMarkError, NotStartedError
from perftimer.models import Mark, Measure, SessionState, TimerSnapshot

logger = logging.getLogger("perftimer")

NOT_STARTED_WARNING = "Axe must be started before using performanceTimer"
PRIMARY_MEASURE_NAME = "axe"
AUDIT_MEASURE_NAME = "audit_start_to_end"


class PerformanceTimer:
    """Mark/measure store with primary and audit timing sessions.

    Not thread-safe: a single instance assumes one flow of control at a time.

    Args:
        clock: Zero-argument callable returning monotonic milliseconds.
            Defaults to ``monotonic_ms``.
        sink: One-argument callable receiving each formatted line.
            Defaults to an INFO-level logging sink.
        precision: Decimal places for rendered durations. Defaults to
            ``PERFTIMER_PRECISION``.

    Raises:
        ValueError: ``precision`` is negative.
    """

    __slots__ = (
        "_clock",
        "_sink",
        "_precision",
        "_primary_started_at",
        "_audit_started_at",
        "_marks",
        "_measures",
        "_warned",
    )

    def __init__(
        self,
        clock: Clock | None = None,
        sink: Sink | None = None,
        *,
        precision: int | None = None,
    ) -> None:
        if precision is not None and precision < 0:
            raise ValueError(f"precision must be >= 0, got {precision}")
        self._clock: Clock = monotonic_ms if clock is None else clock
        self._sink: Sink = logging_sink() if sink is None else sink
        self._precision: int = get_config().precision if precision is None else precision

        # Session state
        self._primary_started_at: float | None = None
        self._audit_started_at: float | None = None

        # Stores; dict keeps first-insertion order on reassignment
        self._marks: dict[str, Mark] = {}
        self._measures: dict[str, Measure] = {}

        # The idle warning is emitted once until a session next starts
        self._warned: bool = False

    # ── Sessions ──────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin (or restart) the primary session.

        Discards every mark and measure recorded so far.
        """
        self._primary_started_at = self._clock()
        self._marks.clear()
        self._measures.clear()
        self._warned = False
        logger.debug("Primary session started at %.3f", self._primary_started_at)

    def end(self) -> float:
        """End the primary session and log its total duration.

        Returns:
            Milliseconds since ``start()``.

        Raises:
            NotStartedError: No primary session is running.
        """
        if self._primary_started_at is None:
            raise NotStartedError("end")
        elapsed = elapsed_ms(self._primary_started_at, self._clock())
        self._primary_started_at = None
        self._emit_measure(PRIMARY_MEASURE_NAME, elapsed)
        return elapsed

    def audit_start(self) -> None:
        """Begin the audit session. Marks, measures and the primary session are kept."""
        self._audit_started_at = self._clock()
        self._warned = False
        logger.debug("Audit session started at %.3f", self._audit_started_at)

    def audit_end(self) -> float:
        """End the audit session and log its total duration.

        Raises:
            NotStartedError: No audit session is running.
        """
        if self._audit_started_at is None:
            raise NotStartedError("audit_end")
        elapsed = elapsed_ms(self._audit_started_at, self._clock())
        self._audit_started_at = None
        self._emit_measure(AUDIT_MEASURE_NAME, elapsed)
        return elapsed

    # ── Marks and measures ────────────────────────────────────────────

    def mark(self, name: str) -> None:
        """Record the current time under ``name``, replacing any earlier mark."""
        if not self._require_session():
            return
        self._marks[name] = Mark(name=name, timestamp=self._clock())

    def restore_mark(self, mark: Mark) -> None:
        """Put back a mark recorded earlier, replacing whatever holds its name now."""
        if not self._require_session():
            return
        self._marks[mark.name] = mark

    def measure(self, name: str, start_mark: str, end_mark: str) -> Measure | None:
        """Store the duration between two recorded marks under ``name``.

        A repeated ``name`` replaces the value but keeps its original
        position in the logging order.

        Returns:
            The stored measure, or None when no session is active.

        Raises:
            MissingMarkError: ``start_mark`` or ``end_mark`` was never marked.
        """
        if not self._require_session():
            return None
        start = self._marks.get(start_mark)
        if start is None:
            raise MissingMarkError(start_mark)
        end = self._marks.get(end_mark)
        if end is None:
            raise MissingMarkError(end_mark)

        result = Measure(name=name, duration_ms=elapsed_ms(start.timestamp, end.timestamp))
        self._measures[name] = result
        return result

    def log_measures(self, name: str | None = None) -> None:
        """Write one line per measure to the sink.

        Args:
            name: Only log this measure. Unknown names log nothing. When
                omitted every measure is logged in insertion order.
        """
        if not self._require_session():
            return
        if name is not None:
            found = self._measures.get(name)
            if found is not None:
                self._emit_measure(found.name, found.duration_ms)
            return
        for entry in list(self._measures.values()):
            self._emit_measure(entry.name, entry.duration_ms)

    def time_elapsed(self) -> float:
        """Return milliseconds since the relevant session started.

        The primary session wins when both sessions are running.

        Raises:
            NotStartedError: Neither session is running.
        """
        if self._primary_started_at is not None:
            reference = self._primary_started_at
        elif self._audit_started_at is not None:
            reference = self._audit_started_at
        else:
            raise NotStartedError("time_elapsed")
        return elapsed_ms(reference, self._clock())

    # ── Inspection ────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return SessionState.from_flags(
            self._primary_started_at is not None,
            self._audit_started_at is not None,
        )

    @property
    def is_started(self) -> bool:
        """Whether a primary or audit session is running."""
        return self.state is not SessionState.IDLE

    @property
    def marks(self) -> dict[str, Mark]:
        return dict(self._marks)

    @property
    def measures(self) -> list[Measure]:
        """Measures in the order they were first recorded."""
        return list(self._measures.values())

    def get_measure(self, name: str) -> Measure | None:
        return self._measures.get(name)

    def snapshot(self) -> TimerSnapshot:
        """Copy the current sessions, marks and measures into a TimerSnapshot."""
        return TimerSnapshot(
            state=self.state,
            primary_started_at=self._primary_started_at,
            audit_started_at=self._audit_started_at,
            marks=list(self._marks.values()),
            measures=self.measures,
        )

    def reset(self) -> None:
        """Drop both sessions and all recorded data without logging."""
        self._primary_started_at = None
        self._audit_started_at = None
        self._marks.clear()
        self._measures.clear()
        self._warned = False
        logger.debug("Timer reset")

    # ── Internals ─────────────────────────────────────────────────────

    def _require_session(self) -> bool:
        if self.is_started:
            return True
        if not self._warned:
            self._warned = True
            self._sink(NOT_STARTED_WARNING)
        return False

    def _emit_measure(self, name: str, duration: float) -> None:
        self._sink(format_measure(name, duration, self._precision))

    def __repr__(self) -> str:
        return (
            f"PerformanceTimer(state={self.state.value}, "
            f"marks={len(self._marks)}, measures={len(self._measures)})"
        )


def format_duration(duration: float, precision: int = 3) -> str:
    """Render milliseconds with a fixed number of decimal places."""
    return f"{duration:.{precision}f}"


def format_measure(name: str, duration: float, precision: int = 3) -> str:
    """Build the ``Measure {name} took {duration}ms`` log line."""
    return f"Measure {name} took {format_duration(duration, precision)}ms"
