# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the performance timer."""

from __future__ import annotations


class PerfTimerError(Exception):
    """Base class for timer misuse."""


class NotStartedError(PerfTimerError):
    """An operation needed a session that is not running.

    Raised by ``end()`` without a primary session, ``audit_end()`` without an
    audit session, and ``time_elapsed()`` when no session is active at all.
    """

    def __init__(self, operation: str, message: str | None = None) -> None:
        self.operation = operation
        super().__init__(message or f"{operation}() called before the timer was started")


class MissingMarkError(PerfTimerError, KeyError):
    """``measure()`` referenced a mark that was never recorded."""

    def __init__(self, mark_name: str) -> None:
        self.mark_name = mark_name
        super().__init__(mark_name)

    def __str__(self) -> str:
        # KeyError.__str__ would render the repr of the key
        return f"No mark named {self.mark_name!r}"
