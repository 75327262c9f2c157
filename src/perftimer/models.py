# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""Pydantic v2 data models for marks, measures and timer snapshots.

Marks and measures are frozen once created; the timer replaces a record
rather than mutating it when a name is marked or measured again.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SessionState(str, enum.Enum):
    """Which timing sessions are currently running."""

    IDLE = "IDLE"
    PRIMARY_ACTIVE = "PRIMARY_ACTIVE"
    AUDIT_ACTIVE = "AUDIT_ACTIVE"
    BOTH = "BOTH"

    @classmethod
    def from_flags(cls, primary: bool, audit: bool) -> SessionState:
        if primary and audit:
            return cls.BOTH
        if primary:
            return cls.PRIMARY_ACTIVE
        if audit:
            return cls.AUDIT_ACTIVE
        return cls.IDLE


class Mark(BaseModel):
    """A named timestamp."""

    model_config = ConfigDict(frozen=True)

    name: str
    timestamp: float = Field(description="Clock reading in milliseconds")


class Measure(BaseModel):
    """A named duration between two marks.

    ``duration_ms`` may be negative when the end mark was recorded before the
    start mark.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    duration_ms: float = Field(description="End mark timestamp minus start mark timestamp")


class TimerSnapshot(BaseModel):
    """Point-in-time copy of a timer's state, suitable for export."""

    state: SessionState = Field(default=SessionState.IDLE)
    primary_started_at: float | None = Field(default=None)
    audit_started_at: float | None = Field(default=None)
    marks: list[Mark] = Field(default_factory=list)
    measures: list[Measure] = Field(
        default_factory=list,
        description="Measures in the order they were first recorded",
    )

    def to_export_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dictionary."""
        return self.model_dump(mode="json")

    @property
    def measure_count(self) -> int:
        return len(self.measures)
