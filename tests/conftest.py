# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared pytest fixtures for perftimer tests."""

import logging
import os

import pytest

from perftimer.config import reset_config
from perftimer.context import clear_context
from perftimer.timer import PerformanceTimer


class FakeClock:
    """Settable millisecond clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingSink:
    """Sink that keeps every line it receives."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, line: str) -> None:
        self.messages.append(line)


def _clear_env():
    for key in list(os.environ.keys()):
        if key.startswith("PERFTIMER_"):
            del os.environ[key]


@pytest.fixture(autouse=True)
def reset_perftimer():
    """Reset config, context and env vars around each test."""
    clear_context()
    reset_config()
    _clear_env()
    yield
    clear_context()
    reset_config()
    _clear_env()
    logging.getLogger("perftimer").setLevel(logging.NOTSET)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def timer(clock, sink):
    """A timer on the fake clock with a recording sink."""
    return PerformanceTimer(clock=clock, sink=sink)


@pytest.fixture
def real_timer(sink):
    """A timer on the real monotonic clock with a recording sink."""
    return PerformanceTimer(sink=sink)
