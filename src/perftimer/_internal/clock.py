# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""Monotonic millisecond clock used as the default timer time source.

The timer only needs millisecond granularity, but reads the nanosecond
monotonic counter so sub-millisecond differences survive the conversion.
The monotonic clock is immune to NTP adjustments and daylight saving changes,
making it reliable for measuring elapsed time between two marks.
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Return monotonic clock value in milliseconds (arbitrary epoch)."""
    return time.monotonic_ns() / 1_000_000


def elapsed_ms(start_ms: float, end_ms: float) -> float:
    """Compute the duration between two clock readings.

    Args:
        start_ms: Clock reading at the start of the interval.
        end_ms: Clock reading at the end of the interval.

    Returns:
        Duration in milliseconds. Negative when ``end_ms`` precedes
        ``start_ms``; the value is not clamped.
    """
    return end_ms - start_ms
