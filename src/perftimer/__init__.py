# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""PerfTimer: named marks, measures and session timing for a single run.

Quick Start:
    from perftimer import PerformanceTimer

    timer = PerformanceTimer()
    timer.start()
    timer.mark("parse_start")
    parse()
    timer.mark("parse_end")
    timer.measure("parse", "parse_start", "parse_end")
    timer.log_measures()
    timer.end()

Public API:
    - PerformanceTimer: mark/measure store with primary and audit sessions
    - measured / measure_block: decorator and context manager helpers
    - timer_context / get_current_timer: context-scoped current timer
    - init: configure logging for the perftimer logger
"""

from __future__ import annotations

__version__ = "0.1.0"
__all__ = [
    "PerformanceTimer",
    "Mark",
    "Measure",
    "SessionState",
    "TimerSnapshot",
    "PerfTimerError",
    "NotStartedError",
    "MissingMarkError",
    "measured",
    "measure_block",
    "timer_context",
    "get_current_timer",
    "init",
    "__version__",
]

import logging
import os

from perftimer.config import get_config, reset_config
from perftimer.context import get_current_timer, timer_context
from perftimer.decorator import measure_block, measured
from perftimer.errors import MissingMarkError, NotStartedError, PerfTimerError
from perftimer.models import Mark, Measure, SessionState, TimerSnapshot
from perftimer.timer import PerformanceTimer


def init(
    *,
    logger_name: str | None = None,
    log_level: str | None = None,
    precision: int | None = None,
    debug: bool | None = None,
) -> None:
    """Apply configuration overrides and set up the perftimer logger.

    Any provided arguments override the corresponding PERFTIMER_* environment
    variables. Timers created before the call keep the settings they were
    built with.

    Args:
        logger_name: Logger for the default sink (overrides PERFTIMER_LOGGER_NAME).
        log_level: Logging level name (overrides PERFTIMER_LOG_LEVEL).
        precision: Duration decimal places (overrides PERFTIMER_PRECISION).
        debug: Attach a stderr handler (overrides PERFTIMER_DEBUG).
    """
    if logger_name is not None:
        os.environ["PERFTIMER_LOGGER_NAME"] = logger_name
    if log_level is not None:
        os.environ["PERFTIMER_LOG_LEVEL"] = log_level
    if precision is not None:
        os.environ["PERFTIMER_PRECISION"] = str(precision)
    if debug is not None:
        os.environ["PERFTIMER_DEBUG"] = str(debug).lower()

    # Reset the singleton so it picks up new env vars
    reset_config()

    config = get_config()
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level, logging.INFO)
    targets = {"perftimer", config.logger_name}
    for target in targets:
        logging.getLogger(target).setLevel(level)

    if config.debug:
        perftimer_logger = logging.getLogger("perftimer")
        if not perftimer_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("[perftimer] %(levelname)s %(name)s: %(message)s")
            )
            perftimer_logger.addHandler(handler)
