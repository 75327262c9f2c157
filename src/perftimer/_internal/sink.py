# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""Default output sink: forwards formatted timer lines to a logger."""

from __future__ import annotations

import logging
from typing import Callable

from perftimer.config import get_config

Sink = Callable[[str], None]


def logging_sink(logger_name: str | None = None) -> Sink:
    """Return a sink that writes each line at INFO level.

    Args:
        logger_name: Logger to write to. Defaults to the configured
            ``PERFTIMER_LOGGER_NAME``.
    """
    target = logging.getLogger(logger_name or get_config().logger_name)

    def _sink(line: str) -> None:
        target.info(line)

    return _sink
