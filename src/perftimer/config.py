# Copyright 2026 PerfTimer Contributors
# SPDX-License-Identifier: Apache-2.0

"""PerfTimer configuration loaded from environment variables.

All configuration is read from PERFTIMER_* environment variables with sensible
defaults. The config singleton is initialized once and reused until
reset_config() is called.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env(key: str, default: str = "") -> str:
    """Read an environment variable with a default."""
    return os.environ.get(key, default)


def _env_bool(key: str, default: bool = True) -> bool:
    """Read a boolean environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int = 0) -> int:
    """Read an integer environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


@dataclass(frozen=True)
class PerfTimerConfig:
    """Immutable configuration read from environment variables.

    Attributes:
        logger_name: Logger the default sink writes timing lines to.
        log_level: Python logging level name applied by ``perftimer.init()``.
        precision: Decimal places used when rendering durations.
        debug: Attach a stderr handler to the perftimer logger on ``init()``.
    """

    logger_name: str = "perftimer"
    log_level: str = "INFO"
    precision: int = 3
    debug: bool = False

    @classmethod
    def from_env(cls) -> PerfTimerConfig:
        """Create a config by reading PERFTIMER_* environment variables.

        Environment Variables:
            PERFTIMER_LOGGER_NAME: Default "perftimer".
            PERFTIMER_LOG_LEVEL: Default "INFO".
            PERFTIMER_PRECISION: Default 3. Negative values fall back to 3.
            PERFTIMER_DEBUG: Default "false".
        """
        precision = _env_int("PERFTIMER_PRECISION", 3)
        return cls(
            logger_name=_env("PERFTIMER_LOGGER_NAME", "perftimer"),
            log_level=_env("PERFTIMER_LOG_LEVEL", "INFO").upper(),
            precision=precision if precision >= 0 else 3,
            debug=_env_bool("PERFTIMER_DEBUG", False),
        )


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_config: PerfTimerConfig | None = None


def get_config() -> PerfTimerConfig:
    """Return the global PerfTimerConfig singleton (lazy-initialized from env)."""
    global _config
    if _config is None:
        _config = PerfTimerConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config singleton. Primarily useful for testing."""
    global _config
    _config = None
