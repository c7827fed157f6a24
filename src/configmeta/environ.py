# Copyright (c) 2021-2025, Francis Clairicia-Rose-Claire-Josephine
#
#
"""configmeta's environment helper module

CONFIGMETA_MONITOR selects the monitor used when describe() is called without one:
    - "none" (default): problems are only collected
    - "log": problems are also logged with the 'configmeta' logger
    - "warnings": problems are also emitted as ConfigurationProblemWarning
"""

from __future__ import annotations

__all__ = ["MONITOR_ENV_VAR", "default_monitor"]

import os
import warnings
from typing import Final

from .problems import NULL_MONITOR, LoggingMonitor, Monitor, WarningsMonitor
from .warnings import ConfigMetaEnvironmentWarning

MONITOR_ENV_VAR: Final[str] = "CONFIGMETA_MONITOR"


def default_monitor() -> Monitor:
    value: str = os.environ.get(MONITOR_ENV_VAR, "").strip().lower()
    match value:
        case "" | "none":
            return NULL_MONITOR
        case "log":
            return LoggingMonitor()
        case "warnings":
            return WarningsMonitor()
        case _:
            warnings.warn(
                f"Invalid value for {MONITOR_ENV_VAR!r}, got {os.environ[MONITOR_ENV_VAR]!r}. Falling back to 'none'",
                category=ConfigMetaEnvironmentWarning,
                stacklevel=2,
            )
            return NULL_MONITOR
