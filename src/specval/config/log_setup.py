# src/specval/config/log_setup.py
from __future__ import annotations

import logging

from specval.errors import ConfigError

LOG_FORMAT = "[%(levelname)s] %(message)s"


def setup_logging(level: str | int = "WARNING") -> None:
    """
    @brief
    Initializes logging for the specval package.

    @details
    Accepts a level name ("DEBUG", "info", ...) or a numeric level and
    configures the root logger with a simple console format. Unknown
    level names raise ConfigError.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ConfigError(
                message=f"Unknown log level: {level}",
                source="setup_logging",
                suggested_action="Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL.",
            )
        level = resolved

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("specval").setLevel(level)
