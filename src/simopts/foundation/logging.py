from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "SIMOPTS_LOG_LEVEL"

LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 1,
}


def resolve_level(name: str | None, *, default: int = logging.WARNING) -> int:
    """
    Map a level name (as accepted by ``--verbose``) to a logging level.

    Unknown or empty names resolve to ``default``; level names may be abbreviated.
    """
    if not name:
        return default
    key = name.strip().lower()
    for level_name, level in LEVELS.items():
        if key and level_name.startswith(key):
            return level
    return default


def configure_simopts_logging(*, level: int | None = None) -> logging.Logger:
    """
    Configure a minimal console logger for simopts.

    Notes:
        - This is intentionally opt-in (library code must not call logging.basicConfig()).
        - The handler is only attached if neither the root logger nor the "simopts" logger has handlers.
        - Without an explicit level the SIMOPTS_LOG_LEVEL environment variable is consulted.
    """
    if level is None:
        level = resolve_level(os.environ.get(LOG_LEVEL_ENV))
    root = logging.getLogger()
    simopts_logger = logging.getLogger("simopts")

    # If the user already configured logging, don't interfere.
    if root.handlers or simopts_logger.handlers:
        return simopts_logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    simopts_logger.addHandler(handler)
    simopts_logger.setLevel(level)
    simopts_logger.propagate = False
    return simopts_logger


__all__ = ["LEVELS", "LOG_LEVEL_ENV", "configure_simopts_logging", "resolve_level"]
