"""
Logging setup for the Friday service and controllers.

``configure_logging()`` is called once by ``friday.app`` on import. Verbose
output for individual subsystems is switched on with ``LOG_DEBUG``, e.g.
``LOG_DEBUG=search,geo`` to trace keystroke debouncing and geo resolution
without turning on DEBUG for every library.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

from friday import config

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Short names accepted by LOG_DEBUG, mapped onto package loggers.
SUBSYSTEM_LOGGERS = {
    "search": ("friday.search",),
    "geo": ("friday.geo", "friday.clients.geo_lookup"),
    "forms": ("friday.forms", "friday.gate"),
    "api": ("friday.api", "friday.clients", "friday.rate_limiter"),
    "mail": ("friday.mailer",),
    "cache": ("friday.cache_backend",),
}

_THIRD_PARTY_QUIET = ("httpx", "httpcore", "uvicorn.access")

_configured = False


def _resolve_level(name: Optional[str]) -> int:
    level = logging.getLevelName((name or config.LOG_LEVEL).upper())
    return level if isinstance(level, int) else logging.INFO


def enable_debug(subsystems: Iterable[str]) -> list:
    """Set DEBUG on the loggers behind each subsystem name; unknown names are skipped."""
    enabled = []
    for name in subsystems:
        for logger_name in SUBSYSTEM_LOGGERS.get(name.strip().lower(), ()):
            logging.getLogger(logger_name).setLevel(logging.DEBUG)
            enabled.append(logger_name)
    return enabled


def configure_logging(level: Optional[str] = None, debug: Optional[Iterable[str]] = None) -> None:
    """Install one stdout handler on the root logger (first call only).

    ``level`` defaults to ``LOG_LEVEL``; ``debug`` to the ``LOG_DEBUG`` list.
    """
    global _configured
    if _configured:
        return

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    # uvicorn installs its own handlers when it owns the process
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    for name in _THIRD_PARTY_QUIET:
        logging.getLogger(name).setLevel(logging.WARNING)

    enabled = enable_debug(config.LOG_DEBUG if debug is None else debug)
    if enabled:
        logging.getLogger(__name__).info("debug logging on for %s", ", ".join(enabled))

    _configured = True


def reset_logging_for_tests() -> None:
    global _configured
    _configured = False
