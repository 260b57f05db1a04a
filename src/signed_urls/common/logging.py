"""Structured logging setup built on structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

REDACT_KEYS = {"secret", "signature", "authorization", "password"}


def _redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in list(event_dict.keys()):
        if key.lower() in REDACT_KEYS and event_dict[key] is not None:
            event_dict[key] = "***"
    return event_dict


def setup_logging(level: str | int = "INFO", log_format: str = "json") -> None:
    """
    Configure structlog on top of stdlib logging.

    Call once at process start, before serving requests. Records go to
    stderr so stdout stays free for command output.

    Args:
        level: Log level name or number
        log_format: "json" or "console"
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    renderer: Any
    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _redact_secrets,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """
    Get a structlog logger for a module.

    The logger is resolved on first use, so module-level loggers pick up
    whatever ``setup_logging`` configured later.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)
