"""
Logging configuration for sandbox-playground.

Configures structlog with a human-readable text renderer (default) or JSON
output, and request-scoped context through contextvars.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict

LEVEL_COLORS = {
    "debug": "\033[36m",
    "info": "\033[32m",
    "warning": "\033[33m",
    "error": "\033[31m",
    "critical": "\033[35m",
}
RESET = "\033[0m"


def add_color(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Wrap the level name in an ANSI color for console output."""
    color = LEVEL_COLORS.get(method_name, RESET)
    if "level" in event_dict:
        event_dict["level"] = f"{color}{event_dict['level'].upper()}{RESET}"
    return event_dict


def text_renderer(logger: Any, method_name: str, event_dict: EventDict) -> str:
    """
    Render one line per event.

    Format: [timestamp] [LEVEL] [logger] message key=value ...
    """
    timestamp = event_dict.pop("timestamp", "")
    level = event_dict.pop("level", "INFO")
    logger_name = event_dict.pop("logger_name", event_dict.pop("logger", None))
    message = event_dict.pop("event", "")
    exc_text = event_dict.pop("exception", None)

    parts = []
    if timestamp:
        parts.append(f"[{timestamp}]")
    parts.append(f"[{level}]")
    if logger_name and logger_name != "root":
        parts.append(f"[{logger_name}]")
    parts.append(str(message))

    for key, value in sorted(event_dict.items()):
        if key in ("exc_info", "stack_info"):
            continue
        if isinstance(value, (str, int, float, bool)):
            parts.append(f"{key}={value}")
        else:
            parts.append(f"{key}={value!r}")

    line = " ".join(parts)
    if exc_text:
        line += "\n" + exc_text
    return line


def configure_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """
    Configure structlog for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "text" (default) or "json"
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(add_color)
        processors.append(text_renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None, **context) -> structlog.stdlib.BoundLogger:
    """
    Get a logger, optionally bound to extra context.

    Example:
        logger = get_logger(__name__)
        logger.info("Catalog refreshed", entries=42)
    """
    if name:
        return structlog.get_logger(name, **context)
    return structlog.get_logger(**context)


def bind_context(**context) -> None:
    """Bind context to every log line emitted in the current request."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
