"""Structured logging configuration for wvruns.

Usage:
    from wvruns.logging import get_logger, configure_logging

    # Call once at startup (CLI callback or API lifespan)
    configure_logging()

    logger = get_logger(__name__)
    logger.info("results_imported", meet_slug="state-meet-2024", accepted=212)

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    LOG_FORMAT: json, console (default: console for dev, json for prod)
    ENVIRONMENT: local, development, production (default: local)
"""

import logging
import os
import sys
from typing import Any

import structlog


def _get_environment() -> str:
    """Get current environment."""
    return os.getenv("ENVIRONMENT", "local").lower()


def _get_log_level() -> int:
    """Get log level from environment."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level, logging.INFO)


def _get_log_format() -> str:
    """Get log format - json for prod, console otherwise."""
    explicit = os.getenv("LOG_FORMAT")
    if explicit:
        return explicit.lower()
    return "json" if _get_environment() == "production" else "console"


def _add_environment(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add environment to all log entries."""
    event_dict["environment"] = _get_environment()
    return event_dict


def configure_logging() -> None:
    """Configure structlog for the application.

    Safe to call more than once; later calls replace the configuration.
    """
    log_format = _get_log_format()
    log_level = _get_log_level()

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_environment,
    ]

    if log_format == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Log lines go to stderr so CLI output on stdout stays clean
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("supabase").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name, typically __name__ from the calling module

    Returns:
        A configured structlog logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables that will be included in all subsequent logs.

    Example:
        bind_context(batch_id="2024-10-state", operator="admin")
        logger.info("processing")  # includes batch_id and operator
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
