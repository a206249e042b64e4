"""
Logging utilities for the search sync service.

Provides structured logging with JSON output for better observability.
"""

import logging
import sys
from typing import Any, List

import structlog


def setup_sync_logger(name: str, level: str = "INFO", json_logs: bool = True) -> structlog.BoundLogger:
    """
    Set up structured logging for the sync service.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Whether to output JSON format logs

    Returns:
        Configured structlog logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    processors: List[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if json_logs:
        processors += [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # aiohttp access logs are noisy at INFO
    logging.getLogger("aiohttp").setLevel(logging.WARNING)

    return structlog.get_logger(name)


def get_sync_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)


def log_sync_event(logger: structlog.BoundLogger, event_type: str, codename: str, **kwargs: Any) -> None:
    """
    Log a sync event for one content item with structured data.

    Args:
        logger: Structured logger instance
        event_type: Type of event (notification_skipped, record_built, etc.)
        codename: Codename of the content item being processed
        **kwargs: Additional event data
    """
    event_data = {"event_type": event_type, "codename": codename, **kwargs}

    if event_type.endswith("_error") or event_type.endswith("_failed"):
        logger.error(event_type, **event_data)
    elif event_type.endswith("_warning") or event_type.endswith("_unreachable"):
        logger.warning(event_type, **event_data)
    else:
        logger.info(event_type, **event_data)
