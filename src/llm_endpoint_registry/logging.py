"""Logging utilities for the endpoint registry.

This module provides standardized logging functionality for store, header
and share operations. All records go through the package logger, which has a
``NullHandler`` attached so that library users decide where output ends up.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

LOGGER_NAME = "llm_endpoint_registry"

_package_logger = logging.getLogger(LOGGER_NAME)
_package_logger.addHandler(logging.NullHandler())


class LogLevel(int, Enum):
    """Log levels for the registry."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for registry logging."""

    ACCESS_STORE = "access_store"
    REMOTE_CONFIG = "remote_config"
    REGISTRY = "registry"
    HEADERS = "headers"
    SHARE = "share"
    MIGRATION = "migration"
    PERSISTENCE = "persistence"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger below the package logger.

    Args:
        name: Optional child name. Module paths inside the package are
            accepted as-is.

    Returns:
        The logger instance
    """
    if not name or name == LOGGER_NAME:
        return _package_logger
    if name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def _log(
    callback: LogCallback,
    level: LogLevel,
    event: LogEvent,
    data: Dict[str, Any],
) -> None:
    """Log an event with the provided callback.

    Args:
        callback: Function to call with the log data
        level: Severity level
        event: Event type
        data: Dictionary of event data
    """
    try:
        callback(level, str(event.value), data)
    except Exception as e:
        # Fallback to standard logging if callback fails
        logging.error(
            f"Logging callback failed with error: {e}. Original log: "
            f"level={level}, event={event}, data={data}"
        )


def _emit(level: int, event_name: str, data: Dict[str, Any]) -> None:
    message = data.pop("message", "")
    if data:
        details = ", ".join(f"{key}={value}" for key, value in data.items())
        message = f"{message} ({details})" if message else details
    _package_logger.log(level, f"[{event_name}] {message}")


def _log_with(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    _log(_emit, level, event, {"message": message, **data})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _log_with(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _log_with(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _log_with(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _log_with(LogLevel.ERROR, event, message, data)


def configure_logging(level: str = "WARNING") -> None:
    """Attach a stream handler to the package logger at the given level.

    Used by the CLI; library users normally configure logging themselves.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"WARNING"``
    """
    _package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    # Replace any earlier stream handler so output follows the current stderr
    for existing in list(_package_logger.handlers):
        if type(existing) is logging.StreamHandler:
            _package_logger.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    _package_logger.addHandler(handler)
