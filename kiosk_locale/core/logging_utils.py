#!/usr/bin/env python3
"""Centralized logging utilities with consistent formatting."""

import logging
import sys
from pathlib import Path
from typing import Any

# Global configuration
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LEVEL = logging.INFO
_CONFIGURED_LOGGERS: set[str] = set()


def setup_logger(
    name: str,
    level: int | None = None,
    format_string: str | None = None,
    stream: Any = None,
) -> logging.Logger:
    """Set up a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: INFO)
        format_string: Custom format string (optional)
        stream: Output stream (default: sys.stdout)

    Returns:
        Configured logger instance

    Example:
        >>> from kiosk_locale.core.logging_utils import setup_logger
        >>> logger = setup_logger(__name__)
        >>> logger.info("Locales loading")
    """
    logger = logging.getLogger(name)

    # Only configure once per logger name
    if name in _CONFIGURED_LOGGERS:
        return logger

    # Level follows the global default unless given
    if level is None:
        level = _DEFAULT_LEVEL
    logger.setLevel(level)

    # Attach a stream handler unless one was added elsewhere
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        formatter = logging.Formatter(
            format_string or _LOG_FORMAT,
            datefmt=_LOG_DATE_FORMAT,
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Prevent propagation to root logger (avoid duplicate logs)
    logger.propagate = False

    # Remember it so set_global_log_level() and file logging reach it
    _CONFIGURED_LOGGERS.add(name)

    return logger


def set_global_log_level(level: int | str):
    """Set log level for all configured loggers.

    Args:
        level: Logging level (e.g., logging.DEBUG or "DEBUG")
    """
    global _DEFAULT_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _DEFAULT_LEVEL = level

    # Apply to loggers that already exist
    for logger_name in _CONFIGURED_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)


def configure_file_logging(
    log_dir: str | Path = "runtime",
    log_file: str = "kiosk_locale.log",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 3,
):
    """Configure file-based logging with rotation.

    Args:
        log_dir: Directory for log files
        log_file: Log file name
        max_bytes: Maximum file size before rotation
        backup_count: Number of backup files to keep
    """
    from logging.handlers import RotatingFileHandler

    # Log directory is created on demand
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # One rotating handler shared by every configured logger
    file_handler = RotatingFileHandler(
        log_path / log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
    )
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT))

    for logger_name in _CONFIGURED_LOGGERS:
        logger = logging.getLogger(logger_name)
        # Skip loggers that already write to a file
        has_file_handler = any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        if not has_file_handler:
            logger.addHandler(file_handler)


# Structured event lines (language changes, ready transitions)
def log_event(
    logger: logging.Logger,
    event_name: str,
    data: dict[str, Any] | None = None,
):
    """Log a structured event.

    Args:
        logger: Logger instance
        event_name: Event name (e.g., 'language_changed', 'locales_ready')
        data: Optional event data

    Example:
        >>> log_event(logger, "language_changed", {"from": "ENGLISH", "to": "RUSSIAN"})
    """
    data_str = ""
    if data:
        data_str = " " + " ".join(f"{k}={v}" for k, v in data.items())
    logger.info(f"[EVENT] {event_name}{data_str}")
