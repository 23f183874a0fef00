"""
Logging configuration for scan events.

This module provides configuration for structured logging of scan progress,
including skipped scripts, detected bundlers and analyzer failures.
"""

import json
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Any

from ..constants import LOG_BACKUP_COUNT, LOG_ROTATION_WHEN, SCAN_EVENTS_LOGGER


class ScanEventFormatter(logging.Formatter):
    """Custom formatter for scan event logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log records with structured data."""
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "event"):
            log_entry["event"] = record.event

        # Scan context fields
        for field in ["script", "analyzer", "bundler", "scripts_analyzed", "scripts_skipped"]:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if hasattr(record, "error"):
            log_entry["error"] = record.error

        return json.dumps(log_entry)


def configure_scan_logging(
    log_file: str | None = None,
    log_level: str = "INFO",
    enable_console: bool = True,
) -> logging.Logger:
    """
    Configure logging for scan events.

    Args:
        log_file: Path to log file for scan events (optional)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_console: Whether to also log to console (stderr)

    Returns:
        The configured scan events logger
    """
    logger = logging.getLogger(SCAN_EVENTS_LOGGER)
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.propagate = False

    # Reconfiguring replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = ScanEventFormatter()

    if log_file:
        file_handler = TimedRotatingFileHandler(
            log_file,
            when=LOG_ROTATION_WHEN,
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
            utc=False,
        )
        file_handler.suffix = "%Y%m%d_%H%M%S.log"
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_scan_logger() -> logging.Logger:
    """Get the scan events logger."""
    return logging.getLogger(SCAN_EVENTS_LOGGER)
