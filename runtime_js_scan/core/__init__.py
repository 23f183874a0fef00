"""Core utilities for configuration, logging, and errors."""

from .config import ScanSettings
from .exceptions import (
    AnalyzerError,
    ConfigurationError,
    FindingsCollisionError,
    MissingCaptureError,
    PatternCompileError,
    RuntimeJSScanError,
    ScriptLoadError,
    ScriptParseError,
)
from .logging_config import configure_scan_logging, get_scan_logger

__all__ = [
    # Configuration
    "ScanSettings",
    # Logging
    "configure_scan_logging",
    "get_scan_logger",
    # Exceptions
    "RuntimeJSScanError",
    "ScriptLoadError",
    "ScriptParseError",
    "PatternCompileError",
    "AnalyzerError",
    "MissingCaptureError",
    "FindingsCollisionError",
    "ConfigurationError",
]
