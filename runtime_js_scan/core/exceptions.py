"""Custom exception hierarchy for runtime-js-scan.

Parse failures are the only errors the scanner recovers from; every other
exception here signals a defect in configuration or analyzer logic and is
surfaced to the caller.
"""


class RuntimeJSScanError(Exception):
    """Base exception for all runtime-js-scan errors.

    All custom exceptions should inherit from this class to allow
    callers to catch all scanner-specific errors with a single
    except clause when appropriate.
    """
    pass


# =============================================================================
# Input Errors
# =============================================================================

class ScriptLoadError(RuntimeJSScanError):
    """A script file could not be read from disk."""
    pass


class ScriptParseError(RuntimeJSScanError):
    """Source text could not be parsed into a clean syntax tree."""

    def __init__(self, message: str, identifier: str | None = None):
        super().__init__(message)
        self.identifier = identifier


# =============================================================================
# Pattern Errors
# =============================================================================

class PatternCompileError(RuntimeJSScanError):
    """A structural pattern definition is malformed."""

    def __init__(self, message: str, pattern_name: str | None = None):
        super().__init__(message)
        self.pattern_name = pattern_name


# =============================================================================
# Analyzer Errors
# =============================================================================

class AnalyzerError(RuntimeJSScanError):
    """An analyzer failed while observing a script."""

    def __init__(
        self,
        message: str,
        analyzer: str | None = None,
        identifier: str | None = None,
    ):
        super().__init__(message)
        self.analyzer = analyzer
        self.identifier = identifier


class MissingCaptureError(AnalyzerError):
    """A matched pattern lacks a capture the analyzer depends on."""
    pass


class FindingsCollisionError(RuntimeJSScanError):
    """Two analyzer summaries claim the same report key."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(RuntimeJSScanError):
    """Invalid scanner settings."""
    pass
