"""Constants and configuration defaults for runtime-js-scan.

This module centralizes the signature literals and default settings that
are used across the codebase for easier maintenance.
"""

# =============================================================================
# Parsing
# =============================================================================

SUPPORTED_LANGUAGES = frozenset({"javascript", "typescript", "tsx"})

# Browser bundles are plain JavaScript; the TypeScript grammars are accepted
# for sources that need them.
DEFAULT_LANGUAGE = "javascript"


# =============================================================================
# Signatures
# =============================================================================

# Chunk-global naming convention. Older bundles emit an exact
# ``webpackChunk_`` prefix, newer ones any ``webpackChunk`` suffix.
DEFAULT_WEBPACK_CHUNK_PATTERN = r"^webpackChunk"

# Global aliases under which the chunk array is registered
WEBPACK_GLOBAL_ALIASES = ("self", "globalThis")

ROLLDOWN_RUNTIME_PATTERN = r"rolldown-runtime\.[a-zA-Z0-9]+\.mjs$"

DEFAULT_TRACK_DUPLICATED_BYTES = True


# =============================================================================
# Script loading
# =============================================================================

SCRIPT_EXTENSIONS = (".js", ".mjs", ".cjs")

# Maximum size of a single script file (20MB)
MAX_SCRIPT_FILE_SIZE = 20 * 1024 * 1024


# =============================================================================
# Logging
# =============================================================================

DEFAULT_LOG_LEVEL = "INFO"

SCAN_EVENTS_LOGGER = "runtime_js_scan.scan_events"

# Rotate the event log hourly and keep a week of history
LOG_ROTATION_WHEN = "H"
LOG_BACKUP_COUNT = 168


# =============================================================================
# Environment variables
# =============================================================================

ENV_PREFIX = "RUNTIME_JS_SCAN_"
ENV_LANGUAGE = f"{ENV_PREFIX}LANGUAGE"
ENV_WEBPACK_CHUNK_PATTERN = f"{ENV_PREFIX}WEBPACK_CHUNK_PATTERN"
ENV_TRACK_DUPLICATED_BYTES = f"{ENV_PREFIX}TRACK_DUPLICATED_BYTES"
ENV_LOG_LEVEL = f"{ENV_PREFIX}LOG_LEVEL"
ENV_LOG_FILE = f"{ENV_PREFIX}LOG_FILE"
