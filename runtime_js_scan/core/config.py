"""Configuration model for runtime-js-scan."""

import logging
import os
import re

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TRACK_DUPLICATED_BYTES,
    DEFAULT_WEBPACK_CHUNK_PATTERN,
    ENV_LANGUAGE,
    ENV_LOG_FILE,
    ENV_LOG_LEVEL,
    ENV_TRACK_DUPLICATED_BYTES,
    ENV_WEBPACK_CHUNK_PATTERN,
    SUPPORTED_LANGUAGES,
)
from .exceptions import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ScanSettings(BaseModel):
    """Settings for a single scan."""

    language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="tree-sitter grammar used to parse scripts",
    )
    webpack_chunk_pattern: str = Field(
        default=DEFAULT_WEBPACK_CHUNK_PATTERN,
        description="Regex the webpack chunk global name must match",
    )
    track_duplicated_bytes: bool = Field(
        default=DEFAULT_TRACK_DUPLICATED_BYTES,
        description="Charge duplicated webpack factories by byte size",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level")
    log_file: str | None = Field(
        default=None, description="Optional path for the JSON scan event log"
    )

    @field_validator("language")
    @classmethod
    def _check_language(cls, value: str) -> str:
        if value not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language: {value!r}. "
                f"Supported: {', '.join(sorted(SUPPORTED_LANGUAGES))}"
            )
        return value

    @field_validator("webpack_chunk_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid webpack chunk pattern {value!r}: {e}") from e
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> "ScanSettings":
        """Load settings from ``RUNTIME_JS_SCAN_*`` environment variables.

        Unset variables fall back to the defaults in ``constants``.

        Raises:
            ConfigurationError: If any variable holds an invalid value.
        """
        values: dict[str, object] = {}

        if ENV_LANGUAGE in os.environ:
            values["language"] = os.environ[ENV_LANGUAGE]
        if ENV_WEBPACK_CHUNK_PATTERN in os.environ:
            values["webpack_chunk_pattern"] = os.environ[ENV_WEBPACK_CHUNK_PATTERN]
        if ENV_TRACK_DUPLICATED_BYTES in os.environ:
            values["track_duplicated_bytes"] = _parse_bool(
                ENV_TRACK_DUPLICATED_BYTES, os.environ[ENV_TRACK_DUPLICATED_BYTES]
            )
        if ENV_LOG_LEVEL in os.environ:
            values["log_level"] = os.environ[ENV_LOG_LEVEL]
        if os.environ.get(ENV_LOG_FILE):
            values["log_file"] = os.environ[ENV_LOG_FILE]

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")
