"""Webpack chunk-registration analyzer.

Detects webpack bundles by their JSONP chunk registration idiom and counts
module factories that webpack emitted more than once. Factories are
compared by a SHA-256 fingerprint of their exact source text, so two
functions that differ only in whitespace count as distinct.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field

from ..constants import (
    DEFAULT_LANGUAGE,
    DEFAULT_TRACK_DUPLICATED_BYTES,
    DEFAULT_WEBPACK_CHUNK_PATTERN,
)
from ..core.exceptions import MissingCaptureError
from ..models import AnalyzerSummary, Bundler, ScriptSource, WebpackFindings
from ..parsing.ast_engine import ASTEngine, ParsedAST
from .base import Analyzer
from .signatures import build_webpack_chunk_pattern

logger = logging.getLogger(__name__)


def fingerprint(value: bytes) -> str:
    """Return the dedup key for one factory value's source bytes."""
    return hashlib.sha256(value).hexdigest()


@dataclass
class WebpackState:
    """Running totals for one scan.

    Attributes:
        chunks_seen: Chunk registrations matched so far.
        seen_sizes: Byte length of the first copy of each fingerprint.
        duplicate_function_count: Repeat sightings of known fingerprints.
        duplicated_bytes: First-seen size charged for every repeat.
    """

    chunks_seen: int = 0
    seen_sizes: dict[str, int] = field(default_factory=dict)
    duplicate_function_count: int = 0
    duplicated_bytes: int = 0

    @property
    def detected(self) -> bool:
        return self.chunks_seen > 0

    def record(self, value: bytes, track_bytes: bool) -> bool:
        """Record one factory value. Returns ``True`` if it is a duplicate."""
        key = fingerprint(value)
        first_size = self.seen_sizes.get(key)
        if first_size is None:
            self.seen_sizes[key] = len(value)
            return False

        self.duplicate_function_count += 1
        if track_bytes:
            self.duplicated_bytes += first_size
        return True


class WebpackAnalyzer(Analyzer):
    """Counts duplicated module factories across webpack chunks."""

    name = "webpack"

    def __init__(
        self,
        engine: ASTEngine,
        language: str = DEFAULT_LANGUAGE,
        chunk_name_pattern: str = DEFAULT_WEBPACK_CHUNK_PATTERN,
        track_duplicated_bytes: bool = DEFAULT_TRACK_DUPLICATED_BYTES,
    ) -> None:
        super().__init__()
        self._chunk_pattern = build_webpack_chunk_pattern(chunk_name_pattern).compile(
            engine, language
        )
        self.track_duplicated_bytes = track_duplicated_bytes
        self.state = WebpackState()

    def _observe(self, ast: ParsedAST, script: ScriptSource) -> None:
        chunks = self._chunk_pattern.find_all(ast)
        if not chunks:
            return

        duplicates = 0
        for chunk in chunks:
            try:
                _ids, factories = chunk.elements("tuple")
            except MissingCaptureError as e:
                e.analyzer = self.name
                e.identifier = script.identifier
                raise

            self.state.chunks_seen += 1
            for entry in factories.named_children:
                if entry.type != "pair":
                    continue
                value = entry.child_by_field_name("value")
                if value is None:
                    continue
                if self.state.record(ast.get_bytes(value), self.track_duplicated_bytes):
                    duplicates += 1

        logger.debug(
            f"{script.identifier}: {len(chunks)} webpack chunk(s), "
            f"{duplicates} duplicate factories"
        )

    def _summarize(self) -> AnalyzerSummary:
        if not self.state.detected:
            return AnalyzerSummary()

        return AnalyzerSummary(
            bundlers=[Bundler.WEBPACK],
            bundler_findings={
                Bundler.WEBPACK: WebpackFindings(
                    duplicate_function_count=self.state.duplicate_function_count,
                    duplicated_bytes=self.state.duplicated_bytes,
                )
            },
        )
