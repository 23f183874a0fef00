"""Scan orchestration.

``ScanOrchestrator`` parses each script once, fans the tree out to every
registered analyzer and merges their summaries into one ``AnalysisReport``.
A script that fails to parse is skipped; it never aborts the scan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .analyzers.base import Analyzer
from .analyzers.registry import (
    DEFAULT_ANALYZER_FACTORIES,
    AnalyzerFactory,
    create_analyzers,
)
from .core.config import ScanSettings
from .core.exceptions import AnalyzerError, FindingsCollisionError, ScriptParseError
from .core.logging_config import get_scan_logger
from .models import AnalysisReport, AnalyzerSummary, Bundler, BundlerFindings, ScriptSource
from .parsing.ast_engine import ASTEngine, ParsedAST

logger = logging.getLogger(__name__)


def merge_summaries(
    summaries: Iterable[AnalyzerSummary],
    scripts_analyzed: int = 0,
    skipped_scripts: Sequence[str] = (),
) -> AnalysisReport:
    """Merge analyzer summaries into a single report.

    Bundler tags are unioned in first-seen order and per-bundler findings
    are merged by key. Each key has exactly one owner: a bundler key or a
    custom element count contributed by two summaries is a registration
    bug.

    Args:
        summaries: Analyzer summaries in registration order.
        scripts_analyzed: Number of scripts the analyzers observed.
        skipped_scripts: Identifiers of scripts skipped as unparsable.

    Returns:
        The merged report.

    Raises:
        FindingsCollisionError: If two summaries claim the same key.
    """
    bundlers: list[Bundler] = []
    findings: dict[Bundler, BundlerFindings] = {}
    custom_element_count: int | None = None

    for summary in summaries:
        for bundler in summary.bundlers:
            if bundler not in bundlers:
                bundlers.append(bundler)

        for bundler, bundler_findings in summary.bundler_findings.items():
            if bundler in findings:
                raise FindingsCollisionError(
                    f"Findings for {bundler.value} contributed by more than one analyzer"
                )
            findings[bundler] = bundler_findings

        if summary.custom_element_count is not None:
            if custom_element_count is not None:
                raise FindingsCollisionError(
                    "Custom element count contributed by more than one analyzer"
                )
            custom_element_count = summary.custom_element_count

    return AnalysisReport(
        bundlers_detected=bundlers,
        bundler_findings=findings,
        custom_element_count=custom_element_count or 0,
        scripts_analyzed=scripts_analyzed,
        skipped_scripts=list(skipped_scripts),
    )


class ScanOrchestrator:
    """Runs every registered analyzer over a sequence of scripts.

    The orchestrator itself holds no per-scan state; each ``run_scan`` call
    builds fresh analyzers, so scans are independent and repeatable.
    """

    def __init__(
        self,
        settings: ScanSettings | None = None,
        factories: tuple[AnalyzerFactory, ...] = DEFAULT_ANALYZER_FACTORIES,
        engine: ASTEngine | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Scan settings. Defaults to ``ScanSettings()``.
            factories: Analyzer factories in registration order.
            engine: Shared parsing engine. A new one is created if omitted.
        """
        self.settings = settings or ScanSettings()
        self.factories = factories
        self.engine = engine or ASTEngine()
        self._events = get_scan_logger()

    def create_analyzers(self) -> list[Analyzer]:
        """Construct fresh analyzers, compiling their patterns."""
        return create_analyzers(self.engine, self.settings, self.factories)

    def run_scan(self, scripts: Iterable[ScriptSource]) -> AnalysisReport:
        """Scan *scripts* in order and return the merged report.

        Raises:
            PatternCompileError: If an analyzer's pattern is malformed.
            AnalyzerError: If an analyzer fails while observing a script.
            FindingsCollisionError: If two analyzers claim the same key.
        """
        analyzers = self.create_analyzers()
        scripts_analyzed = 0
        skipped: list[str] = []

        for script in scripts:
            try:
                ast = self.engine.parse_script(script, language=self.settings.language)
            except ScriptParseError as e:
                logger.debug(f"Skipping unparsable script {script.identifier}: {e}")
                self._events.info(
                    "Skipped unparsable script",
                    extra={
                        "event": "script_skipped",
                        "script": script.identifier,
                        "error": str(e),
                    },
                )
                skipped.append(script.identifier)
                continue

            for analyzer in analyzers:
                self._observe(analyzer, ast, script)
            scripts_analyzed += 1

        report = merge_summaries(
            (analyzer.summarize() for analyzer in analyzers),
            scripts_analyzed=scripts_analyzed,
            skipped_scripts=skipped,
        )

        for bundler in report.bundlers_detected:
            self._events.info(
                f"Detected {bundler.value}",
                extra={"event": "bundler_detected", "bundler": bundler.value},
            )
        self._events.info(
            "Scan complete",
            extra={
                "event": "scan_complete",
                "scripts_analyzed": scripts_analyzed,
                "scripts_skipped": len(skipped),
            },
        )
        return report

    def _observe(
        self, analyzer: Analyzer, ast: ParsedAST, script: ScriptSource
    ) -> None:
        try:
            analyzer.observe(ast, script)
        except AnalyzerError as e:
            if e.analyzer is None:
                e.analyzer = analyzer.name
            if e.identifier is None:
                e.identifier = script.identifier
            self._log_analyzer_failure(analyzer, script, e)
            raise
        except Exception as e:
            self._log_analyzer_failure(analyzer, script, e)
            raise AnalyzerError(
                f"Analyzer {analyzer.name} failed on {script.identifier}: {e}",
                analyzer=analyzer.name,
                identifier=script.identifier,
            ) from e

    def _log_analyzer_failure(
        self, analyzer: Analyzer, script: ScriptSource, error: Exception
    ) -> None:
        self._events.error(
            "Analyzer failed",
            extra={
                "event": "analyzer_failed",
                "analyzer": analyzer.name,
                "script": script.identifier,
                "error": str(error),
            },
        )


def run_scan(
    scripts: Iterable[ScriptSource], settings: ScanSettings | None = None
) -> AnalysisReport:
    """Run a scan with the default analyzers."""
    return ScanOrchestrator(settings=settings).run_scan(scripts)
