"""Rolldown analyzer.

Rolldown ships its module runtime as a separate hashed asset, so presence
is decided from script identifiers alone.
"""

import logging

from ..models import AnalyzerSummary, Bundler, RolldownFindings, ScriptSource
from ..parsing.ast_engine import ParsedAST
from .base import Analyzer
from .signatures import ROLLDOWN_RUNTIME_FILENAME

logger = logging.getLogger(__name__)


class RolldownAnalyzer(Analyzer):
    """Flags rolldown when a ``rolldown-runtime.<hash>.mjs`` script is loaded."""

    name = "rolldown"

    def __init__(self) -> None:
        super().__init__()
        self.runtime_scripts: list[str] = []

    def _observe(self, ast: ParsedAST, script: ScriptSource) -> None:
        if ROLLDOWN_RUNTIME_FILENAME.search(script.identifier):
            logger.debug(f"Rolldown runtime found: {script.identifier}")
            self.runtime_scripts.append(script.identifier)

    def _summarize(self) -> AnalyzerSummary:
        if not self.runtime_scripts:
            return AnalyzerSummary()

        return AnalyzerSummary(
            bundlers=[Bundler.ROLLDOWN],
            bundler_findings={Bundler.ROLLDOWN: RolldownFindings()},
        )
