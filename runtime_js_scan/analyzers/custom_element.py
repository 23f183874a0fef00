"""Custom element registration analyzer."""

import logging

from ..constants import DEFAULT_LANGUAGE
from ..models import AnalyzerSummary, ScriptSource
from ..parsing.ast_engine import ASTEngine, ParsedAST
from .base import Analyzer
from .signatures import CUSTOM_ELEMENT_DEFINE

logger = logging.getLogger(__name__)


class CustomElementAnalyzer(Analyzer):
    """Counts ``customElements.define`` calls across all scripts.

    Registrations are never deduplicated: the same element name defined in
    two scripts counts twice.
    """

    name = "custom_elements"

    def __init__(self, engine: ASTEngine, language: str = DEFAULT_LANGUAGE) -> None:
        super().__init__()
        self._define_pattern = CUSTOM_ELEMENT_DEFINE.compile(engine, language)
        self.custom_element_count = 0

    def _observe(self, ast: ParsedAST, script: ScriptSource) -> None:
        found = len(self._define_pattern.find_all(ast))
        if found:
            logger.debug(f"{script.identifier}: {found} custom element definition(s)")
        self.custom_element_count += found

    def _summarize(self) -> AnalyzerSummary:
        return AnalyzerSummary(custom_element_count=self.custom_element_count)
