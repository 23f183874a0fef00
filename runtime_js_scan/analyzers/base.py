"""Abstract base class for script analyzers."""

import threading
from abc import ABC, abstractmethod

from ..models import AnalyzerSummary, ScriptSource
from ..parsing.ast_engine import ParsedAST


class Analyzer(ABC):
    """Stateful inspection routine run over every parsed script of a scan.

    One instance lives for exactly one scan. ``observe`` is called once per
    successfully parsed script, in input order, and ``summarize`` returns
    the partial findings accumulated so far. Both run under the analyzer's
    lock, so running state is never mutated by two threads at once and a
    summary never mixes totals from different moments.

    Subclasses implement ``_observe`` and ``_summarize``. Not finding a
    signature is a normal outcome and must never raise.
    """

    name: str = "analyzer"

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def observe(self, ast: ParsedAST, script: ScriptSource) -> None:
        """Inspect one parsed script and update the running state."""
        with self._lock:
            self._observe(ast, script)

    def summarize(self) -> AnalyzerSummary:
        """Return findings for every script observed so far.

        Idempotent and free of side effects; returns an empty summary when
        nothing was observed.
        """
        with self._lock:
            return self._summarize()

    @abstractmethod
    def _observe(self, ast: ParsedAST, script: ScriptSource) -> None:
        """Inspect one script. Called with the analyzer lock held."""
        pass

    @abstractmethod
    def _summarize(self) -> AnalyzerSummary:
        """Build the summary. Called with the analyzer lock held."""
        pass
