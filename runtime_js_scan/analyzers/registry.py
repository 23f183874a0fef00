"""Analyzer registration.

The registry lists analyzer factories in the order their ``observe`` calls
run for each script. Factories are invoked once per scan so every scan gets
fresh analyzer state.
"""

from __future__ import annotations

from collections.abc import Callable

from ..core.config import ScanSettings
from ..parsing.ast_engine import ASTEngine
from .base import Analyzer
from .custom_element import CustomElementAnalyzer
from .rolldown import RolldownAnalyzer
from .webpack import WebpackAnalyzer

AnalyzerFactory = Callable[[ASTEngine, ScanSettings], Analyzer]


def _webpack(engine: ASTEngine, settings: ScanSettings) -> Analyzer:
    return WebpackAnalyzer(
        engine,
        language=settings.language,
        chunk_name_pattern=settings.webpack_chunk_pattern,
        track_duplicated_bytes=settings.track_duplicated_bytes,
    )


def _rolldown(engine: ASTEngine, settings: ScanSettings) -> Analyzer:
    return RolldownAnalyzer()


def _custom_elements(engine: ASTEngine, settings: ScanSettings) -> Analyzer:
    return CustomElementAnalyzer(engine, language=settings.language)


DEFAULT_ANALYZER_FACTORIES: tuple[AnalyzerFactory, ...] = (
    _webpack,
    _rolldown,
    _custom_elements,
)


def create_analyzers(
    engine: ASTEngine,
    settings: ScanSettings,
    factories: tuple[AnalyzerFactory, ...] = DEFAULT_ANALYZER_FACTORIES,
) -> list[Analyzer]:
    """Construct one fresh analyzer per factory, in registration order."""
    return [factory(engine, settings) for factory in factories]
