"""Analyzers that inspect parsed scripts for bundler and custom-element signatures."""

from .base import Analyzer
from .custom_element import CustomElementAnalyzer
from .registry import (
    DEFAULT_ANALYZER_FACTORIES,
    AnalyzerFactory,
    create_analyzers,
)
from .rolldown import RolldownAnalyzer
from .webpack import WebpackAnalyzer, WebpackState, fingerprint

__all__ = [
    "Analyzer",
    "AnalyzerFactory",
    "CustomElementAnalyzer",
    "DEFAULT_ANALYZER_FACTORIES",
    "RolldownAnalyzer",
    "WebpackAnalyzer",
    "WebpackState",
    "create_analyzers",
    "fingerprint",
]
