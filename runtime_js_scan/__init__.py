"""Runtime JS scanner.

Inspects the JavaScript a page delivers and reports which bundler produced
it, how many module factories webpack duplicated, and how many custom
elements are registered.

Quick start::

    from runtime_js_scan import ScriptSource, run_scan

    report = run_scan([ScriptSource(identifier="app.js", source_text=code)])
    print(report.bundlers_detected, report.custom_element_count)
"""

from .analyzers import (
    Analyzer,
    CustomElementAnalyzer,
    RolldownAnalyzer,
    WebpackAnalyzer,
)
from .core import (
    AnalyzerError,
    ConfigurationError,
    FindingsCollisionError,
    MissingCaptureError,
    PatternCompileError,
    RuntimeJSScanError,
    ScanSettings,
    ScriptLoadError,
    ScriptParseError,
    configure_scan_logging,
)
from .models import (
    AnalysisReport,
    AnalyzerSummary,
    Bundler,
    RolldownFindings,
    ScriptSource,
    WebpackFindings,
)
from .parsing import ASTEngine, ParsedAST, StructuralPattern
from .scanner import ScanOrchestrator, merge_summaries, run_scan
from .sources import load_script_sources

__version__ = "0.1.0"

__all__ = [
    "ASTEngine",
    "AnalysisReport",
    "Analyzer",
    "AnalyzerError",
    "AnalyzerSummary",
    "Bundler",
    "ConfigurationError",
    "CustomElementAnalyzer",
    "FindingsCollisionError",
    "MissingCaptureError",
    "ParsedAST",
    "PatternCompileError",
    "RolldownAnalyzer",
    "RolldownFindings",
    "RuntimeJSScanError",
    "ScanOrchestrator",
    "ScanSettings",
    "ScriptLoadError",
    "ScriptParseError",
    "ScriptSource",
    "StructuralPattern",
    "WebpackAnalyzer",
    "WebpackFindings",
    "configure_scan_logging",
    "load_script_sources",
    "merge_summaries",
    "run_scan",
]
