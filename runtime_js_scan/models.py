"""Pydantic models for script sources and scan results.

This module defines the data models used to represent the scripts fed
into a scan, the partial findings each analyzer produces, and the merged
report returned once per scan.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScriptSource(BaseModel):
    """One script delivered by a page, inline or external.

    Attributes:
        identifier: URL or other identifier of the script. Expected to be
            unique within a scan; collisions only make log records ambiguous.
        source_text: Full source text of the script.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    source_text: str


class Bundler(str, Enum):
    """Module bundlers the scanner can recognise."""

    WEBPACK = "webpack"
    ROLLDOWN = "rolldown"


class WebpackFindings(BaseModel):
    """Duplication statistics for webpack chunk registrations.

    Attributes:
        duplicate_function_count: Factory values seen again after their
            first occurrence anywhere in the scan.
        duplicated_bytes: UTF-8 size of every repeated factory value,
            charged at the size of its first-seen copy. Stays 0 when byte
            accounting is disabled.
    """

    duplicate_function_count: int = Field(default=0, ge=0)
    duplicated_bytes: int = Field(default=0, ge=0)


class RolldownFindings(BaseModel):
    """Rolldown presence marker. Carries no metadata yet."""


BundlerFindings = WebpackFindings | RolldownFindings


class AnalyzerSummary(BaseModel):
    """Partial findings contributed by one analyzer.

    An analyzer leaves every field at its default for anything it does
    not own, so an empty summary means "nothing detected".
    """

    bundlers: list[Bundler] = Field(default_factory=list)
    bundler_findings: dict[Bundler, BundlerFindings] = Field(default_factory=dict)
    custom_element_count: int | None = Field(default=None, ge=0)


class AnalysisReport(BaseModel):
    """Aggregated results from scanning a set of scripts.

    Attributes:
        bundlers_detected: Bundlers detected anywhere in the scan, without
            duplicates, in analyzer registration order.
        bundler_findings: Analyzer-specific findings per detected bundler.
            A missing key means the bundler was not detected.
        custom_element_count: Total custom element registrations.
        scripts_analyzed: Number of scripts that parsed and were observed.
        skipped_scripts: Identifiers of scripts skipped as unparsable.
    """

    bundlers_detected: list[Bundler] = Field(default_factory=list)
    bundler_findings: dict[Bundler, BundlerFindings] = Field(default_factory=dict)
    custom_element_count: int = Field(default=0, ge=0)
    scripts_analyzed: int = Field(default=0, ge=0)
    skipped_scripts: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_bundler_keys(self) -> AnalysisReport:
        if len(set(self.bundlers_detected)) != len(self.bundlers_detected):
            raise ValueError("bundlers_detected must not contain duplicates")
        undetected = set(self.bundler_findings) - set(self.bundlers_detected)
        if undetected:
            names = ", ".join(sorted(b.value for b in undetected))
            raise ValueError(f"findings present for undetected bundlers: {names}")
        return self

    @property
    def webpack(self) -> WebpackFindings | None:
        """Webpack findings, or ``None`` when webpack was not detected."""
        findings = self.bundler_findings.get(Bundler.WEBPACK)
        return findings if isinstance(findings, WebpackFindings) else None
