"""Tests for the command line entry point."""

import json

import pytest

from runtime_js_scan.cli import build_parser, main
from runtime_js_scan.constants import ENV_LANGUAGE, ENV_TRACK_DUPLICATED_BYTES

FUNC_A = "function a(){return 1}"
CHUNK = (
    "(self.webpackChunkapp = self.webpackChunkapp || [])"
    f".push([[1], {{1: {FUNC_A}, 2: {FUNC_A}}}]);"
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_LANGUAGE, raising=False)
    monkeypatch.delenv(ENV_TRACK_DUPLICATED_BYTES, raising=False)


@pytest.fixture
def bundle_dir(tmp_path):
    (tmp_path / "chunk.js").write_text(CHUNK, encoding="utf-8")
    (tmp_path / "elements.js").write_text(
        "customElements.define('x-a', A);", encoding="utf-8"
    )
    (tmp_path / "broken.js").write_text("const x = {{{;", encoding="utf-8")
    return tmp_path


class TestCLI:

    def test_parser_requires_paths(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_prints_json_report(self, bundle_dir, capsys):
        assert main([str(bundle_dir)]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["bundlers_detected"] == ["webpack"]
        assert report["bundler_findings"]["webpack"] == {
            "duplicate_function_count": 1,
            "duplicated_bytes": len(FUNC_A),
        }
        assert report["custom_element_count"] == 1
        assert report["scripts_analyzed"] == 2
        assert report["skipped_scripts"] == [str(bundle_dir / "broken.js")]

    def test_no_byte_accounting_flag(self, bundle_dir, capsys):
        assert main([str(bundle_dir / "chunk.js"), "--no-byte-accounting"]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["bundler_findings"]["webpack"]["duplicated_bytes"] == 0

    def test_environment_is_honoured(self, bundle_dir, capsys, monkeypatch):
        monkeypatch.setenv(ENV_TRACK_DUPLICATED_BYTES, "false")
        assert main([str(bundle_dir / "chunk.js")]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["bundler_findings"]["webpack"]["duplicated_bytes"] == 0

    def test_no_scripts(self, tmp_path, capsys):
        assert main([str(tmp_path)]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_environment(self, bundle_dir, monkeypatch, capsys):
        monkeypatch.setenv(ENV_LANGUAGE, "ruby")
        assert main([str(bundle_dir)]) == 2
        assert "error:" in capsys.readouterr().err
