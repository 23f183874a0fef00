"""Tests for structural patterns and the signature catalogue."""

import pytest

from runtime_js_scan.core.exceptions import MissingCaptureError, PatternCompileError
from runtime_js_scan.analyzers.signatures import (
    CUSTOM_ELEMENT_DEFINE,
    ROLLDOWN_RUNTIME_FILENAME,
    WEBPACK_CHUNK_REGISTRATION,
    build_webpack_chunk_pattern,
)
from runtime_js_scan.parsing.patterns import QueryMatch, StructuralPattern, named_elements

SIGNATURES = (WEBPACK_CHUNK_REGISTRATION, CUSTOM_ELEMENT_DEFINE)


def _examples():
    for pattern in SIGNATURES:
        for example in pattern.positive_examples + pattern.negative_examples:
            yield pytest.param(pattern, example, id=f"{pattern.name}:{example.description}")


# ===========================================================================
# A. StructuralPattern
# ===========================================================================


class TestStructuralPatternCompile:
    """Patterns are validated when compiled."""

    def test_capture_names(self):
        pattern = StructuralPattern(
            name="calls", query="(call_expression function: (identifier) @fn) @call"
        )
        assert pattern.capture_names == {"fn", "call"}

    def test_invalid_query(self, engine):
        pattern = StructuralPattern(name="broken", query="(call_expression")
        with pytest.raises(PatternCompileError, match="broken") as exc_info:
            pattern.compile(engine, "javascript")
        assert exc_info.value.pattern_name == "broken"

    def test_constraint_on_undeclared_capture(self, engine):
        pattern = StructuralPattern(
            name="bad-constraint",
            query="(identifier) @id",
            constraints={"other": "^x$"},
        )
        with pytest.raises(PatternCompileError, match="undeclared"):
            pattern.compile(engine, "javascript")

    def test_invalid_constraint_regex(self, engine):
        pattern = StructuralPattern(
            name="bad-regex", query="(identifier) @id", constraints={"id": "(unclosed"}
        )
        with pytest.raises(PatternCompileError, match="invalid regex"):
            pattern.compile(engine, "javascript")

    def test_same_text_group_needs_two_captures(self, engine):
        pattern = StructuralPattern(
            name="lonely", query="(identifier) @id", same_text=(("id",),)
        )
        with pytest.raises(PatternCompileError):
            pattern.compile(engine, "javascript")

    def test_arity_on_undeclared_capture(self, engine):
        pattern = StructuralPattern(
            name="bad-arity", query="(arguments) @args", arity={"params": 1}
        )
        with pytest.raises(PatternCompileError, match="undeclared"):
            pattern.compile(engine, "javascript")

    def test_negative_arity(self, engine):
        pattern = StructuralPattern(
            name="neg-arity", query="(arguments) @args", arity={"args": -1}
        )
        with pytest.raises(PatternCompileError, match="negative arity"):
            pattern.compile(engine, "javascript")


class TestCompiledPattern:
    """Matching, constraints and capture access."""

    def test_find_all_returns_matches_in_order(self, engine):
        compiled = StructuralPattern(
            name="calls", query="(call_expression function: (identifier) @fn)"
        ).compile(engine, "javascript")
        ast = engine.parse("first(); second();")
        matches = compiled.find_all(ast)
        assert [m.text("fn") for m in matches] == ["first", "second"]

    def test_no_match_is_empty_list(self, engine):
        compiled = CUSTOM_ELEMENT_DEFINE.compile(engine, "javascript")
        assert compiled.find_all(engine.parse("const x = 1;")) == []

    def test_regex_constraint_filters(self, engine):
        compiled = StructuralPattern(
            name="loggers",
            query="(call_expression function: (identifier) @fn)",
            constraints={"fn": "^log"},
        ).compile(engine, "javascript")
        matches = compiled.find_all(engine.parse("logInfo(); warn(); logError();"))
        assert [m.text("fn") for m in matches] == ["logInfo", "logError"]

    def test_same_text_constraint(self, engine):
        compiled = StructuralPattern(
            name="self-assign",
            query="(assignment_expression left: (identifier) @left right: (identifier) @right)",
            same_text=(("left", "right"),),
        ).compile(engine, "javascript")
        matches = compiled.find_all(engine.parse("a = a; b = c;"))
        assert [m.text("left") for m in matches] == ["a"]

    def test_arity_ignores_comments(self, engine):
        compiled = StructuralPattern(
            name="pairs",
            query="(call_expression function: (identifier) @fn arguments: (arguments) @args)",
            arity={"args": 2},
        ).compile(engine, "javascript")
        ast = engine.parse(
            "one(a /* b */); two(a, /* b */ c); three(a, b, /* c */ d);"
        )
        assert [m.text("fn") for m in compiled.find_all(ast)] == ["two"]

    def test_language_mismatch(self, engine):
        compiled = CUSTOM_ELEMENT_DEFINE.compile(engine, "javascript")
        ast = engine.parse("const x: number = 1;", language="typescript")
        with pytest.raises(ValueError, match="compiled for javascript"):
            compiled.find_all(ast)

    def test_compiles_for_typescript(self, engine):
        compiled = CUSTOM_ELEMENT_DEFINE.compile(engine, "typescript")
        ast = engine.parse(
            "customElements.define('x-a', A as CustomElementConstructor);",
            language="typescript",
        )
        assert len(compiled.find_all(ast)) == 1


class TestQueryMatch:

    def test_capture_accessors(self, engine):
        ast = engine.parse("go();")
        compiled = StructuralPattern(
            name="calls", query="(call_expression function: (identifier) @fn)"
        ).compile(engine, "javascript")
        match = compiled.find_all(ast)[0]
        assert match.capture("fn") is not None
        assert match.require("fn").type == "identifier"
        assert match.text("fn") == "go"
        assert match.capture("missing") is None
        assert match.text("missing") is None

    def test_require_missing_capture_raises(self, engine):
        match = QueryMatch(
            pattern_name="webpack-chunk-registration",
            pattern_index=0,
            captures={},
            ast=engine.parse(""),
        )
        with pytest.raises(MissingCaptureError, match="@tuple"):
            match.require("tuple")
        with pytest.raises(MissingCaptureError, match="@tuple"):
            match.elements("tuple")


# ===========================================================================
# B. Signature catalogue
# ===========================================================================


class TestSignatureExamples:
    """Every documented example behaves as described."""

    @pytest.mark.parametrize("pattern,example", list(_examples()))
    def test_example(self, engine, pattern, example):
        compiled = pattern.compile(engine, "javascript")
        ast = engine.parse(example.code)
        assert not ast.has_errors
        assert bool(compiled.find_all(ast)) is example.should_match

    def test_every_pattern_documents_both_kinds(self):
        for pattern in SIGNATURES:
            assert pattern.positive_examples, pattern.name
            assert pattern.negative_examples, pattern.name


class TestWebpackSignature:

    def test_captures_ids_and_factories(self, engine):
        compiled = WEBPACK_CHUNK_REGISTRATION.compile(engine, "javascript")
        ast = engine.parse(
            '(self.webpackChunkapp = self.webpackChunkapp || []).push([[1, 2], {1: f}]);'
        )
        match = compiled.find_all(ast)[0]
        ids, factories = match.elements("tuple")
        assert match.ast.get_text(ids) == "[1, 2]"
        assert match.ast.get_text(factories) == "{1: f}"
        assert match.text("name") == "webpackChunkapp"

    def test_non_empty_fallback_rejected(self, engine):
        compiled = WEBPACK_CHUNK_REGISTRATION.compile(engine, "javascript")
        ast = engine.parse(
            "(self.webpackChunkapp = self.webpackChunkapp || [1]).push([[1], {1: f}]);"
        )
        assert compiled.find_all(ast) == []

    def test_window_alias_not_accepted(self, engine):
        compiled = WEBPACK_CHUNK_REGISTRATION.compile(engine, "javascript")
        ast = engine.parse(
            "(window.webpackChunkapp = window.webpackChunkapp || []).push([[1], {1: f}]);"
        )
        assert compiled.find_all(ast) == []

    def test_exact_underscore_convention(self, engine):
        compiled = build_webpack_chunk_pattern(r"^webpackChunk_").compile(
            engine, "javascript"
        )
        plain = engine.parse(
            "(self.webpackChunkapp = self.webpackChunkapp || []).push([[1], {1: f}]);"
        )
        underscored = engine.parse(
            "(self.webpackChunk_app = self.webpackChunk_app || []).push([[1], {1: f}]);"
        )
        assert compiled.find_all(plain) == []
        assert len(compiled.find_all(underscored)) == 1


class TestRolldownSignature:

    @pytest.mark.parametrize(
        "identifier",
        [
            "https://example.com/assets/rolldown-runtime.B4x9Qz.mjs",
            "/dist/rolldown-runtime.abc123.mjs",
        ],
    )
    def test_runtime_filenames(self, identifier):
        assert ROLLDOWN_RUNTIME_FILENAME.search(identifier)

    @pytest.mark.parametrize(
        "identifier",
        [
            "https://example.com/assets/rolldown-runtime.mjs",
            "https://example.com/assets/rolldown-runtime.B4x9Qz.js",
            "https://example.com/assets/rolldown-runtime.B4x9Qz.mjs?v=2",
            "https://example.com/app.B4x9Qz.mjs",
        ],
    )
    def test_other_filenames(self, identifier):
        assert ROLLDOWN_RUNTIME_FILENAME.search(identifier) is None


class TestNamedElements:

    def test_skips_block_and_line_comments(self, engine):
        ast = engine.parse("f(/* a */ 1, // b\n 2);")
        call = ast.root_node.named_children[0].named_children[0]
        arguments = call.child_by_field_name("arguments")
        assert len(arguments.named_children) == 4
        assert [ast.get_text(n) for n in named_elements(arguments)] == ["1", "2"]
