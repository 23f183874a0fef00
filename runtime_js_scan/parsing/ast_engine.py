"""Core AST parsing engine for browser JavaScript.

This module provides a high-level interface around tree-sitter for parsing
script sources into ASTs and compiling structural queries against them. It
is the parsing primitive every analyzer builds on.

Usage::

    engine = ASTEngine()
    ast = engine.parse_script(script)
    query = engine.compile_query("(call_expression) @call")
    for _, captures in ts.QueryCursor(query).matches(ast.root_node):
        print(ast.get_text(captures["call"][0]))
"""

from __future__ import annotations

from collections.abc import Callable

import tree_sitter as ts
import tree_sitter_javascript as ts_js
import tree_sitter_typescript as ts_ts

from ..constants import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from ..core.exceptions import PatternCompileError, ScriptParseError
from ..models import ScriptSource


# ---------------------------------------------------------------------------
# ParsedAST wrapper
# ---------------------------------------------------------------------------


class ParsedAST:
    """Wrapper around a tree-sitter parse tree with convenience methods.

    Attributes:
        tree: The underlying ``tree_sitter.Tree``.
        source_code: Original source string that was parsed.
        language: Language identifier (``"javascript"``, ``"typescript"``,
            or ``"tsx"``).
    """

    __slots__ = ("tree", "source_code", "language", "_source_bytes")

    def __init__(
        self,
        tree: ts.Tree,
        source_code: str,
        language: str,
        source_bytes: bytes | None = None,
    ) -> None:
        self.tree = tree
        self.source_code = source_code
        self.language = language
        if source_bytes is None:
            source_bytes = source_code.encode("utf-8")
        self._source_bytes: bytes = source_bytes

    @property
    def root_node(self) -> ts.Node:
        """Return the root node of the parse tree."""
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        """Return ``True`` if the tree contains any error or missing nodes."""
        return self.tree.root_node.has_error

    def get_text(self, node: ts.Node) -> str:
        """Extract the exact source text spanned by *node*."""
        return self._source_bytes[node.start_byte:node.end_byte].decode(
            "utf-8", errors="replace"
        )

    def get_bytes(self, node: ts.Node) -> bytes:
        """Extract the UTF-8 bytes spanned by *node*."""
        return self._source_bytes[node.start_byte:node.end_byte]

    def walk(self, visitor: Callable[[ts.Node, int], bool | None]) -> None:
        """Depth-first walk of the AST using a visitor callback.

        The *visitor* is called with ``(node, depth)`` for every node.
        If the visitor returns ``False`` explicitly, the subtree rooted
        at that node is skipped.
        """
        # Explicit stack; minified bundles nest deeper than the recursion limit
        stack: list[tuple[ts.Node, int]] = [(self.tree.root_node, 0)]
        while stack:
            node, depth = stack.pop()
            if visitor(node, depth) is False:
                continue
            for child in reversed(node.children):
                stack.append((child, depth + 1))


# ---------------------------------------------------------------------------
# ASTEngine
# ---------------------------------------------------------------------------


class ASTEngine:
    """Core AST parsing engine for JavaScript and TypeScript.

    Initialises tree-sitter ``Language`` objects lazily on first use and
    caches them for the lifetime of the engine instance.
    """

    def __init__(self) -> None:
        self._languages: dict[str, ts.Language] = {}
        self._parsers: dict[str, ts.Parser] = {}

    # ------------------------------------------------------------------
    # Language / parser initialisation
    # ------------------------------------------------------------------

    def get_language(self, language: str) -> ts.Language:
        """Return (and cache) the tree-sitter ``Language`` for *language*.

        Raises:
            ValueError: If *language* is not supported.
        """
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language: {language!r}. "
                f"Supported: {', '.join(sorted(SUPPORTED_LANGUAGES))}"
            )

        if language not in self._languages:
            if language == "javascript":
                self._languages[language] = ts.Language(ts_js.language())
            elif language == "typescript":
                self._languages[language] = ts.Language(
                    ts_ts.language_typescript()
                )
            else:  # tsx
                self._languages[language] = ts.Language(
                    ts_ts.language_tsx()
                )

        return self._languages[language]

    def _get_parser(self, language: str) -> ts.Parser:
        """Return (and cache) a ``Parser`` configured for *language*."""
        if language not in self._parsers:
            lang = self.get_language(language)
            self._parsers[language] = ts.Parser(language=lang)
        return self._parsers[language]

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(
        self, source_code: str, language: str = DEFAULT_LANGUAGE
    ) -> ParsedAST:
        """Parse *source_code* into a ``ParsedAST``.

        The returned tree may contain error nodes; use ``parse_script`` to
        reject those.

        Raises:
            ValueError: If *language* is not supported.
        """
        parser = self._get_parser(language)
        source_bytes = source_code.encode("utf-8")
        tree = parser.parse(source_bytes)
        return ParsedAST(
            tree=tree,
            source_code=source_code,
            language=language,
            source_bytes=source_bytes,
        )

    def parse_script(
        self, script: ScriptSource, language: str = DEFAULT_LANGUAGE
    ) -> ParsedAST:
        """Parse *script* into an error-free ``ParsedAST``.

        Args:
            script: The script to parse.
            language: One of ``"javascript"``, ``"typescript"``, or ``"tsx"``.

        Returns:
            A ``ParsedAST`` without error or missing nodes.

        Raises:
            ScriptParseError: If the source is malformed for *language*.
        """
        ast = self.parse(script.source_text, language=language)
        if ast.has_errors:
            location = _first_error_location(ast)
            raise ScriptParseError(
                f"Failed to parse {script.identifier} as {language}"
                + (f" (line {location[0]}, column {location[1]})" if location else ""),
                identifier=script.identifier,
            )
        return ast

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def compile_query(self, source: str, language: str = DEFAULT_LANGUAGE) -> ts.Query:
        """Compile a tree-sitter S-expression query for *language*.

        Raises:
            PatternCompileError: If *source* is not a valid query.
        """
        lang = self.get_language(language)
        try:
            return ts.Query(lang, source)
        except ts.QueryError as e:
            raise PatternCompileError(f"Invalid query for {language}: {e}") from e


def _first_error_location(ast: ParsedAST) -> tuple[int, int] | None:
    """Return the 1-based line and 0-based column of the first bad node."""
    found: list[ts.Node] = []

    def _visitor(node: ts.Node, _depth: int) -> bool | None:
        if found:
            return False
        if node.is_error or node.is_missing:
            found.append(node)
            return False
        if not node.has_error:
            return False
        return None

    ast.walk(_visitor)
    if not found:
        return None
    return found[0].start_point.row + 1, found[0].start_point.column
