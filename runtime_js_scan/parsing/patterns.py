"""Typed structural pattern queries over parsed scripts.

A ``StructuralPattern`` is a declarative description of a syntax shape: a
tree-sitter S-expression query with named ``@captures``, plus optional
constraints evaluated on the captured source text. Compiling a pattern
against an ``ASTEngine`` validates it once, up front; the resulting
``CompiledPattern`` returns ``QueryMatch`` records for every occurrence.

Tree-sitter query syntax reference:
- (node_type) matches a node by type
- field: (child) matches a named field
- @capture_name captures a node for extraction
- (#eq? @cap "value") filters captures by exact string match
- (#any-of? @cap "a" "b") filters captures by a set of strings
- (_) wildcard matches any named node
- "." anchors a pattern to the first/last named child

Anchors and positional child patterns treat comments as ordinary named
nodes, so element counts belong in ``arity`` rather than in the query.

Usage::

    pattern = StructuralPattern(
        name="console-log",
        query='(call_expression function: (member_expression) @callee)',
        constraints={"callee": r"^console\\.log$"},
    )
    compiled = pattern.compile(engine, language="javascript")
    for match in compiled.find_all(ast):
        print(match.text("callee"))
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

import tree_sitter as ts

from ..core.exceptions import MissingCaptureError, PatternCompileError
from .ast_engine import ASTEngine, ParsedAST

logger = logging.getLogger(__name__)

_CAPTURE_RE = re.compile(r"@([A-Za-z_][A-Za-z0-9_.-]*)")

COMMENT_TYPES = frozenset({"comment", "html_comment"})


def named_elements(node: ts.Node) -> list[ts.Node]:
    """Return the named children of *node*, skipping comments."""
    return [child for child in node.named_children if child.type not in COMMENT_TYPES]


@dataclass(frozen=True)
class CodeExample:
    """A code example for pattern documentation."""

    code: str
    description: str
    should_match: bool


@dataclass(frozen=True)
class StructuralPattern:
    """A structural pattern definition.

    Attributes:
        name: Unique identifier used in errors and logs.
        query: Tree-sitter S-expression query. May hold several
            alternative patterns; a match of any of them counts.
        constraints: Mapping of capture name to a regex the capture's
            source text must match (``re.search`` semantics).
        same_text: Groups of capture names whose source text must be
            identical within one match.
        arity: Mapping of capture name to the exact number of non-comment
            named children the captured node must have.
        description: What the pattern detects.
        positive_examples: Code samples that SHOULD match.
        negative_examples: Code samples that should NOT match.
    """

    name: str
    query: str
    constraints: Mapping[str, str] = field(default_factory=dict)
    same_text: tuple[tuple[str, ...], ...] = ()
    arity: Mapping[str, int] = field(default_factory=dict)
    description: str = ""
    positive_examples: list[CodeExample] = field(default_factory=list)
    negative_examples: list[CodeExample] = field(default_factory=list)

    @property
    def capture_names(self) -> frozenset[str]:
        """Capture names declared in the query."""
        return frozenset(_CAPTURE_RE.findall(self.query))

    def compile(self, engine: ASTEngine, language: str) -> CompiledPattern:
        """Validate and compile this pattern for *language*.

        Raises:
            PatternCompileError: If the query is invalid, a constraint regex
                does not compile, an arity is negative, or a constraint names
                an unknown capture.
        """
        declared = self.capture_names
        referenced = set(self.constraints)
        for group in self.same_text:
            if len(group) < 2:
                raise PatternCompileError(
                    f"same_text group {group!r} needs at least two captures",
                    pattern_name=self.name,
                )
            referenced.update(group)
        for capture, count in self.arity.items():
            if count < 0:
                raise PatternCompileError(
                    f"Pattern {self.name!r} has negative arity for @{capture}",
                    pattern_name=self.name,
                )
            referenced.add(capture)
        unknown = referenced - declared
        if unknown:
            raise PatternCompileError(
                f"Pattern {self.name!r} constrains undeclared captures: "
                f"{', '.join(sorted(unknown))}",
                pattern_name=self.name,
            )

        regexes: dict[str, re.Pattern[str]] = {}
        for capture, expression in self.constraints.items():
            try:
                regexes[capture] = re.compile(expression)
            except re.error as e:
                raise PatternCompileError(
                    f"Pattern {self.name!r} has invalid regex for @{capture}: {e}",
                    pattern_name=self.name,
                ) from e

        try:
            query = engine.compile_query(self.query, language=language)
        except PatternCompileError as e:
            raise PatternCompileError(
                f"Pattern {self.name!r}: {e}", pattern_name=self.name
            ) from e

        logger.debug(f"Compiled pattern {self.name} for {language}")
        return CompiledPattern(
            pattern=self, language=language, query=query, regexes=regexes
        )


@dataclass
class QueryMatch:
    """A single match of a structural pattern.

    Attributes:
        pattern_name: Name of the pattern that produced the match.
        pattern_index: Index of the alternative that matched within the query.
        captures: Mapping from capture names to matched nodes.
        ast: The tree the match was found in.
    """

    pattern_name: str
    pattern_index: int
    captures: dict[str, list[ts.Node]]
    ast: ParsedAST = field(repr=False)

    def capture(self, name: str) -> ts.Node | None:
        """Return the first node captured as *name*, or ``None``."""
        nodes = self.captures.get(name)
        return nodes[0] if nodes else None

    def require(self, name: str) -> ts.Node:
        """Return the node captured as *name*.

        Raises:
            MissingCaptureError: If the match has no such capture.
        """
        node = self.capture(name)
        if node is None:
            raise MissingCaptureError(
                f"Match of {self.pattern_name!r} has no @{name} capture"
            )
        return node

    def text(self, name: str) -> str | None:
        """Return the source text captured as *name*, or ``None``."""
        node = self.capture(name)
        return self.ast.get_text(node) if node is not None else None

    def elements(self, name: str) -> list[ts.Node]:
        """Return the non-comment named children of the *name* capture.

        Raises:
            MissingCaptureError: If the match has no such capture.
        """
        return named_elements(self.require(name))


class CompiledPattern:
    """A validated ``StructuralPattern`` bound to one language."""

    __slots__ = ("pattern", "language", "_query", "_regexes")

    def __init__(
        self,
        pattern: StructuralPattern,
        language: str,
        query: ts.Query,
        regexes: dict[str, re.Pattern[str]],
    ) -> None:
        self.pattern = pattern
        self.language = language
        self._query = query
        self._regexes = regexes

    @property
    def name(self) -> str:
        return self.pattern.name

    def find_all(self, ast: ParsedAST) -> list[QueryMatch]:
        """Return every match of the pattern in *ast*, in document order.

        An empty list is the normal result for a tree without the shape.

        Raises:
            ValueError: If *ast* was parsed with a different language.
        """
        if ast.language != self.language:
            raise ValueError(
                f"Pattern {self.name!r} compiled for {self.language}, "
                f"tree parsed as {ast.language}"
            )

        cursor = ts.QueryCursor(self._query)
        results: list[QueryMatch] = []
        for pattern_index, captures_dict in cursor.matches(ast.root_node):
            match = QueryMatch(
                pattern_name=self.name,
                pattern_index=pattern_index,
                captures=dict(captures_dict),
                ast=ast,
            )
            if self._passes_constraints(match):
                results.append(match)
        return results

    def _passes_constraints(self, match: QueryMatch) -> bool:
        for capture, regex in self._regexes.items():
            text = match.text(capture)
            if text is None or regex.search(text) is None:
                return False
        for group in self.pattern.same_text:
            texts = {match.text(capture) for capture in group}
            if None in texts or len(texts) != 1:
                return False
        for capture, count in self.pattern.arity.items():
            node = match.capture(capture)
            if node is None or len(named_elements(node)) != count:
                return False
        return True
