"""
Bundler and custom-element signatures.

Each signature is a ``StructuralPattern`` (or, for filename conventions, a
regex) together with positive and negative examples documenting what it
is meant to catch. Queries target the tree-sitter JavaScript grammar; the
TypeScript grammars share the node types used here.
"""

from __future__ import annotations

import re

from ..constants import (
    DEFAULT_WEBPACK_CHUNK_PATTERN,
    ROLLDOWN_RUNTIME_PATTERN,
    WEBPACK_GLOBAL_ALIASES,
)
from ..parsing.patterns import CodeExample, StructuralPattern

# ---------------------------------------------------------------------------
# Webpack chunk registration
# ---------------------------------------------------------------------------

# (self.webpackChunkapp = self.webpackChunkapp || []).push([[179], {...}])
_WEBPACK_CHUNK_QUERY = """
(call_expression
  function: (member_expression
    object: (parenthesized_expression
      (assignment_expression
        left: (member_expression
          object: (identifier) @scope
          property: (property_identifier) @name)
        right: (binary_expression
          left: (member_expression
            object: (identifier) @fallback_scope
            property: (property_identifier) @fallback_name)
          operator: "||"
          right: (array) @fallback)))
    property: (property_identifier) @method)
  arguments: (arguments (array) @tuple) @args
  (#any-of? @scope {aliases})
  (#eq? @method "push"))
"""


def build_webpack_chunk_pattern(
    name_pattern: str = DEFAULT_WEBPACK_CHUNK_PATTERN,
) -> StructuralPattern:
    """Build the chunk-registration pattern for a chunk-global naming regex."""
    aliases = " ".join(f'"{alias}"' for alias in WEBPACK_GLOBAL_ALIASES)
    return StructuralPattern(
        name="webpack-chunk-registration",
        query=_WEBPACK_CHUNK_QUERY.replace("{aliases}", aliases),
        constraints={"name": name_pattern},
        same_text=(("scope", "fallback_scope"), ("name", "fallback_name")),
        arity={"args": 1, "tuple": 2, "fallback": 0},
        description=(
            "Webpack JSONP chunk registration: the chunk array global is "
            "initialised on self/globalThis and a [moduleIds, factories] "
            "tuple is pushed onto it."
        ),
        positive_examples=[
            CodeExample(
                code=(
                    '(self.webpackChunkapp = self.webpackChunkapp || [])'
                    '.push([[179], {42: function(e, t, n) { n(1); }}]);'
                ),
                description="Chunk registered on self",
                should_match=True,
            ),
            CodeExample(
                code=(
                    '(globalThis.webpackChunk_site = globalThis.webpackChunk_site || [])'
                    '.push([["main"], {"./src/a.js": (e) => { e.exports = 1; }}]);'
                ),
                description="Chunk registered on globalThis",
                should_match=True,
            ),
            CodeExample(
                code=(
                    "(self.webpackChunkapp = self.webpackChunkapp || [])"
                    ".push([[7], /*! modules */ {7: function() {}}]);"
                ),
                description="Comment between chunk ids and factories",
                should_match=True,
            ),
        ],
        negative_examples=[
            CodeExample(
                code="(self.myQueue = self.myQueue || []).push([[1], {1: function() {}}]);",
                description="Global name outside the webpack convention",
                should_match=False,
            ),
            CodeExample(
                code=(
                    "(self.webpackChunkapp = globalThis.webpackChunkapp || [])"
                    ".push([[1], {1: function() {}}]);"
                ),
                description="Mismatched global aliases",
                should_match=False,
            ),
            CodeExample(
                code=(
                    "(self.webpackChunkapp = self.webpackChunkapp || [])"
                    ".push([[1], {1: function() {}}, function(r) {}]);"
                ),
                description="Pushed array is not a two-element tuple",
                should_match=False,
            ),
            CodeExample(
                code=(
                    "(self.webpackChunkapp = self.webpackChunkapp || [])"
                    ".push([[1] /* no factories */]);"
                ),
                description="Comment does not stand in for the factories object",
                should_match=False,
            ),
        ],
    )


WEBPACK_CHUNK_REGISTRATION = build_webpack_chunk_pattern()


# ---------------------------------------------------------------------------
# Custom element registration
# ---------------------------------------------------------------------------

CUSTOM_ELEMENT_DEFINE = StructuralPattern(
    name="custom-element-define",
    query="""
(call_expression
  function: (member_expression
    object: (identifier) @registry
    property: (property_identifier) @method)
  arguments: (arguments) @args
  (#eq? @registry "customElements")
  (#eq? @method "define"))

(call_expression
  function: (member_expression
    object: (member_expression
      object: (identifier) @window
      property: (property_identifier) @registry)
    property: (property_identifier) @method)
  arguments: (arguments) @args
  (#eq? @window "window")
  (#eq? @registry "customElements")
  (#eq? @method "define"))
""",
    arity={"args": 2},
    description=(
        "Calls to customElements.define(name, constructor), bare or "
        "qualified with window."
    ),
    positive_examples=[
        CodeExample(
            code="customElements.define('my-button', MyButton);",
            description="Bare global registry",
            should_match=True,
        ),
        CodeExample(
            code="window.customElements.define('my-card', class extends HTMLElement {});",
            description="window-qualified registry",
            should_match=True,
        ),
        CodeExample(
            code="customElements.define('x-tag', /* ctor */ XTag);",
            description="Comment between the arguments",
            should_match=True,
        ),
    ],
    negative_examples=[
        CodeExample(
            code="customElements.get('my-button');",
            description="Lookup, not a registration",
            should_match=False,
        ),
        CodeExample(
            code="registry.define('my-button', MyButton);",
            description="Unrelated define method",
            should_match=False,
        ),
        CodeExample(
            code="customElements.define('x-tag' /* constructor pending */);",
            description="Single argument followed by a comment",
            should_match=False,
        ),
    ],
)


# ---------------------------------------------------------------------------
# Rolldown runtime asset
# ---------------------------------------------------------------------------

ROLLDOWN_RUNTIME_FILENAME = re.compile(ROLLDOWN_RUNTIME_PATTERN)

