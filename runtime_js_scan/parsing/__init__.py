"""tree-sitter parsing and structural pattern queries."""

from .ast_engine import ASTEngine, ParsedAST
from .patterns import (
    CodeExample,
    CompiledPattern,
    QueryMatch,
    StructuralPattern,
    named_elements,
)

__all__ = [
    "ASTEngine",
    "CodeExample",
    "CompiledPattern",
    "ParsedAST",
    "QueryMatch",
    "StructuralPattern",
    "named_elements",
]
