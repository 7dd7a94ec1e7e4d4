"""sci-calc AST module.

Exports all expression node types and the serializer for converting
trees to and from JSON/YAML.
"""
from __future__ import annotations

from scicalc.ast.nodes import (
    BinaryOpExpr,
    BinOp,
    Constant,
    Expression,
    FunctionCall,
    Grouping,
    NumberLit,
    PostfixExpr,
    PostfixKind,
    Span,
    UnaryOpExpr,
    UnaryOpKind,
    children,
    depth,
)
from scicalc.ast.serializer import AstSerializer

__all__ = [
    "Span",
    # Enums
    "BinOp",
    "UnaryOpKind",
    "PostfixKind",
    # Expression nodes
    "Expression",
    "NumberLit",
    "Constant",
    "BinaryOpExpr",
    "UnaryOpExpr",
    "PostfixExpr",
    "FunctionCall",
    "Grouping",
    "children",
    "depth",
    # Serializer
    "AstSerializer",
]
