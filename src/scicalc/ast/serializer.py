"""AST serialization and deserialization for sci-calc.

Provides round-trip serialization of expression trees to and from JSON
and YAML.  The serialized form is a plain dict/list structure that maps
naturally to both formats.

Usage
-----
::

    from scicalc.ast.serializer import AstSerializer
    from scicalc.parser import parse

    serializer = AstSerializer()
    tree = parse("sin(30) + 2²")
    json_text = serializer.to_json(tree)
    assert serializer.from_json(json_text) == tree
"""
from __future__ import annotations

import json

import yaml

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
)


class AstSerializer:
    """Converts between expression trees and plain Python dicts.

    Every node dict carries a ``"kind"`` discriminator so that
    deserialization is unambiguous.
    """

    # ------------------------------------------------------------------
    # Serialization (AST → dict)
    # ------------------------------------------------------------------

    def to_dict(self, expr: Expression) -> dict[str, object]:
        """Serialize an expression tree to a JSON-compatible dict."""
        span = self._span_to_dict(expr.span)
        if isinstance(expr, NumberLit):
            return {"kind": "NumberLit", "value": expr.value, "span": span}
        if isinstance(expr, Constant):
            return {"kind": "Constant", "name": expr.name, "value": expr.value, "span": span}
        if isinstance(expr, BinaryOpExpr):
            return self._chain_to_dict(expr)
        if isinstance(expr, UnaryOpExpr):
            return {
                "kind": "UnaryOpExpr",
                "op": expr.op.name,
                "operand": self.to_dict(expr.operand),
                "span": span,
            }
        if isinstance(expr, PostfixExpr):
            return {
                "kind": "PostfixExpr",
                "op": expr.op.name,
                "operand": self.to_dict(expr.operand),
                "span": span,
            }
        if isinstance(expr, FunctionCall):
            return {
                "kind": "FunctionCall",
                "name": expr.name,
                "argument": self.to_dict(expr.argument),
                "span": span,
            }
        if isinstance(expr, Grouping):
            return {"kind": "Grouping", "inner": self.to_dict(expr.inner), "span": span}
        raise TypeError(f"Unknown expression type: {type(expr)}")

    def _chain_to_dict(self, expr: BinaryOpExpr) -> dict[str, object]:
        """Serialize a binary chain bottom-up along its left spine."""
        spine: list[BinaryOpExpr] = []
        node: Expression = expr
        while isinstance(node, BinaryOpExpr):
            spine.append(node)
            node = node.left
        result = self.to_dict(node)
        for binop in reversed(spine):
            result = {
                "kind": "BinaryOpExpr",
                "op": binop.op.name,
                "left": result,
                "right": self.to_dict(binop.right),
                "span": self._span_to_dict(binop.span),
            }
        return result

    def _span_to_dict(self, span: Span) -> dict[str, int]:
        return {"start": span.start, "end": span.end}

    # ------------------------------------------------------------------
    # Deserialization (dict → AST)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, object]) -> Expression:
        """Deserialize an expression tree from a plain dict."""
        kind = data.get("kind")
        span = self._span_from_dict(data.get("span", {}))  # type: ignore[arg-type]
        if kind == "NumberLit":
            return NumberLit(value=float(data["value"]), span=span)  # type: ignore[arg-type]
        if kind == "Constant":
            return Constant(
                name=str(data["name"]),
                value=float(data["value"]),  # type: ignore[arg-type]
                span=span,
            )
        if kind == "BinaryOpExpr":
            return self._chain_from_dict(data)
        if kind == "UnaryOpExpr":
            return UnaryOpExpr(
                op=UnaryOpKind[str(data["op"])],
                operand=self.from_dict(data["operand"]),  # type: ignore[arg-type]
                span=span,
            )
        if kind == "PostfixExpr":
            return PostfixExpr(
                op=PostfixKind[str(data["op"])],
                operand=self.from_dict(data["operand"]),  # type: ignore[arg-type]
                span=span,
            )
        if kind == "FunctionCall":
            return FunctionCall(
                name=str(data["name"]),
                argument=self.from_dict(data["argument"]),  # type: ignore[arg-type]
                span=span,
            )
        if kind == "Grouping":
            return Grouping(inner=self.from_dict(data["inner"]), span=span)  # type: ignore[arg-type]
        raise ValueError(f"Unknown expression kind: {kind!r}")

    def _chain_from_dict(self, data: dict[str, object]) -> Expression:
        """Rebuild a binary chain bottom-up along its left spine."""
        spine: list[dict[str, object]] = []
        node = data
        while node.get("kind") == "BinaryOpExpr":
            spine.append(node)
            node = node["left"]  # type: ignore[assignment]
        result = self.from_dict(node)
        for item in reversed(spine):
            result = BinaryOpExpr(
                op=BinOp[str(item["op"])],
                left=result,
                right=self.from_dict(item["right"]),  # type: ignore[arg-type]
                span=self._span_from_dict(item.get("span", {})),  # type: ignore[arg-type]
            )
        return result

    def _span_from_dict(self, d: dict[str, int]) -> Span:
        if not d:
            return Span.unknown()
        return Span(start=int(d["start"]), end=int(d["end"]))

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, expr: Expression, indent: int = 2) -> str:
        """Serialize an expression tree to a JSON string."""
        return json.dumps(self.to_dict(expr), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Expression:
        """Deserialize an expression tree from a JSON string."""
        data: dict[str, object] = json.loads(text)
        return self.from_dict(data)

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, expr: Expression) -> str:
        """Serialize an expression tree to a YAML string."""
        return yaml.dump(self.to_dict(expr), default_flow_style=False, allow_unicode=True, sort_keys=False)

    def from_yaml(self, text: str) -> Expression:
        """Deserialize an expression tree from a YAML string."""
        data: dict[str, object] = yaml.safe_load(text)
        return self.from_dict(data)
