"""Serialize expression trees to MapLibre style JSON.

Converts nodes to the JSON array syntax of MapLibre style expressions:

    Literal("x")                     -> "x"
    VariableRef("x")                 -> ["var", "x"]
    Call("concat", (a, b))           -> ["concat", a, b]
    LexicalBinding({"x": v}, body)   -> ["let", "x", v, body]

The operator vocabulary and argument order are emitted verbatim; the
external renderer rejects any deviation.

Python 3.13+.
"""

import json

from maplabels.enums import Operator

from .ast import Call, Expression, LexicalBinding, Literal, VariableRef
from .visitor import ExpressionVisitor

__all__ = ["ExpressionSerializer", "serialize", "serialize_json"]

type JSONValue = str | int | float | bool | None | list["JSONValue"] | dict[str, object]


class ExpressionSerializer(ExpressionVisitor[JSONValue]):
    """Converts an expression tree to JSON-compatible Python values.

    Thread-safe serializer with no mutable instance state beyond the
    depth guard, which is balanced on every return.

    Usage:
        >>> from maplabels.syntax import get, serialize
        >>> serialize(get("name"))
        ['get', 'name']
    """

    __slots__ = ()

    def visit_Literal(self, node: Literal) -> JSONValue:
        # Fresh copies so callers may edit the output freely.
        if isinstance(node.value, dict):
            return dict(node.value)
        if isinstance(node.value, list):
            return list(node.value)
        return node.value

    def visit_VariableRef(self, node: VariableRef) -> JSONValue:
        return [str(Operator.VAR), str(node.name)]

    def visit_Call(self, node: Call) -> JSONValue:
        return [str(node.operator), *(self.visit(arg) for arg in node.args)]

    def visit_LexicalBinding(self, node: LexicalBinding) -> JSONValue:
        result: list[JSONValue] = [str(Operator.LET)]
        for name, value in node.bindings.items():
            result.append(str(name))
            result.append(self.visit(value))
        result.append(self.visit(node.body))
        return result


def serialize(node: Expression) -> JSONValue:
    """Convert an expression tree to MapLibre JSON-compatible values."""
    return ExpressionSerializer().visit(node)


def serialize_json(node: Expression, *, indent: int | None = None) -> str:
    """Convert an expression tree to a JSON string.

    Non-ASCII text (bullets, zero-width spaces, local names) is written
    as-is rather than escaped.
    """
    return json.dumps(serialize(node), ensure_ascii=False, indent=indent)
