"""Expression tree types and tooling.

Exports the node classes, small constructors, the visitor base class with
depth and field helpers, and JSON conversion in both directions.

Python 3.13+.
"""

from .ast import (
    Call,
    Expression,
    LexicalBinding,
    Literal,
    LiteralValue,
    VariableRef,
    as_expression,
    call,
    get,
    let,
    var,
)
from .parser import parse
from .serializer import ExpressionSerializer, serialize, serialize_json
from .visitor import (
    DepthVisitor,
    ExpressionVisitor,
    FieldCollector,
    expression_depth,
    iter_children,
    referenced_fields,
)

__all__ = [
    "Call",
    "DepthVisitor",
    "Expression",
    "ExpressionSerializer",
    "ExpressionVisitor",
    "FieldCollector",
    "LexicalBinding",
    "Literal",
    "LiteralValue",
    "VariableRef",
    "as_expression",
    "call",
    "expression_depth",
    "get",
    "iter_children",
    "let",
    "parse",
    "referenced_fields",
    "serialize",
    "serialize_json",
    "var",
]
