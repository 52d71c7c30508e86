"""Expression tree node definitions.

Nodes mirror the MapLibre style expression language: a tree of literals,
variable references, operator calls and `let` bindings. Includes type
guards as static methods and small constructors used by the compiler.

Literal, VariableRef and Call are frozen; a LexicalBinding keeps an ordered
mapping of replaceable slots so that label templates can be filled in
after construction (see maplabels.labels.substitution).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeIs

from maplabels.enums import Operator

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Nodes
    "Literal",
    "VariableRef",
    "Call",
    "LexicalBinding",
    # Type aliases
    "Expression",
    "LiteralValue",
    # Constructors
    "as_expression",
    "call",
    "get",
    "let",
    "var",
]

type LiteralValue = str | int | float | bool | list[object] | dict[str, object] | None
"""Value carried by a Literal: a scalar, a literal array or an options object."""


@dataclass(frozen=True, slots=True)
class Literal:
    """Constant value.

    Serialized as the bare JSON value. Mapping values are operator options
    objects (collator options, format section options).

    Example:
        Literal("name")  ->  "name"
        Literal({"font-scale": 0.8})  ->  {"font-scale": 0.8}
    """

    value: LiteralValue

    @staticmethod
    def guard(node: object) -> TypeIs[Literal]:
        """Type guard for Literal."""
        return isinstance(node, Literal)


@dataclass(frozen=True, slots=True)
class VariableRef:
    """Reference to a variable bound by an enclosing LexicalBinding.

    Example:
        VariableRef("localizedName")  ->  ["var", "localizedName"]
    """

    name: str

    @staticmethod
    def guard(node: object) -> TypeIs[VariableRef]:
        """Type guard for VariableRef."""
        return isinstance(node, VariableRef)


@dataclass(frozen=True, slots=True)
class Call:
    """Operator application with ordered arguments.

    Example:
        Call("coalesce", (get("name:fr"), get("name")))
            ->  ["coalesce", ["get", "name:fr"], ["get", "name"]]
    """

    operator: str
    args: tuple[Expression, ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs[Call]:
        """Type guard for Call."""
        return isinstance(node, Call)


@dataclass(slots=True)
class LexicalBinding:
    """Named values in scope for the body expression.

    Bindings keep insertion order, which is also their serialized order:
        ["let", name1, value1, name2, value2, ..., body]

    Only the values of existing bindings may change, and only through
    maplabels.labels.substitution.update_variable().
    """

    bindings: dict[str, Expression]
    body: Expression

    @staticmethod
    def guard(node: object) -> TypeIs[LexicalBinding]:
        """Type guard for LexicalBinding."""
        return isinstance(node, LexicalBinding)


type Expression = Literal | VariableRef | Call | LexicalBinding


def as_expression(value: Expression | LiteralValue) -> Expression:
    """Wrap plain Python values in a Literal; pass expressions through."""
    if isinstance(value, (Literal, VariableRef, Call, LexicalBinding)):
        return value
    return Literal(value)


def call(operator: str, *args: Expression | LiteralValue) -> Call:
    """Build a Call, wrapping plain argument values in Literal nodes."""
    return Call(operator, tuple(as_expression(arg) for arg in args))


def get(field: str) -> Call:
    """Feature property lookup: ["get", field]."""
    return Call(Operator.GET, (Literal(field),))


def var(name: str) -> VariableRef:
    """Variable reference: ["var", name]."""
    return VariableRef(name)


def let(body: Expression, **bindings: Expression | LiteralValue) -> LexicalBinding:
    """Build a LexicalBinding from keyword bindings, in keyword order."""
    return LexicalBinding(
        {name: as_expression(value) for name, value in bindings.items()},
        body,
    )
