"""Read MapLibre style JSON into expression trees.

Inverse of maplabels.syntax.serializer for the expressions the compiler
emits, and lenient enough to load hand-written `text-field` templates from
a style document so their `let` slots can be localized.

Rules:
    ["let", n1, v1, ..., body]  -> LexicalBinding
    ["var", name]               -> VariableRef
    ["literal", value]          -> Call("literal", (Literal(value),)), value kept raw
    ["match", input, label, output, ..., fallback]
                                -> Call, labels kept raw
    [operator: str, *args]      -> Call
    anything else               -> Literal

Python 3.13+.
"""

from maplabels.core.depth_guard import DepthGuard
from maplabels.diagnostics import ErrorTemplate, ExpressionError
from maplabels.enums import Operator

from .ast import Call, Expression, LexicalBinding, Literal, VariableRef

__all__ = ["parse"]

_MATCH = "match"


def parse(value: object, *, max_depth: int | None = None) -> Expression:
    """Parse a JSON-compatible value into an expression tree.

    Args:
        value: Decoded JSON (lists, dicts, scalars)
        max_depth: Nesting limit (default: MAX_DEPTH)

    Returns:
        Expression tree

    Raises:
        ExpressionError: For malformed let/var forms or empty arrays
        DepthLimitExceededError: If nesting exceeds max_depth
    """
    guard = DepthGuard() if max_depth is None else DepthGuard(max_depth=max_depth)
    return _parse(value, guard)


def _parse(value: object, guard: DepthGuard) -> Expression:
    with guard:
        if isinstance(value, list):
            return _parse_array(value, guard)
        if isinstance(value, dict):
            return Literal(dict(value))
        if value is None or isinstance(value, (str, int, float, bool)):
            return Literal(value)
        raise ExpressionError(
            ErrorTemplate.expression_malformed(f"unsupported value {value!r}")
        )


def _parse_array(value: list[object], guard: DepthGuard) -> Expression:
    if not value:
        raise ExpressionError(ErrorTemplate.expression_malformed("empty array"))
    head, *rest = value
    if not isinstance(head, str):
        return Literal(list(value))

    match head:
        case Operator.LET:
            return _parse_let(rest, guard)
        case Operator.VAR:
            if len(rest) != 1 or not isinstance(rest[0], str):
                raise ExpressionError(
                    ErrorTemplate.expression_malformed("var takes one name")
                )
            return VariableRef(rest[0])
        case Operator.LITERAL:
            if len(rest) != 1:
                raise ExpressionError(
                    ErrorTemplate.expression_malformed("literal takes one value")
                )
            return Call(Operator.LITERAL, (Literal(rest[0]),))  # type: ignore[arg-type]
        case "match":
            return _parse_match(rest, guard)
        case _:
            return Call(head, tuple(_parse(arg, guard) for arg in rest))


def _parse_let(rest: list[object], guard: DepthGuard) -> LexicalBinding:
    if len(rest) < 3 or len(rest) % 2 == 0:
        raise ExpressionError(
            ErrorTemplate.expression_malformed("let needs name/value pairs and a body")
        )
    *pairs, body = rest
    bindings: dict[str, Expression] = {}
    for index in range(0, len(pairs), 2):
        name = pairs[index]
        if not isinstance(name, str):
            raise ExpressionError(
                ErrorTemplate.expression_malformed(f"let binding name {name!r}")
            )
        if name in bindings:
            raise ExpressionError(
                ErrorTemplate.expression_malformed(f"let binds {name!r} more than once")
            )
        bindings[name] = _parse(pairs[index + 1], guard)
    return LexicalBinding(bindings, _parse(body, guard))


def _parse_match(rest: list[object], guard: DepthGuard) -> Call:
    # Labels sit at odd offsets between the input and the fallback.
    args: list[Expression] = []
    last = len(rest) - 1
    for index, arg in enumerate(rest):
        if index % 2 == 1 and index != last:
            args.append(Literal(arg))  # type: ignore[arg-type]
        else:
            args.append(_parse(arg, guard))
    return Call(_MATCH, tuple(args))
