"""Reference evaluator for compiled label expressions.

Evaluates an expression tree against one feature's properties, following
the semantics of the MapLibre style expression operators the compiler
emits. Used by tests and tooling to check what a label renders to; it does
no layout, glyph shaping or drawing.

String offsets and lengths count code points, while the renderer counts
UTF-16 code units. Results differ for names outside the Basic
Multilingual Plane, so do not treat this evaluator as an oracle for them.

Thread Safety:
    Evaluation state (scope chain, depth guard) is local to each
    ExpressionEvaluator, and trees are never modified, so the same tree
    may be evaluated concurrently by separate evaluators.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections import ChainMap
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from maplabels.constants import DEFAULT_NAME_FIELD, ZERO_WIDTH_SPACE
from maplabels.core.depth_guard import DepthGuard
from maplabels.diagnostics import DiagnosticCode, ErrorTemplate, EvaluationError
from maplabels.enums import GlossStrategy, Operator, TemplateVariable
from maplabels.labels.gloss import compose_gloss, gloss_branches
from maplabels.localization.types import LocaleTag
from maplabels.syntax import Call, Expression, LexicalBinding, Literal, VariableRef

from .collator import Collator

__all__ = [
    "ExpressionEvaluator",
    "Formatted",
    "FormattedSection",
    "evaluate",
    "render_text",
    "select_gloss_strategy",
]

logger = logging.getLogger(__name__)

type Scope = ChainMap[str, object]

# Sections drawn smaller than this are treated as invisible.
_MIN_VISIBLE_SCALE: float = 0.01


@dataclass(frozen=True, slots=True)
class FormattedSection:
    """One run of text in a formatted label.

    Attributes:
        text: Section text
        font_scale: Relative font size, None for the layer default
    """

    text: str
    font_scale: float | None = None


@dataclass(frozen=True, slots=True)
class Formatted:
    """Result of a `format` expression: text runs with inline styles."""

    sections: tuple[FormattedSection, ...]

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        """All section text, including hidden runs and zero-width spaces."""
        return "".join(section.text for section in self.sections)

    def visible_text(self, min_scale: float = _MIN_VISIBLE_SCALE) -> str:
        """Text a reader would see.

        Drops sections scaled below min_scale (the faux isolating
        characters) and zero-width spaces.
        """
        return "".join(
            section.text
            for section in self.sections
            if section.font_scale is None or section.font_scale >= min_scale
        ).replace(ZERO_WIDTH_SPACE, "")


def _to_string(value: object) -> str:
    """String conversion used by concat and format."""
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case float() if value.is_integer():
            return str(int(value))
        case Formatted():
            return value.text
        case _:
            return str(value)


class ExpressionEvaluator:
    """Evaluates expression trees against one feature.

    Usage:
        >>> evaluator = ExpressionEvaluator({"name": "Montréal", "name:en": "Montreal"})
        >>> evaluator.evaluate(localized_name_expression(["en"]))
        'Montreal'
    """

    __slots__ = ("_guard", "_operators", "_properties")

    def __init__(
        self,
        properties: Mapping[str, object] | None = None,
        *,
        max_depth: int | None = None,
    ) -> None:
        """Initialize evaluator.

        Args:
            properties: Feature properties read by ["get", key]
            max_depth: Maximum expression depth (default: MAX_DEPTH)
        """
        self._properties: Mapping[str, object] = properties or {}
        self._guard = DepthGuard() if max_depth is None else DepthGuard(max_depth=max_depth)
        self._operators: dict[str, Callable[[Sequence[Expression], Scope], object]] = {
            Operator.GET: self._op_get,
            Operator.LITERAL: self._op_literal,
            Operator.COALESCE: self._op_coalesce,
            Operator.CASE: self._op_case,
            Operator.ALL: self._op_all,
            Operator.IN: self._op_in,
            Operator.EQ: self._op_eq,
            Operator.NE: self._op_ne,
            Operator.GE: self._op_ge,
            Operator.ADD: self._op_add,
            Operator.SUB: self._op_sub,
            Operator.SLICE: self._op_slice,
            Operator.INDEX_OF: self._op_index_of,
            Operator.CONCAT: self._op_concat,
            Operator.LENGTH: self._op_length,
            Operator.COLLATOR: self._op_collator,
            Operator.FORMAT: self._op_format,
        }

    def evaluate(
        self,
        expr: Expression,
        variables: Mapping[str, object] | None = None,
    ) -> object:
        """Evaluate an expression.

        Args:
            expr: Expression tree
            variables: Values of variables bound outside expr

        Returns:
            str, number, bool, None, Collator, Formatted, or a literal value

        Raises:
            EvaluationError: Unknown operator, unbound variable, or bad arguments
            DepthLimitExceededError: If the tree is nested too deeply
        """
        scope: Scope = ChainMap(dict(variables or {}))
        return self._eval(expr, scope)

    def bind(
        self,
        binding: LexicalBinding,
        variables: Mapping[str, object] | None = None,
    ) -> dict[str, object]:
        """Evaluate the values of a let expression without its body."""
        scope: Scope = ChainMap(dict(variables or {}))
        return {name: self._eval(value, scope) for name, value in binding.bindings.items()}

    def _eval(self, expr: Expression, scope: Scope) -> object:
        with self._guard:
            match expr:
                case Literal(value=value):
                    return value
                case VariableRef(name=name):
                    if name not in scope:
                        raise EvaluationError(ErrorTemplate.variable_unbound(name))
                    return scope[name]
                case LexicalBinding(bindings=bindings, body=body):
                    values = {name: self._eval(value, scope) for name, value in bindings.items()}
                    return self._eval(body, scope.new_child(values))
                case Call(operator=operator, args=args):
                    handler = self._operators.get(operator)
                    if handler is None:
                        raise EvaluationError(ErrorTemplate.operator_unknown(operator))
                    return handler(args, scope)
                case _:
                    raise EvaluationError(
                        ErrorTemplate.type_mismatch("evaluate", "an expression node", expr)
                    )

    # ------------------------------------------------------------------
    # Argument helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _arity(operator: str, args: Sequence[Expression], *counts: int) -> None:
        if len(args) not in counts:
            expected = " or ".join(str(count) for count in counts)
            raise EvaluationError(ErrorTemplate.arity_mismatch(operator, expected, len(args)))

    def _string(self, operator: str, expr: Expression, scope: Scope) -> str:
        value = self._eval(expr, scope)
        if not isinstance(value, str):
            raise EvaluationError(ErrorTemplate.type_mismatch(operator, "a string", value))
        return value

    def _number(self, operator: str, expr: Expression, scope: Scope) -> int | float:
        value = self._eval(expr, scope)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EvaluationError(ErrorTemplate.type_mismatch(operator, "a number", value))
        return value

    def _index(self, operator: str, expr: Expression, scope: Scope) -> int:
        return int(self._number(operator, expr, scope))

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _op_get(self, args: Sequence[Expression], scope: Scope) -> object:
        self._arity(Operator.GET, args, 1)
        return self._properties.get(self._string(Operator.GET, args[0], scope))

    def _op_literal(self, args: Sequence[Expression], scope: Scope) -> object:
        self._arity(Operator.LITERAL, args, 1)
        return self._eval(args[0], scope)

    def _op_coalesce(self, args: Sequence[Expression], scope: Scope) -> object:
        for arg in args:
            value = self._eval(arg, scope)
            if value is not None:
                return value
        return None

    def _op_case(self, args: Sequence[Expression], scope: Scope) -> object:
        if len(args) < 3 or len(args) % 2 == 0:
            raise EvaluationError(
                ErrorTemplate.arity_mismatch(Operator.CASE, "an odd number >= 3 of", len(args))
            )
        for index in range(0, len(args) - 1, 2):
            if self._eval(args[index], scope) is True:
                return self._eval(args[index + 1], scope)
        return self._eval(args[-1], scope)

    def _op_all(self, args: Sequence[Expression], scope: Scope) -> bool:
        return all(self._eval(arg, scope) is True for arg in args)

    def _op_in(self, args: Sequence[Expression], scope: Scope) -> bool:
        self._arity(Operator.IN, args, 2)
        needle = self._eval(args[0], scope)
        haystack = self._eval(args[1], scope)
        match haystack:
            case str():
                return isinstance(needle, str) and needle in haystack
            case list():
                return needle in haystack
            case _:
                raise EvaluationError(
                    ErrorTemplate.type_mismatch(Operator.IN, "a string or array", haystack)
                )

    def _equals(self, operator: str, args: Sequence[Expression], scope: Scope) -> bool:
        self._arity(operator, args, 2, 3)
        left = self._eval(args[0], scope)
        right = self._eval(args[1], scope)
        if len(args) == 3:
            collator = self._eval(args[2], scope)
            if not isinstance(collator, Collator):
                raise EvaluationError(ErrorTemplate.type_mismatch(operator, "a collator", collator))
            if isinstance(left, str) and isinstance(right, str):
                return collator.equals(left, right)
        return left == right

    def _op_eq(self, args: Sequence[Expression], scope: Scope) -> bool:
        return self._equals(Operator.EQ, args, scope)

    def _op_ne(self, args: Sequence[Expression], scope: Scope) -> bool:
        return not self._equals(Operator.NE, args, scope)

    def _op_ge(self, args: Sequence[Expression], scope: Scope) -> bool:
        self._arity(Operator.GE, args, 2)
        return self._number(Operator.GE, args[0], scope) >= self._number(Operator.GE, args[1], scope)

    def _op_add(self, args: Sequence[Expression], scope: Scope) -> int | float:
        return sum(self._number(Operator.ADD, arg, scope) for arg in args)

    def _op_sub(self, args: Sequence[Expression], scope: Scope) -> int | float:
        self._arity(Operator.SUB, args, 1, 2)
        if len(args) == 1:
            return -self._number(Operator.SUB, args[0], scope)
        return self._number(Operator.SUB, args[0], scope) - self._number(Operator.SUB, args[1], scope)

    def _op_slice(self, args: Sequence[Expression], scope: Scope) -> object:
        # Python slicing matches JavaScript's slice(): negative offsets
        # count from the end and out-of-range offsets are clamped.
        self._arity(Operator.SLICE, args, 2, 3)
        value = self._eval(args[0], scope)
        if not isinstance(value, (str, list)):
            raise EvaluationError(
                ErrorTemplate.type_mismatch(Operator.SLICE, "a string or array", value)
            )
        start = self._index(Operator.SLICE, args[1], scope)
        if len(args) == 3:
            return value[start : self._index(Operator.SLICE, args[2], scope)]
        return value[start:]

    def _op_index_of(self, args: Sequence[Expression], scope: Scope) -> int:
        self._arity(Operator.INDEX_OF, args, 2, 3)
        needle = self._eval(args[0], scope)
        haystack = self._eval(args[1], scope)
        start = max(0, self._index(Operator.INDEX_OF, args[2], scope)) if len(args) == 3 else 0
        match haystack:
            case str():
                if not isinstance(needle, str):
                    raise EvaluationError(
                        ErrorTemplate.type_mismatch(Operator.INDEX_OF, "a string needle", needle)
                    )
                return haystack.find(needle, start)
            case list():
                for index in range(start, len(haystack)):
                    if haystack[index] == needle:
                        return index
                return -1
            case _:
                raise EvaluationError(
                    ErrorTemplate.type_mismatch(Operator.INDEX_OF, "a string or array", haystack)
                )

    def _op_concat(self, args: Sequence[Expression], scope: Scope) -> str:
        return "".join(_to_string(self._eval(arg, scope)) for arg in args)

    def _op_length(self, args: Sequence[Expression], scope: Scope) -> int:
        self._arity(Operator.LENGTH, args, 1)
        value = self._eval(args[0], scope)
        if not isinstance(value, (str, list)):
            raise EvaluationError(
                ErrorTemplate.type_mismatch(Operator.LENGTH, "a string or array", value)
            )
        return len(value)

    def _op_collator(self, args: Sequence[Expression], scope: Scope) -> Collator:
        self._arity(Operator.COLLATOR, args, 1)
        options = self._eval(args[0], scope)
        if not isinstance(options, Mapping):
            raise EvaluationError(
                ErrorTemplate.type_mismatch(Operator.COLLATOR, "an options object", options)
            )
        return Collator.from_options(options)

    def _op_format(self, args: Sequence[Expression], scope: Scope) -> Formatted:
        # Each section is a value optionally followed by an options object.
        sections: list[FormattedSection] = []
        index = 0
        while index < len(args):
            value = self._eval(args[index], scope)
            index += 1
            options: Mapping[str, object] = {}
            if index < len(args) and isinstance(args[index], Literal):
                candidate = args[index].value  # type: ignore[union-attr]
                if isinstance(candidate, dict):
                    options = candidate
                    index += 1
            scale = options.get("font-scale")
            font_scale = float(scale) if isinstance(scale, (int, float)) else None
            if isinstance(value, Formatted):
                sections.extend(value.sections)
            else:
                sections.append(FormattedSection(_to_string(value), font_scale))
        return Formatted(tuple(sections))


def evaluate(
    expr: Expression,
    properties: Mapping[str, object] | None = None,
    variables: Mapping[str, object] | None = None,
) -> object:
    """Evaluate an expression against a feature's properties."""
    return ExpressionEvaluator(properties).evaluate(expr, variables)


def render_text(expr: Expression, properties: Mapping[str, object] | None = None) -> str | None:
    """Return the visible label text, or None when no label is drawn.

    A label that evaluates to null, or whose operators reject the feature's
    values (a gloss over a feature without a local name), is dropped the
    way the renderer drops it. Other evaluation errors propagate.
    """
    try:
        value = evaluate(expr, properties)
    except EvaluationError as e:
        if e.diagnostic is None or e.diagnostic.code is not DiagnosticCode.TYPE_MISMATCH:
            raise
        logger.debug("Label not drawn: %s", e)
        return None
    match value:
        case None:
            return None
        case Formatted():
            return value.visible_text()
        case _:
            return _to_string(value)


def select_gloss_strategy(
    properties: Mapping[str, object],
    locales: Sequence[LocaleTag],
) -> GlossStrategy | None:
    """Report which gloss composer arm a feature would take.

    Evaluates the arm conditions of compose_gloss(locales) in order, with
    the template's variables bound, and returns the first that holds.

    Returns:
        The chosen strategy, or None when the feature has no usable
        localized or local name and no label is drawn
    """
    evaluator = ExpressionEvaluator(properties)
    variables = evaluator.bind(compose_gloss(locales))
    localized = variables[TemplateVariable.LOCALIZED_NAME]
    local = properties.get(DEFAULT_NAME_FIELD)
    if not isinstance(localized, str) or not isinstance(local, str):
        logger.debug("No gloss strategy: name unavailable for %s", tuple(locales))
        return None

    *conditional, fallback = gloss_branches()
    strategy = fallback.strategy
    for branch in conditional:
        if branch.condition is not None and evaluator.evaluate(branch.condition, variables) is True:
            strategy = branch.strategy
            break
    logger.debug("Gloss strategy %s for %s", strategy, tuple(locales))
    return strategy
