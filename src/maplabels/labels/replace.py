"""Bounded find/replace expressions.

The style expression language has no loops, so replacing every occurrence
of a substring is emulated by nesting one `case` per replacement:

    ["case", [">=", at, 0],
      ["concat", ["slice", H, start, at], R, <same, from at + len(N)>],
      ["slice", H, start]]

where `at` is ["index-of", N, H, start]. The nesting is capped by the
replacement budget K; occurrences past the Kth are left verbatim. This is
the only iteration mechanism in the package, and every list operation is
built on it.

Each step adds four nesting levels, and the offset expression of step k
embeds that of step k - 1, so the serialized size grows with the square of
K. Use the smallest budget the data tolerates, and use the result only once
in a property value; bind it with `let` to reuse the evaluated value.

Python 3.13+.
"""

from maplabels.constants import MAX_REPLACEMENT_BUDGET
from maplabels.diagnostics import ErrorTemplate, ReplacementBudgetError
from maplabels.enums import Operator
from maplabels.syntax import Call, Expression, Literal, LiteralValue, as_expression, call

__all__ = ["check_replacement_budget", "replace_expression"]


def check_replacement_budget(num_replacements: int) -> None:
    """Reject budgets outside 0..MAX_REPLACEMENT_BUDGET.

    Raises:
        ReplacementBudgetError: If the budget is negative or too large
    """
    if not 0 <= num_replacements <= MAX_REPLACEMENT_BUDGET:
        raise ReplacementBudgetError(
            ErrorTemplate.replacement_budget_invalid(
                num_replacements, MAX_REPLACEMENT_BUDGET
            )
        )


def replace_expression(
    haystack: Expression | LiteralValue,
    needle: Expression | str,
    replacement: Expression | LiteralValue,
    haystack_start: Expression | int = 0,
    num_replacements: int = 1,
) -> Expression:
    """Return an expression replacing up to K occurrences of a substring.

    Occurrences are found left to right starting at haystack_start; the
    text before haystack_start is not part of the result.

    Args:
        haystack: The overall string expression to search within
        needle: The string to search for, or an expression evaluating to it
        replacement: The string to insert, or an expression evaluating to it
        haystack_start: Offset at which to start searching
        num_replacements: Replacement budget K, 0..MAX_REPLACEMENT_BUDGET

    Returns:
        Expression evaluating to the tail of the haystack with the first
        min(count, K) occurrences replaced

    Raises:
        ReplacementBudgetError: If num_replacements is out of range
    """
    check_replacement_budget(num_replacements)

    needle_expr = as_expression(needle)
    if isinstance(needle, str):
        needle_length: Expression = Literal(len(needle))
    else:
        needle_length = Call(Operator.LENGTH, (needle_expr,))

    return _replace(
        as_expression(haystack),
        needle_expr,
        needle_length,
        as_expression(replacement),
        as_expression(haystack_start),
        num_replacements,
    )


def _replace(
    haystack: Expression,
    needle: Expression,
    needle_length: Expression,
    replacement: Expression,
    start: Expression,
    remaining: int,
) -> Expression:
    as_is = call(Operator.SLICE, haystack, start)
    if remaining <= 0:
        return as_is

    needle_start = call(Operator.INDEX_OF, needle, haystack, start)
    needle_end = call(Operator.ADD, needle_start, needle_length)
    return call(
        Operator.CASE,
        call(Operator.GE, needle_start, 0),
        call(
            Operator.CONCAT,
            call(Operator.SLICE, haystack, start, needle_start),
            replacement,
            _replace(haystack, needle, needle_length, replacement, needle_end, remaining - 1),
        ),
        as_is,
    )
