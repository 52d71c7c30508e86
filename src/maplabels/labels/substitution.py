"""Update-only variable substitution in `let` expressions.

Label templates are written once with placeholder values for the
variables that depend on the user's locales, then filled in per style
build. Substitution only ever overwrites a slot the template already
declares; it never adds a binding, so templates must pre-declare every
variable they expect to be filled.

Substitution mutates the tree in place. Apply it only to a tree still
under construction, never to one already handed to the renderer.

Python 3.13+.
"""

import logging

from maplabels.diagnostics import ErrorTemplate, UndeclaredVariableError
from maplabels.syntax import Expression, LexicalBinding, LiteralValue, as_expression

__all__ = ["update_variable"]

logger = logging.getLogger(__name__)


def update_variable(
    node: Expression | None,
    variable: str,
    value: Expression | LiteralValue,
    *,
    strict: bool = False,
) -> bool:
    """Replace the value of a variable declared by a `let` expression.

    Args:
        node: Expression to update; anything but a LexicalBinding is left alone
        variable: Name of the variable to set
        value: The variable's new value
        strict: Raise instead of ignoring a missing slot

    Returns:
        True if a slot was overwritten, False if the call was a no-op

    Raises:
        UndeclaredVariableError: In strict mode, if node is not a
            LexicalBinding or does not declare the variable
    """
    if not isinstance(node, LexicalBinding):
        if strict:
            raise UndeclaredVariableError(
                ErrorTemplate.not_a_binding(variable, type(node).__name__)
            )
        logger.debug("Not a let expression; %r left unset", variable)
        return False

    if variable not in node.bindings:
        if strict:
            raise UndeclaredVariableError(
                ErrorTemplate.variable_not_declared(variable, node.bindings)
            )
        logger.debug("Variable %r not declared; left unset", variable)
        return False

    node.bindings[variable] = as_expression(value)
    return True
