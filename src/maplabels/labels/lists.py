"""Pretty-printing of semicolon-delimited value lists.

OpenStreetMap stores multiple values in one tag separated by ";" and
escapes a literal semicolon as ";;".
https://wiki.openstreetmap.org/wiki/Semi-colon_value_separator

list_values_expression() turns such a list into display text in three
bounded passes, each bound with `let` so it is evaluated once:

1. ";;" -> placeholder
2. ";"  -> separator
3. placeholder -> ";"

    "A;;B;C" with " • "  ->  "A;B • C"

Python 3.13+.
"""

from maplabels.constants import (
    DEFAULT_LIST_REPLACEMENTS,
    DELIMITER_PLACEHOLDER,
    ESCAPED_VALUE_DELIMITER,
    INLINE_SEPARATOR,
    LINE_SEPARATOR,
    VALUE_DELIMITER,
)
from maplabels.enums import TemplateVariable
from maplabels.syntax import Expression, LexicalBinding, LiteralValue, as_expression, var

from .replace import check_replacement_budget, replace_expression

__all__ = [
    "list_values_expression",
    "localized_name_inline_template",
    "localized_name_template",
]

_SAFE_VALUE_LIST = "safeValueList"
_PRETTY_VALUE_LIST = "prettyValueList"


def list_values_expression(
    value_list: Expression | LiteralValue,
    separator: Expression | str,
    max_replacements: int = DEFAULT_LIST_REPLACEMENTS,
) -> Expression:
    """Return an expression pretty-printing a semicolon-delimited list.

    The returned expression is large, so use it only once within a
    property value.

    Args:
        value_list: A semicolon-delimited list of values
        separator: Text inserted between values, or an expression
            evaluating to it
        max_replacements: Delimiters handled per pass; a list may have
            max_replacements + 1 values before the tail is left as-is

    Returns:
        Nested let expression evaluating to the formatted list

    Raises:
        ReplacementBudgetError: If max_replacements is out of range
    """
    check_replacement_budget(max_replacements)

    safe_value_list = replace_expression(
        value_list,
        ESCAPED_VALUE_DELIMITER,
        DELIMITER_PLACEHOLDER,
        0,
        max_replacements,
    )
    pretty_value_list = replace_expression(
        var(_SAFE_VALUE_LIST),
        VALUE_DELIMITER,
        as_expression(separator),
        0,
        max_replacements,
    )
    pretty_safe_value_list = replace_expression(
        var(_PRETTY_VALUE_LIST),
        DELIMITER_PLACEHOLDER,
        VALUE_DELIMITER,
        0,
        max_replacements,
    )
    return LexicalBinding(
        {_SAFE_VALUE_LIST: safe_value_list},
        LexicalBinding({_PRETTY_VALUE_LIST: pretty_value_list}, pretty_safe_value_list),
    )


def _localized_name_list(separator: str) -> LexicalBinding:
    return LexicalBinding(
        {TemplateVariable.LOCALIZED_NAME: as_expression("")},
        list_values_expression(var(TemplateVariable.LOCALIZED_NAME), separator),
    )


def localized_name_template() -> LexicalBinding:
    """The names in the user's preferred language, each on a separate line.

    Returns a fresh template; fill `localizedName` before use.
    """
    return _localized_name_list(LINE_SEPARATOR)


def localized_name_inline_template() -> LexicalBinding:
    """The names in the user's preferred language, all on the same line.

    Returns a fresh template; fill `localizedName` before use.
    """
    return _localized_name_list(INLINE_SEPARATOR)
