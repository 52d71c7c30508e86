"""Localized label expression compiler.

Builds the expression trees that render a feature's name in the user's
preferred language:

    localized_name_expression  - coalesce over name:<locale> fields
    update_variable            - fill a declared `let` slot
    replace_expression         - bounded find/replace
    list_values_expression     - pretty-print ";"-delimited values
    compose_gloss              - localized name with local-name gloss
    localize_layers            - fill the slots of every layer's text-field

Python 3.13+.
"""

from .collation import (
    collator_expression,
    diacritic_insensitive_collator,
    folds_diacritics,
    localized_collator,
)
from .gloss import (
    GlossBranch,
    compose_gloss,
    ends_with_expression,
    gloss_branches,
    localized_name_with_local_gloss_template,
    overwrite_prefix_expression,
    overwrite_suffix_expression,
    starts_with_expression,
)
from .layers import localize_layers
from .lists import (
    list_values_expression,
    localized_name_inline_template,
    localized_name_template,
)
from .names import localized_name_expression, name_fields
from .replace import check_replacement_budget, replace_expression
from .substitution import update_variable

__all__ = [
    "GlossBranch",
    "check_replacement_budget",
    "collator_expression",
    "compose_gloss",
    "diacritic_insensitive_collator",
    "ends_with_expression",
    "folds_diacritics",
    "gloss_branches",
    "list_values_expression",
    "localize_layers",
    "localized_collator",
    "localized_name_expression",
    "localized_name_inline_template",
    "localized_name_template",
    "localized_name_with_local_gloss_template",
    "name_fields",
    "overwrite_prefix_expression",
    "overwrite_suffix_expression",
    "replace_expression",
    "starts_with_expression",
    "update_variable",
]
