"""Shared constants for maplabels.

This module provides centralized configuration constants used across the
syntax, label and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for evaluation and tree walking
- Replacement budgets: Bounds on the recursive find/replace expressions
- Value lists: The semicolon value separator convention
- Name fields: Feature property keys read by the compiled expressions
- Locale input: Override parameter and fallback locale

All values are immutable. Nothing in the package mutates them at runtime.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Replacement budgets
    "MAX_REPLACEMENT_BUDGET",
    "MAX_VALUE_LIST_LENGTH",
    "DEFAULT_LIST_REPLACEMENTS",
    # Value lists
    "VALUE_DELIMITER",
    "ESCAPED_VALUE_DELIMITER",
    "DELIMITER_PLACEHOLDER",
    "LINE_SEPARATOR",
    "INLINE_SEPARATOR",
    # Gloss rendering
    "WORD_BOUNDARIES",
    "SUFFIX_BOUNDARY",
    "ZERO_WIDTH_SPACE",
    "GLOSS_FONT_SCALE",
    "HIDDEN_FONT_SCALE",
    # Name fields
    "DEFAULT_NAME_FIELD",
    "LEGACY_NAME_FIELD_LOCALES",
    "LEGACY_NAME_SOURCE_LAYERS",
    # Locale input
    "LANGUAGE_PARAMETER",
    "DEFAULT_LOCALE",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting depth accepted by the reference evaluator and the visitor.
# The deepest tree the compiler emits is the gloss template built with the
# default list budget, which stays well below this.
MAX_DEPTH: int = 200

# ============================================================================
# REPLACEMENT BUDGETS
# ============================================================================
#
# The target expression language has no loops. Iterative find/replace is
# emulated by nesting one `case` per replacement, so every additional
# replacement adds a constant number of nesting levels and a growing
# offset sub-expression to the serialized style. Budgets are chosen from
# observed data, never from the size of the input being processed.
#
# ============================================================================

# Hard ceiling for any replacement budget passed to replace_expression().
# Requests above this are programmer errors and are rejected.
MAX_REPLACEMENT_BUDGET: int = 32

# Maximum number of values in a semicolon-delimited list of values.
# Increasing this deepens the recursion used for every name label and
# lengthens the style JSON.
MAX_VALUE_LIST_LENGTH: int = 9

# A list of N values has at most N - 1 delimiters.
DEFAULT_LIST_REPLACEMENTS: int = MAX_VALUE_LIST_LENGTH - 1

# ============================================================================
# VALUE LISTS
# ============================================================================

# https://wiki.openstreetmap.org/wiki/Semi-colon_value_separator
VALUE_DELIMITER: str = ";"

# A doubled delimiter stands for one literal semicolon inside a value.
ESCAPED_VALUE_DELIMITER: str = ";;"

# Stand-in for an escaped delimiter while the real delimiters are replaced.
# Unlikely to legitimately occur inside a value or a separator.
DELIMITER_PLACEHOLDER: str = "\x91\ufffc\x92"

# Separator between values when each value gets its own line.
LINE_SEPARATOR: str = "\n"

# Separator between values on a single line.
INLINE_SEPARATOR: str = " \u2022 "

# ============================================================================
# GLOSS RENDERING
# ============================================================================

# Characters accepted right after a matched prefix ("Washington, D.C.").
# The first one also pads the target so a prefix may match the whole string.
WORD_BOUNDARIES: str = " ,"

# Character required right before a matched suffix.
SUFFIX_BOUNDARY: str = " "

ZERO_WIDTH_SPACE: str = "\u200b"

# Font scale of the parenthesized local name.
GLOSS_FONT_SCALE: float = 0.8

# Font scale of the faux isolating characters; too small to be drawn.
HIDDEN_FONT_SCALE: float = 0.001

# ============================================================================
# NAME FIELDS
# ============================================================================

# Generic name in the local language, the last resort of every chain.
DEFAULT_NAME_FIELD: str = "name"

# Locales that also have an underscore field (name_de, name_en).
# https://github.com/openmaptiles/openmaptiles/issues/769
LEGACY_NAME_FIELD_LOCALES: frozenset[str] = frozenset({"de", "en"})

# Source layers that have not moved to the colon syntax.
LEGACY_NAME_SOURCE_LAYERS: frozenset[str] = frozenset({"transportation_name"})

# ============================================================================
# LOCALE INPUT
# ============================================================================

# URL fragment key carrying a comma-separated locale override.
LANGUAGE_PARAMETER: str = "language"

# Used when neither an override nor the environment names a locale.
DEFAULT_LOCALE: str = "en"
