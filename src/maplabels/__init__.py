"""maplabels - localized map label expressions.

Compiles MapLibre style expressions that show each map feature's name in
the user's preferred language, pretty-print OpenStreetMap ";"-delimited
value lists, and gloss a translated name with its local spelling.

Public API:
    LocalePreferences - Locale chain from a URL override and agent locales
    localized_name_expression - coalesce over name:<locale> fields
    replace_expression - Bounded find/replace expression
    list_values_expression - Pretty-printed value list expression
    compose_gloss - Localized name glossed with the local name
    update_variable - Fill a declared `let` slot of a template
    localize_layers - Fill the slots of every layer's text-field
    serialize - Expression tree to JSON-compatible value
    parse - JSON-compatible value to expression tree

Exceptions:
    LabelError - Base exception class
    ExpressionError - Invalid compiler input
    EvaluationError - Reference evaluation failures

Submodules:
    maplabels.syntax - Expression nodes, visitor, serializer, parser
    maplabels.labels - Label expression builders
    maplabels.localization - Locale chain resolution
    maplabels.runtime - Reference evaluator used to check rendered text
    maplabels.diagnostics - Error types, codes and formatting
"""

from .diagnostics import (
    EvaluationError,
    ExpressionError,
    LabelError,
    ReplacementBudgetError,
    UndeclaredVariableError,
)
from .labels import (
    compose_gloss,
    list_values_expression,
    localize_layers,
    localized_name_expression,
    replace_expression,
    update_variable,
)
from .localization import LocalePreferences
from .syntax import parse, serialize, serialize_json

# Version information - Auto-populated from package metadata
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("maplabels")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "EvaluationError",
    "ExpressionError",
    "LabelError",
    "LocalePreferences",
    "ReplacementBudgetError",
    "UndeclaredVariableError",
    "__version__",
    "compose_gloss",
    "list_values_expression",
    "localize_layers",
    "localized_name_expression",
    "parse",
    "replace_expression",
    "serialize",
    "serialize_json",
    "update_variable",
]
