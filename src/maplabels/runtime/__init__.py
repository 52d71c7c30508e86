"""Reference evaluation of label expressions.

Python 3.13+.
"""

from .collator import Collator
from .evaluator import (
    ExpressionEvaluator,
    Formatted,
    FormattedSection,
    evaluate,
    render_text,
    select_gloss_strategy,
)

__all__ = [
    "Collator",
    "ExpressionEvaluator",
    "Formatted",
    "FormattedSection",
    "evaluate",
    "render_text",
    "select_gloss_strategy",
]
