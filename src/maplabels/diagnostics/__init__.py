"""Diagnostic system for maplabels errors.

Provides structured error diagnostics with codes and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    DepthLimitExceededError,
    EvaluationError,
    ExpressionError,
    LabelError,
    ReplacementBudgetError,
    UndeclaredVariableError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "EvaluationError",
    "ExpressionError",
    "LabelError",
    "OutputFormat",
    "ReplacementBudgetError",
    "UndeclaredVariableError",
]
