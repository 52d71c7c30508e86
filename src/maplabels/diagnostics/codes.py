"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Compilation errors (building expression trees)
        2000-2999: Evaluation errors (reference evaluator)
        3000-3999: Locale input warnings
    """

    # Compilation errors (1000-1999)
    REPLACEMENT_BUDGET_INVALID = 1001
    VARIABLE_NOT_DECLARED = 1002
    NOT_A_BINDING = 1003
    EXPRESSION_MALFORMED = 1004

    # Evaluation errors (2000-2999)
    OPERATOR_UNKNOWN = 2001
    VARIABLE_UNBOUND = 2002
    ARITY_MISMATCH = 2003
    TYPE_MISMATCH = 2004
    MAX_DEPTH_EXCEEDED = 2005

    # Locale input warnings (3000-3999)
    LOCALE_TAG_MALFORMED = 3001
    LOCALE_OVERRIDE_EMPTY = 3002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        operator: Operator being compiled or evaluated, if any
        variable: Variable name involved, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    operator: str | None = None
    variable: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[VARIABLE_NOT_DECLARED]: Variable 'localizedName' is not declared by this let expression
              = variable: localizedName
              = help: Declared variables: localizedCollator

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
