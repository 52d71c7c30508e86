"""maplabels exception hierarchy with structured diagnostics.

All exceptions may carry a Diagnostic for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LabelError(Exception):
    """Base exception for all maplabels errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LabelError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ExpressionError(LabelError):
    """An expression tree could not be built or read.

    Raised by the JSON parser for values that are not expressions.
    """


class ReplacementBudgetError(ExpressionError, ValueError):
    """Replacement budget outside 0..MAX_REPLACEMENT_BUDGET.

    Subclasses ValueError because the budget is an argument, not data.
    """


class UndeclaredVariableError(ExpressionError):
    """Strict substitution targeted a slot the template does not declare.

    Templates must pre-declare every variable they expect to be
    overwritten; substitution never inserts a new binding.
    """


class EvaluationError(LabelError):
    """Reference evaluation of an expression tree failed.

    Examples:
    - Unknown operator
    - Variable reference with no enclosing binding
    - Wrong argument count or type
    """


class DepthLimitExceededError(EvaluationError):
    """Raised when maximum expression depth is exceeded.

    This error indicates either:
    - A replacement budget far above the documented limits
    - Malformed programmatic tree construction
    """
