"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def replacement_budget_invalid(requested: int, maximum: int) -> Diagnostic:
        """Replacement budget outside the accepted range.

        Args:
            requested: Budget passed by the caller
            maximum: Largest accepted budget

        Returns:
            Diagnostic for REPLACEMENT_BUDGET_INVALID
        """
        msg = f"Replacement budget {requested} is outside 0..{maximum}"
        return Diagnostic(
            code=DiagnosticCode.REPLACEMENT_BUDGET_INVALID,
            message=msg,
            hint="Pick the smallest budget the data tolerates; each step deepens the tree",
        )

    @staticmethod
    def variable_not_declared(variable: str, declared: Iterable[str]) -> Diagnostic:
        """Substitution target missing from a let expression.

        Args:
            variable: Name that was requested
            declared: Names the let expression does bind

        Returns:
            Diagnostic for VARIABLE_NOT_DECLARED
        """
        names = ", ".join(declared) or "(none)"
        msg = f"Variable '{variable}' is not declared by this let expression"
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_NOT_DECLARED,
            message=msg,
            variable=variable,
            hint=f"Declared variables: {names}",
        )

    @staticmethod
    def not_a_binding(variable: str, node_type: str) -> Diagnostic:
        """Substitution attempted on a node that is not a let expression.

        Args:
            variable: Name that was requested
            node_type: Class name of the node received

        Returns:
            Diagnostic for NOT_A_BINDING
        """
        msg = f"Cannot set variable '{variable}' on a {node_type} node"
        return Diagnostic(
            code=DiagnosticCode.NOT_A_BINDING,
            message=msg,
            variable=variable,
            hint="Only let expressions carry replaceable slots",
        )

    @staticmethod
    def expression_malformed(detail: str) -> Diagnostic:
        """JSON value cannot be read as an expression."""
        return Diagnostic(
            code=DiagnosticCode.EXPRESSION_MALFORMED,
            message=f"Malformed expression: {detail}",
        )

    @staticmethod
    def operator_unknown(operator: str) -> Diagnostic:
        """Operator not supported by the reference evaluator.

        Args:
            operator: Operator name

        Returns:
            Diagnostic for OPERATOR_UNKNOWN
        """
        msg = f"Unknown expression operator '{operator}'"
        return Diagnostic(
            code=DiagnosticCode.OPERATOR_UNKNOWN,
            message=msg,
            operator=operator,
        )

    @staticmethod
    def variable_unbound(variable: str) -> Diagnostic:
        """Variable reference outside any binding of that name.

        Args:
            variable: Referenced name

        Returns:
            Diagnostic for VARIABLE_UNBOUND
        """
        msg = f"Variable '{variable}' is not bound in this scope"
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_UNBOUND,
            message=msg,
            variable=variable,
            hint="Wrap the expression in a let that binds it",
        )

    @staticmethod
    def arity_mismatch(operator: str, expected: str, received: int) -> Diagnostic:
        """Operator called with the wrong number of arguments.

        Args:
            operator: Operator name
            expected: Human-readable expected count (e.g. "2 or 3")
            received: Number of arguments received

        Returns:
            Diagnostic for ARITY_MISMATCH
        """
        msg = f"'{operator}' expects {expected} argument(s), got {received}"
        return Diagnostic(
            code=DiagnosticCode.ARITY_MISMATCH,
            message=msg,
            operator=operator,
        )

    @staticmethod
    def type_mismatch(operator: str, expected: str, received: object) -> Diagnostic:
        """Operator received a value of the wrong type.

        Args:
            operator: Operator name
            expected: Expected type description
            received: Value received

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        msg = f"'{operator}' expects {expected}, got {type(received).__name__}"
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=msg,
            operator=operator,
        )

    @staticmethod
    def expression_depth_exceeded(max_depth: int) -> Diagnostic:
        """Expression nesting deeper than allowed.

        Args:
            max_depth: Configured limit

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum expression depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Lower the replacement budget or flatten the expression",
        )

    @staticmethod
    def locale_tag_malformed(tag: str, reason: str) -> Diagnostic:
        """Override contained a tag that is not a locale identifier."""
        return Diagnostic(
            code=DiagnosticCode.LOCALE_TAG_MALFORMED,
            message=f"Ignoring malformed locale tag {tag!r}: {reason}",
            severity="warning",
        )

    @staticmethod
    def locale_override_empty(override: str) -> Diagnostic:
        """Override held no usable tag at all."""
        return Diagnostic(
            code=DiagnosticCode.LOCALE_OVERRIDE_EMPTY,
            message=f"Locale override {override!r} names no usable locale",
            hint="Falling back to the agent locales",
            severity="warning",
        )
