"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


def _escape_control_chars(text: str) -> str:
    """Escape line breaks so one diagnostic stays on its own lines."""
    return text.replace("\r", "\\r").replace("\n", "\\n")


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.variable_not_declared("localizedName", ("x",))
        >>> print(formatter.format(diagnostic))
        error[VARIABLE_NOT_DECLARED]: Variable 'localizedName' is not declared by this let expression
          = variable: localizedName
          = help: Declared variables: x

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        VARIABLE_NOT_DECLARED: Variable 'localizedName' is not declared by this let expression
    """

    output_format: OutputFormat = OutputFormat.RUST

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        message = _escape_control_chars(diagnostic.message)
        lines = [f"{diagnostic.severity}[{diagnostic.code.name}]: {message}"]
        if diagnostic.operator is not None:
            lines.append(f"  = operator: {diagnostic.operator}")
        if diagnostic.variable is not None:
            lines.append(f"  = variable: {_escape_control_chars(diagnostic.variable)}")
        if diagnostic.hint:
            lines.append(f"  = help: {_escape_control_chars(diagnostic.hint)}")
        return "\n".join(lines)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        return f"{diagnostic.code.name}: {_escape_control_chars(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        data: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }
        if diagnostic.hint is not None:
            data["hint"] = diagnostic.hint
        if diagnostic.operator is not None:
            data["operator"] = diagnostic.operator
        if diagnostic.variable is not None:
            data["variable"] = diagnostic.variable
        return json.dumps(data, ensure_ascii=False)
