"""Rendering of Diagnostic objects.

Every lawcheck exception message is produced here, so the reproduction
context a diagnostic carries (seed, size hint, law, offending type) shows
up the same way in tracebacks, logs and tooling output.

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_ANSI_RESET = "\033[0m"
_ANSI_SEVERITY = {"error": "\033[1;31m", "warning": "\033[1;33m"}

# Optional Diagnostic fields emitted by the JSON format, in order.
_CONTEXT_FIELDS = ("hint", "type_name", "law", "seed", "size")


class OutputFormat(StrEnum):
    """Output styles shared by diagnostics and run reports."""

    TEXT = "text"  # Multi-line, one context item per line (default)
    SIMPLE = "simple"  # One line, code and message only
    JSON = "json"  # One JSON object per diagnostic or report


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Formats diagnostics for terminals, logs and tools.

    Attributes:
        output_format: Output style (text, simple, json)
        color: Highlight the severity with ANSI escapes

    Example:
        >>> known = ("monoid.associativity",)
        >>> diagnostic = ErrorTemplate.unknown_law("monoid.commutativity", known)
        >>> print(DiagnosticFormatter().format(diagnostic))
        error[UNKNOWN_LAW]: Law 'monoid.commutativity' is not registered
          = law: monoid.commutativity
          = help: Available laws: monoid.associativity
    """

    output_format: OutputFormat = OutputFormat.TEXT
    color: bool = False

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured style."""
        match self.output_format:
            case OutputFormat.TEXT:
                return "\n".join(self._text_lines(diagnostic))
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {diagnostic.message}"
            case OutputFormat.JSON:
                return json.dumps(self._as_dict(diagnostic), ensure_ascii=False)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics separated by blank lines."""
        return "\n\n".join(map(self.format, diagnostics))

    def _severity(self, diagnostic: Diagnostic) -> str:
        if not self.color:
            return diagnostic.severity
        return f"{_ANSI_SEVERITY[diagnostic.severity]}{diagnostic.severity}{_ANSI_RESET}"

    def _text_lines(self, diagnostic: Diagnostic) -> Iterator[str]:
        yield f"{self._severity(diagnostic)}[{diagnostic.code.name}]: {diagnostic.message}"
        if diagnostic.seed is not None:
            size = "" if diagnostic.size is None else f", size {diagnostic.size}"
            yield f"  --> seed {diagnostic.seed}{size}"
        if diagnostic.law:
            yield f"  = law: {diagnostic.law}"
        if diagnostic.type_name:
            yield f"  = type: {diagnostic.type_name}"
        if diagnostic.hint:
            yield f"  = help: {diagnostic.hint}"

    @staticmethod
    def _as_dict(diagnostic: Diagnostic) -> dict[str, str | int]:
        data: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }
        for field in _CONTEXT_FIELDS:
            value = getattr(diagnostic, field)
            if value is not None:
                data[field] = value
        return data
