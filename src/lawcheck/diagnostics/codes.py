"""Diagnostic codes and the Diagnostic record.

Defines error codes and the structured diagnostic carried by every
lawcheck exception.
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
    """Stable numeric codes for every lawcheck diagnostic.

    Organized by category:
        1000-1999: Generation errors (fatal for a law/type binding)
        2000-2999: Binding errors (law catalog and capability bundles)
        3000-3999: Evaluation diagnostics (per-trial, non-fatal)
    """

    # Generation errors (1000-1999)
    UNGENERATABLE_DOMAIN = 1001
    GENERATOR_EXHAUSTED = 1002
    GENERATOR_FAILED = 1003
    EMPTY_CHOICE = 1004

    # Binding errors (2000-2999)
    UNKNOWN_LAW = 2001
    BINDING_MISMATCH = 2002
    DUPLICATE_LAW = 2003

    # Evaluation diagnostics (3000-3999)
    EVALUATION_RAISED = 3001


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """What went wrong, and how to reproduce it.

    Carries enough context (seed, size hint) to reproduce the failing
    generation outside the original run.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        type_name: Name of the offending Python type, if any
        law: Law name involved, if any
        seed: Hex rendering of the seed in use, if any
        size: Size hint in use, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    type_name: str | None = None
    law: str | None = None
    seed: str | None = None
    size: int | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Render with the default text formatter; used as the exception message.

        Example output:
            error[GENERATOR_EXHAUSTED]: No value satisfied the filter after 100 attempts
              --> seed 9f0c..., size 3
              = help: Loosen the predicate or generate valid values directly

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
