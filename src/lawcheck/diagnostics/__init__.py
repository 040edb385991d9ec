"""Diagnostic system for lawcheck errors.

Provides structured error diagnostics with codes, hints and the seed/size
context needed to reproduce a failing generation.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    GenerationError,
    GeneratorExhaustedError,
    GeneratorFailedError,
    LawBindingError,
    LawCheckError,
    UngeneratableDomainError,
)
from .evaluation import EvaluationError
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "EvaluationError",
    "GenerationError",
    "GeneratorExhaustedError",
    "GeneratorFailedError",
    "LawBindingError",
    "LawCheckError",
    "OutputFormat",
    "UngeneratableDomainError",
]
