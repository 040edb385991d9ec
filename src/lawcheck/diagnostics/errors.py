"""lawcheck exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Exceptions here are FATAL for a run: generation-time and configuration
problems abort immediately. Failures inside the proposition under test are
never raised; they are recorded per trial as EvaluationError records.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LawCheckError(Exception):
    """Base exception for all lawcheck errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LawCheckError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class GenerationError(LawCheckError):
    """Base class for errors raised while producing sampled values."""


class UngeneratableDomainError(GenerationError):
    """Function domain type cannot be digested stably.

    Raised by FunctionGenerator when an input value (for example an
    embedded function value or an arbitrary object) has no stable
    structural encoding. Silently falling back to identity or to the
    salted builtin hash() would break application determinism.
    """


class GeneratorExhaustedError(GenerationError):
    """Generator cannot satisfy its constraints within the requested size.

    Example:
        integers().filter(lambda n: n > 1000) at size 10
    """


class GeneratorFailedError(GenerationError):
    """Generator raised an unexpected exception.

    Wraps the original exception (available as __cause__) together with
    the seed and size that reproduce it.
    """


class LawBindingError(LawCheckError):
    """Law catalog or capability bundle misuse.

    Examples:
    - Unknown law name
    - Monoid law checked against a functor binding
    - Duplicate registration
    """
