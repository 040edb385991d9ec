"""Per-trial evaluation error records.

An EvaluationError is NOT an exception. It records that the proposition
or a structure operation raised during one trial, which downgrades that
trial to an inconclusive outcome instead of a law violation.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from .codes import DiagnosticCode

__all__ = ["EvaluationError"]


@dataclass(frozen=True, slots=True)
class EvaluationError:
    """Structured record of an exception raised during a trial.

    Attributes:
        trial: 1-based trial index (0 for replays and shrink candidates)
        seed: Hex seed of the trial
        size: Size hint of the trial
        exception_type: Qualified name of the exception class
        message: str() of the exception
        code: Diagnostic code (EVALUATION_RAISED)
    """

    trial: int
    seed: str
    size: int
    exception_type: str
    message: str
    code: DiagnosticCode = DiagnosticCode.EVALUATION_RAISED

    @classmethod
    def from_exception(
        cls, error: Exception, *, trial: int, seed: str, size: int
    ) -> EvaluationError:
        """Build a record from a caught exception."""
        error_type = type(error)
        return cls(
            trial=trial,
            seed=seed,
            size=size,
            exception_type=f"{error_type.__module__}.{error_type.__qualname__}",
            message=str(error),
        )

    @property
    def signature(self) -> tuple[str, str]:
        """Identity used to detect an error recurring identically."""
        return (self.exception_type, self.message)

    def format(self) -> str:
        """Format record as a single human-readable line."""
        return (
            f"[{self.code.name}] trial {self.trial} (seed {self.seed}, size {self.size}): "
            f"{self.exception_type}: {self.message}"
        )
