"""Trial outcomes and run results.

A run produces exactly one immutable result:
    Success:      no trial violated the law (possibly cancelled early)
    Failure:      a trial violated the law; carries the first failing
                  inputs and their minimized form
    Inconclusive: evaluation errors prevented any verdict

Every sample records the seed and size hint that generated it, so a
report is enough to regenerate the exact inputs outside the run.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from lawcheck.core import Seed
from lawcheck.diagnostics import EvaluationError

__all__ = [
    "Counterexample",
    "Failure",
    "Inconclusive",
    "InconclusiveReason",
    "Sample",
    "Success",
    "TestResult",
    "Trial",
    "TrialOutcome",
]


class TrialOutcome(StrEnum):
    """Outcome of evaluating a proposition against one input tuple."""

    PASS = "pass"
    FAIL = "fail"
    INCONCLUSIVE = "inconclusive"


class InconclusiveReason(StrEnum):
    """Why a run produced no verdict.

    REPEATED_ERROR: the same evaluation error recurred on consecutive
        trials (a broken operation or a non-terminating computation)
    NO_VERDICT: every trial of the run raised
    """

    REPEATED_ERROR = "repeated_error"
    NO_VERDICT = "no_verdict"


@dataclass(frozen=True, slots=True)
class Sample:
    """One generated input.

    Attributes:
        name: Proposition argument name
        value: Generated value
        seed: Seed passed to the generator
        size: Size hint passed to the generator
        rendered: Textual rendering for reports
    """

    name: str
    value: object
    seed: Seed
    size: int
    rendered: str


@dataclass(frozen=True, slots=True)
class Trial:
    """One evaluation of a proposition.

    Attributes:
        index: 1-based trial number (0 for replays)
        seed: Trial seed (inputs use its splits)
        size: Trial size hint
        samples: Generated inputs
        outcome: Pass, fail or inconclusive
        error: Evaluation error record when inconclusive
    """

    index: int
    seed: Seed
    size: int
    samples: tuple[Sample, ...]
    outcome: TrialOutcome
    error: EvaluationError | None = None


@dataclass(frozen=True, slots=True)
class Counterexample:
    """Input tuple for which a law does not hold.

    Attributes:
        trial: Trial number that found the inputs
        seed: Seed of that trial
        samples: Failing inputs
    """

    trial: int
    seed: Seed
    samples: tuple[Sample, ...]

    @property
    def values(self) -> tuple[object, ...]:
        """Raw input values."""
        return tuple(s.value for s in self.samples)

    @property
    def size(self) -> int:
        """Largest size hint among the inputs."""
        return max((s.size for s in self.samples), default=0)

    def render(self) -> str:
        """Render as name = value pairs."""
        return ", ".join(f"{s.name} = {s.rendered}" for s in self.samples)


@dataclass(frozen=True, slots=True)
class Success:
    """No trial in the budget violated the law.

    Attributes:
        label: Law or property name
        trials_run: Trials evaluated (including inconclusive ones)
        seed: Master seed of the run
        inconclusive: Evaluation errors recorded along the way
        cancelled: True if the run stopped early on request
    """

    label: str
    trials_run: int
    seed: Seed
    inconclusive: tuple[EvaluationError, ...] = ()
    cancelled: bool = False

    @property
    def passed(self) -> bool:
        """Always True."""
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """A trial violated the law.

    Attributes:
        label: Law or property name
        original: First failing inputs, as generated
        minimized: Inputs after shrinking (size hints <= original)
        shrink_steps: Candidates adopted while shrinking
        shrink_attempts: Candidates evaluated while shrinking
        trials_run: Trials evaluated up to and including the failing one
        seed: Master seed of the run
        inconclusive: Evaluation errors recorded before the failure
        cancelled: True if shrinking stopped early on request
    """

    label: str
    original: Counterexample
    minimized: Counterexample
    shrink_steps: int
    shrink_attempts: int
    trials_run: int
    seed: Seed
    inconclusive: tuple[EvaluationError, ...] = ()
    cancelled: bool = False

    @property
    def passed(self) -> bool:
        """Always False."""
        return False


@dataclass(frozen=True, slots=True)
class Inconclusive:
    """Evaluation errors prevented a verdict.

    Attributes:
        label: Law or property name
        trials_run: Trials evaluated
        seed: Master seed of the run
        errors: Evaluation errors recorded
        reason: Why the run stopped without a verdict
    """

    label: str
    trials_run: int
    seed: Seed
    errors: tuple[EvaluationError, ...]
    reason: InconclusiveReason

    @property
    def passed(self) -> bool:
        """Always False."""
        return False


type TestResult = Success | Failure | Inconclusive
