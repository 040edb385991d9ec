"""Counterexample minimization by size-hint reduction.

Each failing input is shrunk independently while the others stay at their
last known failing value. Candidates for an input are regenerated from
the input's own seed (plus seeds derived from it) at every size hint
strictly below its current one, smallest size first. The first candidate
that still makes the proposition return False is adopted.

Termination:
    Every adoption strictly lowers the size hint of one input, so the sum
    of size hints is a decreasing measure. The search additionally stops
    after max_attempts evaluations or on cancellation.

Function values have no structural ordering; they are only regenerated
from their own seed at smaller size hints, which shrinks the complexity
of their outputs.

Generation errors met while shrinking (a filter exhausted at a smaller
size, a generator or function codomain failing on a seed no trial
visited) disqualify that candidate only. The failure already found is
never lost to them.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from lawcheck.core import OpaqueValue
from lawcheck.diagnostics import GenerationError
from lawcheck.generation import ValueGenerator

from .cancellation import CancellationToken
from .results import Sample, TrialOutcome
from .sampling import Proposition, draw, evaluate

__all__ = ["ShrinkResult", "Shrinker"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShrinkResult:
    """Outcome of a shrink search.

    Attributes:
        samples: Minimized failing inputs
        steps: Candidates adopted
        attempts: Candidates evaluated
        cancelled: True if the search stopped on request
    """

    samples: tuple[Sample, ...]
    steps: int
    attempts: int
    cancelled: bool = False


class Shrinker:
    """Sequential shrink search for one failing input tuple."""

    __slots__ = ("_cancel", "_generators", "_max_attempts", "_proposition", "_variants")

    def __init__(
        self,
        proposition: Proposition,
        generators: Sequence[ValueGenerator[object]],
        *,
        max_attempts: int,
        variants: int,
        cancel: CancellationToken | None = None,
    ) -> None:
        """Initialize shrinker.

        Args:
            proposition: Proposition that failed
            generators: One generator per proposition argument
            max_attempts: Evaluation budget
            variants: Candidates per smaller size hint
            cancel: Optional cancellation token
        """
        self._proposition = proposition
        self._generators = tuple(generators)
        self._max_attempts = max_attempts
        self._variants = variants
        self._cancel = cancel

    def shrink(self, samples: Sequence[Sample]) -> ShrinkResult:
        """Minimize a failing input tuple."""
        current = list(samples)
        steps = 0
        attempts = 0
        improved = True
        while improved:
            improved = False
            for index in range(len(current)):
                for candidate in self._candidates(index, current[index]):
                    if self._cancel is not None and self._cancel.cancelled:
                        logger.info("Shrinking cancelled after %d step(s)", steps)
                        return ShrinkResult(tuple(current), steps, attempts, cancelled=True)
                    if attempts >= self._max_attempts:
                        logger.debug("Shrink attempt budget (%d) spent", self._max_attempts)
                        return ShrinkResult(tuple(current), steps, attempts)
                    attempts += 1
                    trial = (*current[:index], candidate, *current[index + 1 :])
                    try:
                        outcome, _ = evaluate(self._proposition, trial)
                    except GenerationError as e:
                        logger.debug("Shrink candidate %s not evaluable: %s", candidate.name, e)
                        continue
                    if outcome is TrialOutcome.FAIL:
                        logger.debug(
                            "Shrink step %d: %s = %s (size %d -> %d)",
                            steps + 1,
                            candidate.name,
                            candidate.rendered,
                            current[index].size,
                            candidate.size,
                        )
                        current[index] = candidate
                        steps += 1
                        improved = True
                        break
        return ShrinkResult(tuple(current), steps, attempts)

    def _candidates(self, index: int, sample: Sample) -> Iterator[Sample]:
        generator = self._generators[index]
        variants = 1 if isinstance(sample.value, OpaqueValue) else self._variants
        for size in range(sample.size):
            for variant in range(variants):
                seed = sample.seed if variant == 0 else sample.seed.child(variant)
                try:
                    yield draw(generator, sample.name, seed, size)
                except GenerationError as e:
                    # No valid value at this size; the failure already found stands.
                    logger.debug("Skipping shrink candidate at size %d: %s", size, e)
