"""Drawing samples and evaluating propositions.

Shared by the trial loop and the shrinker so both phases treat generator
and evaluation failures identically:
    - LawCheckError from a generator or from FunctionValue.apply
      propagates (fatal for the run)
    - Any other exception from a generator is wrapped in
      GeneratorFailedError with the reproducing seed and size
    - Any other exception from the proposition is returned as an
      inconclusive outcome, never as a law violation

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from lawcheck.core import Seed
from lawcheck.diagnostics import ErrorTemplate, GeneratorFailedError, LawCheckError
from lawcheck.generation import ValueGenerator

from .results import Sample, TrialOutcome

__all__ = ["Proposition", "draw", "evaluate"]

logger = logging.getLogger(__name__)

type Proposition = Callable[..., bool]


def _render(generator: ValueGenerator[object], value: object) -> str:
    try:
        return generator.render(value)
    except Exception as e:  # noqa: BLE001 - rendering is best-effort
        logger.debug("Rendering failed for %r: %s", generator, e)
        return f"<unrenderable {type(value).__name__}>"


def draw(generator: ValueGenerator[object], name: str, seed: Seed, size: int) -> Sample:
    """Generate one sample.

    Raises:
        LawCheckError: If the generator reports a generation error
        GeneratorFailedError: If the generator raises anything else
    """
    try:
        value = generator.generate(seed, size)
    except LawCheckError:
        raise
    except Exception as e:
        raise GeneratorFailedError(
            ErrorTemplate.generator_failed(repr(generator), e, seed.hex, size)
        ) from e
    return Sample(name, value, seed, size, _render(generator, value))


def evaluate(
    proposition: Proposition, samples: Sequence[Sample]
) -> tuple[TrialOutcome, Exception | None]:
    """Evaluate proposition against sample values.

    Returns:
        (outcome, exception) where exception is set only when inconclusive

    Raises:
        LawCheckError: If evaluation hit a generation error
    """
    try:
        holds = bool(proposition(*(s.value for s in samples)))
    except LawCheckError:
        raise
    except Exception as e:  # noqa: BLE001 - downgraded to inconclusive
        return TrialOutcome.INCONCLUSIVE, e
    return (TrialOutcome.PASS if holds else TrialOutcome.FAIL), None
