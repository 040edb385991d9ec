"""Run configuration for PropertyRunner.

Provides a single frozen dataclass that encapsulates every knob of a law
check, so the trial budget and shrink bounds are explicit, overridable
values instead of global state.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from lawcheck.constants import (
    DEFAULT_MAX_REPEATED_ERRORS,
    DEFAULT_MAX_SHRINK_ATTEMPTS,
    DEFAULT_MAX_SIZE,
    DEFAULT_SHRINK_VARIANTS,
    DEFAULT_TRIAL_BUDGET,
    DEFAULT_WORKERS,
)

__all__ = ["RunConfig", "size_for_trial"]


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Immutable configuration for a property run.

    All fields have sensible defaults; ``RunConfig()`` reproduces the
    customary 100-trial run.

    Attributes:
        trial_budget: Trials per run (default: 100).
        max_size: Size hint of the last trial; sizes grow linearly from 0
            (default: 100).
        max_shrink_attempts: Proposition evaluations allowed while
            minimizing a counterexample (default: 1000).
        shrink_variants: Candidates per input per smaller size hint
            (default: 8). Function values always use a single candidate.
        max_repeated_errors: Consecutive identical evaluation errors that
            stop the run as inconclusive (default: 5).
        workers: Threads evaluating trials (default: 1, sequential).
            Results do not depend on this value.

    Example:
        >>> config = RunConfig(trial_budget=500, workers=4)
        >>> runner = PropertyRunner(config)
    """

    trial_budget: int = DEFAULT_TRIAL_BUDGET
    max_size: int = DEFAULT_MAX_SIZE
    max_shrink_attempts: int = DEFAULT_MAX_SHRINK_ATTEMPTS
    shrink_variants: int = DEFAULT_SHRINK_VARIANTS
    max_repeated_errors: int = DEFAULT_MAX_REPEATED_ERRORS
    workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If a count is not positive or max_size is negative.
        """
        if self.trial_budget <= 0:
            msg = "trial_budget must be positive"
            raise ValueError(msg)
        if self.max_size < 0:
            msg = "max_size must be non-negative"
            raise ValueError(msg)
        if self.max_shrink_attempts < 0:
            msg = "max_shrink_attempts must be non-negative"
            raise ValueError(msg)
        if self.shrink_variants <= 0:
            msg = "shrink_variants must be positive"
            raise ValueError(msg)
        if self.max_repeated_errors <= 0:
            msg = "max_repeated_errors must be positive"
            raise ValueError(msg)
        if self.workers <= 0:
            msg = "workers must be positive"
            raise ValueError(msg)


def size_for_trial(index: int, trial_budget: int, max_size: int) -> int:
    """Size hint of 1-based trial index.

    Non-decreasing in index: the first trial runs at size 0 and the last
    at max_size.

    Example:
        >>> [size_for_trial(i, 5, 100) for i in range(1, 6)]
        [0, 25, 50, 75, 100]
    """
    if trial_budget <= 1:
        return 0
    return (index - 1) * max_size // (trial_budget - 1)
