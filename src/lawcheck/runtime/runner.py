"""Property runner: trial loop and shrink search.

Architecture:
    - Trial i (1-based) uses master.child(i) as its seed; its inputs use
      the splits of that seed, one per generator.
    - Trial sizes grow with i (see size_for_trial), so later trials probe
      larger structures.
    - The loop stops at the first failing trial, which is then minimized
      by the Shrinker.
    - With workers > 1, trials are evaluated on a thread pool in batches
      and consumed strictly in trial order, so the result for a given
      master seed never depends on scheduling.

Error Policy:
    - Generation and configuration errors (LawCheckError) abort the run.
    - Exceptions from the proposition or the structure's operations make
      the trial inconclusive. The run continues unless the same error
      recurs on max_repeated_errors consecutive trials.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import closing
from dataclasses import replace

from lawcheck.core import Seed
from lawcheck.diagnostics import EvaluationError
from lawcheck.generation import ValueGenerator

from .cancellation import CancellationToken
from .config import RunConfig, size_for_trial
from .results import (
    Counterexample,
    Failure,
    Inconclusive,
    InconclusiveReason,
    Success,
    TestResult,
    Trial,
    TrialOutcome,
)
from .sampling import Proposition, draw, evaluate
from .shrink import Shrinker

__all__ = ["PropertyRunner"]

logger = logging.getLogger(__name__)

_PREFLIGHT_TAG = b"preflight"


class PropertyRunner:
    """Runs a boolean proposition over generated inputs.

    Stateless apart from its configuration; one runner may serve many
    concurrent runs.

    Example:
        >>> runner = PropertyRunner(RunConfig(trial_budget=50))
        >>> result = runner.run(lambda x, y: x + y == y + x, [integers(), integers()], seed=1)
        >>> result.passed, result.trials_run
        (True, 50)
    """

    __slots__ = ("_config",)

    def __init__(self, config: RunConfig | None = None) -> None:
        """Initialize runner.

        Args:
            config: Run configuration (default: RunConfig())
        """
        self._config = config or RunConfig()

    @property
    def config(self) -> RunConfig:
        """Run configuration."""
        return self._config

    def run(
        self,
        proposition: Proposition,
        generators: Sequence[ValueGenerator[object]],
        *,
        seed: Seed | int | str | None = None,
        trial_budget: int | None = None,
        names: Sequence[str] | None = None,
        label: str = "property",
        cancel: CancellationToken | None = None,
    ) -> TestResult:
        """Check proposition over trial_budget sampled input tuples.

        Args:
            proposition: Predicate taking one argument per generator
            generators: Input generators
            seed: Master seed (Seed, int, hex string); None draws entropy
            trial_budget: Overrides config.trial_budget for this run
            names: Argument names for reports (default: arg0, arg1, ...)
            label: Property name for reports and logs
            cancel: Cooperative cancellation token

        Returns:
            Success, Failure or Inconclusive

        Raises:
            LawCheckError: On generation or configuration errors
            ValueError: If names and generators differ in length
        """
        config = self._config
        if trial_budget is not None:
            config = replace(config, trial_budget=trial_budget)
        generators = tuple(generators)
        arg_names = self._names(names, len(generators))
        master = Seed.coerce(seed)

        self._preflight(generators, master, config.max_size)
        logger.info(
            "Checking %s: %d trial(s), seed %s", label, config.trial_budget, master.hex
        )

        def run_trial(index: int) -> Trial:
            size = size_for_trial(index, config.trial_budget, config.max_size)
            return self._trial(proposition, generators, arg_names, index, master.child(index), size)

        passed = 0
        trials_run = 0
        errors: list[EvaluationError] = []
        repeated = 0
        failing: Trial | None = None
        cancelled = False

        with closing(self._trials(run_trial, config, cancel)) as trials:
            for trial in trials:
                if trial is None:
                    cancelled = True
                    break
                trials_run += 1
                match trial.outcome:
                    case TrialOutcome.PASS:
                        passed += 1
                        repeated = 0
                    case TrialOutcome.FAIL:
                        failing = trial
                        break
                    case TrialOutcome.INCONCLUSIVE:
                        assert trial.error is not None
                        logger.warning("Inconclusive trial: %s", trial.error.format())
                        if errors and repeated and errors[-1].signature == trial.error.signature:
                            repeated += 1
                        else:
                            repeated = 1
                        errors.append(trial.error)
                        if repeated >= config.max_repeated_errors:
                            logger.warning(
                                "%s: same evaluation error on %d consecutive trials, giving up",
                                label,
                                repeated,
                            )
                            return Inconclusive(
                                label,
                                trials_run,
                                master,
                                tuple(errors),
                                InconclusiveReason.REPEATED_ERROR,
                            )

        if failing is not None:
            return self._shrink(
                proposition, generators, failing, config, cancel, label, master, trials_run, errors
            )

        if cancelled:
            logger.info("%s cancelled after %d trial(s)", label, trials_run)
        if passed == 0 and errors and not cancelled:
            return Inconclusive(
                label, trials_run, master, tuple(errors), InconclusiveReason.NO_VERDICT
            )

        logger.info("%s passed %d trial(s)", label, trials_run)
        return Success(label, trials_run, master, tuple(errors), cancelled)

    def replay(
        self,
        proposition: Proposition,
        generators: Sequence[ValueGenerator[object]],
        seed: Seed | int | str,
        size: int,
        *,
        names: Sequence[str] | None = None,
    ) -> Trial:
        """Re-run the single trial identified by a trial seed and size.

        The seed and size printed in a failure report regenerate exactly
        the original (unminimized) inputs.

        Args:
            proposition: Predicate taking one argument per generator
            generators: Input generators, as in the original run
            seed: Trial seed (not the master seed)
            size: Trial size hint
            names: Argument names (default: arg0, arg1, ...)

        Returns:
            Trial with index 0
        """
        if seed is None:
            msg = "replay() requires an explicit trial seed"
            raise TypeError(msg)
        generators = tuple(generators)
        arg_names = self._names(names, len(generators))
        return self._trial(proposition, generators, arg_names, 0, Seed.coerce(seed), size)

    @staticmethod
    def _names(names: Sequence[str] | None, count: int) -> tuple[str, ...]:
        if names is None:
            return tuple(f"arg{i}" for i in range(count))
        if len(names) != count:
            msg = f"Expected {count} argument name(s), got {len(names)}"
            raise ValueError(msg)
        return tuple(names)

    @staticmethod
    def _preflight(
        generators: Sequence[ValueGenerator[object]], master: Seed, max_size: int
    ) -> None:
        preflight_seed = master.derive(_PREFLIGHT_TAG)
        for generator, seed in zip(generators, preflight_seed.splits(len(generators)), strict=True):
            check: Callable[[Seed, int], None] | None = getattr(generator, "preflight", None)
            if check is not None:
                check(seed, max_size)

    @staticmethod
    def _trial(
        proposition: Proposition,
        generators: Sequence[ValueGenerator[object]],
        names: Sequence[str],
        index: int,
        seed: Seed,
        size: int,
    ) -> Trial:
        input_seeds = seed.splits(len(generators))
        samples = tuple(
            draw(g, n, s, size) for g, n, s in zip(generators, names, input_seeds, strict=True)
        )
        outcome, exception = evaluate(proposition, samples)
        error = None
        if exception is not None:
            error = EvaluationError.from_exception(exception, trial=index, seed=seed.hex, size=size)
        return Trial(index, seed, size, samples, outcome, error)

    @staticmethod
    def _trials(
        run_trial: Callable[[int], Trial],
        config: RunConfig,
        cancel: CancellationToken | None,
    ) -> Iterator[Trial | None]:
        """Yield trials in index order; yield None once if cancelled."""
        indices = range(1, config.trial_budget + 1)
        if config.workers == 1:
            for index in indices:
                if cancel is not None and cancel.cancelled:
                    yield None
                    return
                yield run_trial(index)
            return

        with ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="lawcheck") as pool:
            for start in range(0, len(indices), config.workers):
                if cancel is not None and cancel.cancelled:
                    yield None
                    return
                batch = indices[start : start + config.workers]
                # map() yields in submission order regardless of completion order.
                yield from pool.map(run_trial, batch)

    def _shrink(
        self,
        proposition: Proposition,
        generators: Sequence[ValueGenerator[object]],
        failing: Trial,
        config: RunConfig,
        cancel: CancellationToken | None,
        label: str,
        master: Seed,
        trials_run: int,
        errors: list[EvaluationError],
    ) -> Failure:
        logger.info(
            "%s failed on trial %d (seed %s, size %d); shrinking",
            label,
            failing.index,
            failing.seed.hex,
            failing.size,
        )
        shrinker = Shrinker(
            proposition,
            generators,
            max_attempts=config.max_shrink_attempts,
            variants=config.shrink_variants,
            cancel=cancel,
        )
        shrunk = shrinker.shrink(failing.samples)
        original = Counterexample(failing.index, failing.seed, failing.samples)
        minimized = Counterexample(failing.index, failing.seed, shrunk.samples)
        logger.info(
            "%s minimized in %d step(s): %s", label, shrunk.steps, minimized.render()
        )
        return Failure(
            label=label,
            original=original,
            minimized=minimized,
            shrink_steps=shrunk.steps,
            shrink_attempts=shrunk.attempts,
            trials_run=trials_run,
            seed=master,
            inconclusive=tuple(errors),
            cancelled=shrunk.cancelled,
        )
