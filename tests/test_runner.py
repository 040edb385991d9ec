"""Tests for lawcheck.runtime.runner: the trial loop.

Covers:
- Trial seeds, input seeds and the size schedule
- Fail-fast behaviour and shrinking hand-off
- Inconclusive trials, repeated-error aborts and runs without a verdict
- Fatal generation errors (preflight, apply-time, generator failures)
- Cooperative cancellation before, during and after the trial loop
- Parallel evaluation producing the sequential result
- Replay of a reported trial

Python 3.13+.
"""

from __future__ import annotations

import itertools

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lawcheck.core import Seed
from lawcheck.diagnostics import (
    DiagnosticCode,
    GeneratorExhaustedError,
    GeneratorFailedError,
    UngeneratableDomainError,
)
from lawcheck.generation import Gen, functions, integers, just, lists
from lawcheck.runtime import (
    CancellationToken,
    Failure,
    Inconclusive,
    InconclusiveReason,
    PropertyRunner,
    RunConfig,
    Success,
    TrialOutcome,
    size_for_trial,
)
from tests.strategies import int_seeds


def _associative_subtraction(x: int, y: int, z: int) -> bool:
    return x - (y - z) == (x - y) - z


class TestRunConfig:
    """Configuration validation and the size schedule."""

    def test_defaults(self) -> None:
        """RunConfig() reproduces the customary 100-trial run."""
        config = RunConfig()
        assert config.trial_budget == 100
        assert config.max_size == 100
        assert config.max_shrink_attempts == 1000
        assert config.shrink_variants == 8
        assert config.max_repeated_errors == 5
        assert config.workers == 1

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"trial_budget": 0},
            {"max_size": -1},
            {"max_shrink_attempts": -1},
            {"shrink_variants": 0},
            {"max_repeated_errors": 0},
            {"workers": 0},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, int]) -> None:
        """Out-of-range knobs fail at construction."""
        with pytest.raises(ValueError):
            RunConfig(**kwargs)

    @given(budget=st.integers(1, 500), max_size=st.integers(0, 500))
    def test_size_schedule_monotone(self, budget: int, max_size: int) -> None:
        """PROPERTY: sizes start at 0, never decrease and end at max_size."""
        sizes = [size_for_trial(i, budget, max_size) for i in range(1, budget + 1)]
        assert sizes[0] == 0
        assert sizes == sorted(sizes)
        assert sizes[-1] == (max_size if budget > 1 else 0)


class TestRunnerSuccess:
    """Runs where the proposition always holds."""

    def test_runs_whole_budget(self) -> None:
        """A true proposition runs every trial."""
        result = PropertyRunner().run(
            lambda x, y: x + y == y + x, [integers(), integers()], seed=1
        )
        assert isinstance(result, Success)
        assert result.passed
        assert result.trials_run == 100
        assert result.seed == Seed.from_int(1)
        assert not result.cancelled

    def test_trial_budget_override(self) -> None:
        """The per-run budget wins over the configured one."""
        runner = PropertyRunner(RunConfig(trial_budget=30))
        assert runner.run(lambda x: True, [integers()], seed=1).trials_run == 30
        assert runner.run(lambda x: True, [integers()], seed=1, trial_budget=7).trials_run == 7

    def test_inputs_use_trial_seed_splits(self) -> None:
        """Trial i draws input k from master.child(i).splits(n)[k]."""
        master = Seed.from_int(21)
        seen: list[tuple[int, int]] = []
        PropertyRunner(RunConfig(trial_budget=5)).run(
            lambda x, y: seen.append((x, y)) is None, [integers(), integers()], seed=master
        )
        for index, (x, y) in enumerate(seen, start=1):
            size = size_for_trial(index, 5, 100)
            left, right = master.child(index).splits(2)
            assert x == integers().generate(left, size)
            assert y == integers().generate(right, size)

    def test_names_must_match_generators(self) -> None:
        """One name per generator."""
        with pytest.raises(ValueError, match="argument name"):
            PropertyRunner().run(lambda x: True, [integers()], names=["x", "y"])

    def test_logs_start_and_finish(self, lawcheck_debug_logs: pytest.LogCaptureFixture) -> None:
        """Runs log at info level."""
        PropertyRunner(RunConfig(trial_budget=3)).run(
            lambda x: True, [integers()], seed=1, label="trivial"
        )
        assert "Checking trivial" in lawcheck_debug_logs.text
        assert "trivial passed 3 trial(s)" in lawcheck_debug_logs.text


class TestRunnerFailure:
    """Runs where the proposition is falsified."""

    def test_fails_fast_and_shrinks(self) -> None:
        """The first failing trial ends the loop and is minimized."""
        result = PropertyRunner().run(
            _associative_subtraction,
            [integers(), integers(), integers()],
            seed=42,
            names=["x", "y", "z"],
        )
        assert isinstance(result, Failure)
        assert not result.passed
        assert result.trials_run == result.original.trial
        assert result.trials_run < 100
        x, y, z = result.minimized.values
        assert (x, y) == (0, 0)
        assert z != 0
        assert abs(z) <= 2
        assert not _associative_subtraction(*result.minimized.values)
        assert not _associative_subtraction(*result.original.values)

    @settings(max_examples=30, deadline=None)
    @given(seed=int_seeds)
    def test_shrinking_never_grows(self, seed: int) -> None:
        """PROPERTY: minimized size hints never exceed the original ones."""
        prop = lambda xs, n: len(xs) + abs(n) < 12  # noqa: E731
        result = PropertyRunner(RunConfig(trial_budget=60)).run(
            prop, [lists(integers()), integers()], seed=seed
        )
        if isinstance(result, Failure):
            pairs = zip(result.original.samples, result.minimized.samples, strict=True)
            for before, after in pairs:
                assert after.size <= before.size
            assert not prop(*result.minimized.values)
            assert result.shrink_attempts <= RunConfig().max_shrink_attempts

    def test_original_counterexample_carries_trial_seed(self) -> None:
        """The failing trial's seed derives from the master seed."""
        result = PropertyRunner().run(lambda x: x < 10, [integers()], seed=3)
        assert isinstance(result, Failure)
        assert result.original.seed == Seed.from_int(3).child(result.original.trial)
        assert result.minimized.seed == result.original.seed

    def test_replay_regenerates_original(self) -> None:
        """replay() with the reported trial seed and size reproduces the inputs."""
        generators = [integers(), integers(), integers()]
        runner = PropertyRunner()
        result = runner.run(_associative_subtraction, generators, seed=42)
        assert isinstance(result, Failure)
        trial = runner.replay(
            _associative_subtraction,
            generators,
            result.original.seed.hex,
            result.original.samples[0].size,
        )
        assert trial.index == 0
        assert trial.outcome is TrialOutcome.FAIL
        assert trial.samples == result.original.samples


class TestRunnerInconclusive:
    """Exceptions from the proposition never count as violations."""

    def test_isolated_errors_are_recorded(self) -> None:
        """A proposition raising on some inputs still yields a verdict."""
        result = PropertyRunner().run(lambda x: 100 // x == 100 // x, [integers()], seed=1)
        assert isinstance(result, Success)
        assert result.inconclusive
        first = result.inconclusive[0]
        assert first.trial == 1
        assert first.size == 0
        assert first.exception_type == "builtins.ZeroDivisionError"

    def test_repeated_identical_error_stops_run(self) -> None:
        """The same error on consecutive trials aborts as inconclusive."""

        def broken(x: int) -> bool:
            msg = "operation not implemented"
            raise NotImplementedError(msg)

        result = PropertyRunner().run(broken, [integers()], seed=1)
        assert isinstance(result, Inconclusive)
        assert not result.passed
        assert result.reason is InconclusiveReason.REPEATED_ERROR
        assert result.trials_run == 5
        assert len(result.errors) == 5

    def test_every_trial_erroring_is_no_verdict(self) -> None:
        """Distinct errors on every trial give no verdict."""
        counter = itertools.count()

        def flaky(x: int) -> bool:
            msg = f"failure {next(counter)}"
            raise RuntimeError(msg)

        result = PropertyRunner(RunConfig(trial_budget=10)).run(flaky, [integers()], seed=1)
        assert isinstance(result, Inconclusive)
        assert result.reason is InconclusiveReason.NO_VERDICT
        assert result.trials_run == 10

    def test_inconclusive_trials_logged(
        self, lawcheck_debug_logs: pytest.LogCaptureFixture
    ) -> None:
        """Each inconclusive trial logs a warning."""
        PropertyRunner(RunConfig(trial_budget=3)).run(lambda x: 1 // x > 0, [just(0)], seed=1)
        assert "Inconclusive trial" in lawcheck_debug_logs.text


class TestRunnerFatalErrors:
    """Generation errors abort the run."""

    def test_generator_exception_wrapped(self) -> None:
        """Unexpected generator exceptions become GeneratorFailedError."""
        broken = Gen(lambda seed, size: 1 // 0, "broken")
        with pytest.raises(GeneratorFailedError) as exc_info:
            PropertyRunner().run(lambda x: True, [broken], seed=1)
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.size == 0
        assert diagnostic.seed == Seed.from_int(1).child(1).splits(1)[0].hex

    def test_generator_exhaustion_propagates(self) -> None:
        """Exhausted filters abort the run."""
        impossible = integers().filter(lambda n: n > 1000)
        with pytest.raises(GeneratorExhaustedError):
            PropertyRunner().run(lambda x: True, [impossible], seed=1)

    def test_preflight_rejects_domain_before_any_trial(self) -> None:
        """Ungeneratable domains fail before the proposition is called."""
        calls: list[object] = []
        generator = functions(integers(), domain=functions(integers()))
        with pytest.raises(UngeneratableDomainError):
            PropertyRunner().run(lambda f: calls.append(f) is None, [generator], seed=1)
        assert calls == []

    def test_apply_time_rejection_propagates(self) -> None:
        """Applying a function to an undigestible argument is fatal, not inconclusive."""
        with pytest.raises(UngeneratableDomainError):
            PropertyRunner().run(lambda f: f.apply(object()) == 0, [functions(integers())], seed=1)

    def test_function_codomain_exception_wrapped(self) -> None:
        """A codomain generator raising inside apply() aborts the run."""
        broken = Gen(lambda seed, size: 1 // 0, "broken")
        with pytest.raises(GeneratorFailedError) as exc_info:
            PropertyRunner().run(lambda f: f.apply(1) == f.apply(1), [functions(broken)], seed=1)
        assert isinstance(exc_info.value.__cause__, ZeroDivisionError)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.GENERATOR_FAILED

    def test_intermittent_codomain_failure_not_hidden(self) -> None:
        """A codomain failing on some arguments only is still fatal."""
        flaky = integers().map(lambda n: 10 // (n % 3), label="flaky")
        with pytest.raises(GeneratorFailedError):
            PropertyRunner().run(
                lambda f, x: f.apply(x) == f.apply(x), [functions(flaky), integers()], seed=1
            )


class TestRunnerCancellation:
    """Cooperative cancellation."""

    def test_cancelled_before_start(self) -> None:
        """A pre-cancelled token runs no trials."""
        token = CancellationToken()
        token.cancel()
        result = PropertyRunner().run(lambda x: True, [integers()], seed=1, cancel=token)
        assert isinstance(result, Success)
        assert result.cancelled
        assert result.trials_run == 0

    def test_cancelled_during_run(self) -> None:
        """Cancellation is observed between trials."""
        token = CancellationToken()
        counter = itertools.count(1)

        def prop(x: int) -> bool:
            if next(counter) == 3:
                token.cancel()
            return True

        result = PropertyRunner().run(prop, [integers()], seed=1, cancel=token)
        assert isinstance(result, Success)
        assert result.cancelled
        assert result.trials_run == 3

    def test_cancelled_during_shrinking(self) -> None:
        """A failure found before cancellation keeps its original inputs."""
        token = CancellationToken()

        def prop(x: int) -> bool:
            if x != 0:
                token.cancel()
                return False
            return True

        result = PropertyRunner().run(prop, [integers()], seed=1, cancel=token)
        assert isinstance(result, Failure)
        assert result.cancelled
        assert result.shrink_steps == 0
        assert result.minimized.samples == result.original.samples

    def test_cancelled_between_batches(self) -> None:
        """Parallel runs observe cancellation between batches."""
        token = CancellationToken()
        token.cancel()
        runner = PropertyRunner(RunConfig(workers=4))
        result = runner.run(lambda x: True, [integers()], seed=1, cancel=token)
        assert isinstance(result, Success)
        assert result.cancelled
        assert result.trials_run == 0


class TestParallelDeterminism:
    """Results never depend on the worker count."""

    @pytest.mark.parametrize("workers", [2, 4, 7])
    def test_failure_identical_to_sequential(self, workers: int) -> None:
        """Parallel failures match the sequential failure exactly."""
        generators = [integers(), integers(), integers()]
        sequential = PropertyRunner().run(_associative_subtraction, generators, seed=7)
        parallel = PropertyRunner(RunConfig(workers=workers)).run(
            _associative_subtraction, generators, seed=7
        )
        assert parallel == sequential

    @pytest.mark.parametrize("workers", [2, 4])
    def test_success_identical_to_sequential(self, workers: int) -> None:
        """Parallel successes match including recorded errors."""
        prop = lambda x: 100 // x == 100 // x  # noqa: E731
        sequential = PropertyRunner().run(prop, [integers()], seed=9)
        parallel = PropertyRunner(RunConfig(workers=workers)).run(prop, [integers()], seed=9)
        assert parallel == sequential
