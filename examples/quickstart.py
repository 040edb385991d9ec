"""Quickstart example for lawcheck.

This example checks the monoid, functor and monad laws of a few small
structures, prints the run reports and replays a reported failure.

Note: Examples pass fixed seeds so the output is reproducible. In a test
suite, omit seed= to sample fresh inputs on every run; every report prints
the seed needed to reproduce it.
"""

import logging
import operator
from dataclasses import dataclass

from lawcheck import (
    CancellationToken,
    Failure,
    Functor,
    FunctorBinding,
    Monad,
    MonadBinding,
    Monoid,
    MonoidBinding,
    PropertyRunner,
    RunConfig,
    check_law,
    default_suite,
    format_report,
)
from lawcheck.diagnostics import OutputFormat
from lawcheck.generation import integers, lists, optionals, text

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

# Example 1: A lawful monoid
print("=" * 50)
print("Example 1: Integer Addition")
print("=" * 50)

addition = MonoidBinding(Monoid(operator.add, 0), integers())
for result in default_suite().check_all(addition, seed=42).values():
    print(format_report(result, OutputFormat.SIMPLE))
# Output: PASS monoid.associativity: 100 trial(s)  (and so on)

# Example 2: A broken monoid and its minimized counterexample
print("\n" + "=" * 50)
print("Example 2: Subtraction Is Not a Monoid")
print("=" * 50)

subtraction = MonoidBinding(Monoid(operator.sub, 0), integers())
failure = check_law("monoid.associativity", subtraction, seed=42)
print(format_report(failure))
# Output: FAIL monoid.associativity: falsified after ... trial(s)
#           minimized (...):
#             x = 0 ...
#             y = 0 ...
#             z = 1 ...

# Example 3: Functor laws over arbitrary functions
print("\n" + "=" * 50)
print("Example 3: The List Functor")
print("=" * 50)

list_functor = FunctorBinding(
    Functor(lambda xs, f: [f(x) for x in xs]),
    containers=lists(integers()),
    b_values=text(),
    c_values=integers(),
    a_values=integers(),
)
print(format_report(check_law("functor.composition", list_functor, seed=7)))


# Example 4: Monad laws with a custom container
print("\n" + "=" * 50)
print("Example 4: An Optional Monad")
print("=" * 50)


@dataclass(frozen=True)
class Some:
    value: object


def some_or_none(generator):
    return optionals(generator).map(lambda v: None if v is None else Some(v), label="maybe")


maybe = MonadBinding(
    Monad(bind=lambda x, f: None if x is None else f(x.value), unit=Some),
    values=integers(),
    containers=some_or_none(integers()),
    f_results=some_or_none(text()),
    g_results=some_or_none(integers()),
    b_values=text(),
)
for name, result in default_suite().check_all(maybe, seed=3).items():
    print(f"{name}: {'ok' if result.passed else 'VIOLATED'}")

# Example 5: Replaying a failure from its report
print("\n" + "=" * 50)
print("Example 5: Replay")
print("=" * 50)

runner = PropertyRunner(RunConfig(trial_budget=200, workers=4))
generators = [lists(integers())]
result = runner.run(lambda xs: sorted(xs) == xs, generators, seed=1, names=["xs"])
print(format_report(result))
if isinstance(result, Failure):
    trial = runner.replay(
        lambda xs: sorted(xs) == xs,
        generators,
        result.original.seed,
        result.original.size,
        names=["xs"],
    )
    print(f"Replayed trial: {trial.samples[0].rendered} -> {trial.outcome}")

# Example 6: Cancellation
print("\n" + "=" * 50)
print("Example 6: Cancellation")
print("=" * 50)

token = CancellationToken()
token.cancel()
print(format_report(check_law("monoid.associativity", addition, seed=1, cancel=token)))
# Output: PASS monoid.associativity: 0 trial(s) passed (cancelled)
