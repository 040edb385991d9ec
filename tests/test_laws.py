"""Tests for lawcheck.laws: the law catalog and capability bundles.

Covers:
- Correct reference structures pass every law of their kind
- Broken reference structures fail exactly the laws they violate
- Minimized counterexamples of the end-to-end scenario
- Registry behaviour: lookup, freezing, copying, duplicates
- Binding errors: unknown laws and kind mismatches

Python 3.13+.
"""

from __future__ import annotations

import operator
from collections.abc import Callable

import pytest

from lawcheck import Seed, check_law, create_default_suite, default_suite
from lawcheck.diagnostics import DiagnosticCode, LawBindingError, UngeneratableDomainError
from lawcheck.generation import functions, integers
from lawcheck.laws import (
    Binding,
    Law,
    LawSuite,
    MonadBinding,
    Monoid,
    MonoidBinding,
    StructureKind,
)
from lawcheck.runtime import Failure, RunConfig, Success
from tests.helpers.structures import (
    FORGETFUL_MAYBE_MONAD,
    REVERSING_LIST_FUNCTOR,
    Just,
    broken_subtraction_binding,
    int_addition_binding,
    list_concatenation_binding,
    list_functor_binding,
    maybe_functor_binding,
    maybe_monad_binding,
    maybes,
)

_ALL_LAWS = (
    "monoid.associativity",
    "monoid.left_identity",
    "monoid.right_identity",
    "functor.identity",
    "functor.composition",
    "monad.left_identity",
    "monad.right_identity",
    "monad.associativity",
)


class TestReferenceCorrectness:
    """Lawful structures pass, with every trial evaluated."""

    @pytest.mark.parametrize(
        "binding_factory",
        [int_addition_binding, list_concatenation_binding, maybe_functor_binding,
         list_functor_binding, maybe_monad_binding],
        ids=lambda factory: factory.__name__,
    )
    def test_lawful_structures_pass_every_law(
        self, binding_factory: Callable[[], Binding]
    ) -> None:
        """Every law of the binding's kind holds."""
        results = default_suite().check_all(binding_factory(), seed=42)
        assert results
        for name, result in results.items():
            assert isinstance(result, Success), name
            assert result.trials_run == 100
            assert not result.inconclusive

    def test_integer_addition_associativity(self) -> None:
        """The canonical lawful example."""
        result = check_law("monoid.associativity", int_addition_binding(), seed=1)
        assert result.passed
        assert result.trials_run == 100

    def test_custom_trial_budget(self) -> None:
        """trial_budget is an explicit, overridable parameter."""
        result = check_law("monoid.left_identity", int_addition_binding(), trial_budget=17, seed=1)
        assert result.trials_run == 17


class TestBrokenStructures:
    """Unlawful structures fail with small counterexamples."""

    def test_subtraction_associativity_minimized(self) -> None:
        """x - (y - z) != (x - y) - z reduces to x = y = 0, small z."""
        result = check_law("monoid.associativity", broken_subtraction_binding(), seed=42)
        assert isinstance(result, Failure)
        values = dict(zip(("x", "y", "z"), result.minimized.values, strict=True))
        assert values["x"] == 0
        assert values["y"] == 0
        assert values["z"] != 0
        assert abs(values["z"]) <= 2
        assert [s.name for s in result.minimized.samples] == ["x", "y", "z"]
        assert result.minimized.size <= result.original.size

    def test_subtraction_law_by_law(self) -> None:
        """Subtraction has a right identity but no left identity."""
        results = default_suite().check_all(broken_subtraction_binding(), seed=42)
        assert not results["monoid.associativity"].passed
        assert not results["monoid.left_identity"].passed
        assert results["monoid.right_identity"].passed

    def test_left_identity_counterexample_is_minimal(self) -> None:
        """0 - x != x reduces to |x| = 1 with overwhelming probability."""
        result = check_law("monoid.left_identity", broken_subtraction_binding(), seed=42)
        assert isinstance(result, Failure)
        (x,) = result.minimized.values
        assert x != 0
        assert abs(x) <= 2

    def test_reversing_functor_breaks_identity(self) -> None:
        """Reversing a list is not fmap(id)."""
        result = check_law("functor.identity", list_functor_binding(REVERSING_LIST_FUNCTOR), seed=3)
        assert isinstance(result, Failure)
        (xs,) = result.minimized.values
        assert len(xs) >= 2
        assert xs != xs[::-1]
        assert result.minimized.size <= result.original.size

    def test_forgetful_monad_breaks_left_identity_only(self) -> None:
        """bind ignoring its function still has a right identity and associativity."""
        results = default_suite().check_all(maybe_monad_binding(FORGETFUL_MAYBE_MONAD), seed=5)
        assert not results["monad.left_identity"].passed
        assert results["monad.right_identity"].passed
        assert results["monad.associativity"].passed

    def test_failure_renders_function_placeholder(self) -> None:
        """Function inputs appear as opaque placeholders in counterexamples."""
        result = check_law(
            "monad.left_identity", maybe_monad_binding(FORGETFUL_MAYBE_MONAD), seed=5
        )
        assert isinstance(result, Failure)
        f_sample = result.minimized.samples[1]
        assert f_sample.name == "f"
        assert f_sample.rendered.startswith("<function seed=")

    def test_reproducible_for_fixed_seed(self) -> None:
        """Same seed, same result."""
        first = check_law("monoid.associativity", broken_subtraction_binding(), seed=99)
        second = check_law("monoid.associativity", broken_subtraction_binding(), seed=99)
        assert first == second

    def test_subtraction_associativity_fails_across_seeds(self) -> None:
        """Subtraction is falsified within the default budget on every seed tried."""
        binding = broken_subtraction_binding()
        config = RunConfig(max_shrink_attempts=0)
        not_falsified = [
            seed
            for seed in range(300)
            if not isinstance(
                check_law("monoid.associativity", binding, seed=seed, config=config), Failure
            )
        ]
        assert not_falsified == []


class TestBindingErrors:
    """Misuse of the catalog raises LawBindingError."""

    def test_unknown_law(self) -> None:
        """Unknown names list the available laws."""
        with pytest.raises(LawBindingError) as exc_info:
            check_law("monoid.commutativity", int_addition_binding())
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code == DiagnosticCode.UNKNOWN_LAW
        assert "monoid.associativity" in (diagnostic.hint or "")

    def test_kind_mismatch(self) -> None:
        """A monoid binding cannot check a functor law."""
        with pytest.raises(LawBindingError) as exc_info:
            check_law("functor.identity", int_addition_binding())
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.BINDING_MISMATCH

    def test_function_valued_domain_rejected(self) -> None:
        """A monad over function values cannot have f: A -> M[B] generated."""
        binding = MonadBinding(
            FORGETFUL_MAYBE_MONAD,
            values=functions(integers()),
            containers=maybes(integers()),
            f_results=maybes(integers()),
            g_results=maybes(integers()),
        )
        with pytest.raises(UngeneratableDomainError):
            check_law("monad.left_identity", binding, seed=1)


def _commutativity(binding: MonoidBinding[int]) -> Callable[[int, int], bool]:
    m = binding.structure
    return lambda x, y: m.eq(m.combine(x, y), m.combine(y, x))


class TestLawSuiteRegistry:
    """Registry semantics."""

    def test_default_suite_contents(self) -> None:
        """The shared suite holds the eight built-in laws in order."""
        suite = default_suite()
        assert tuple(suite) == _ALL_LAWS
        assert len(suite) == 8
        assert all(name in suite for name in _ALL_LAWS)
        assert "monoid.commutativity" not in suite

    def test_default_suite_is_shared_and_frozen(self) -> None:
        """default_suite() is a frozen singleton."""
        assert default_suite() is default_suite()
        assert default_suite().frozen
        with pytest.raises(TypeError, match="frozen"):
            default_suite().register(default_suite().get("monoid.associativity"))

    def test_laws_for_kind(self) -> None:
        """Laws are grouped by structure kind."""
        suite = create_default_suite()
        assert [law.name for law in suite.laws_for(StructureKind.FUNCTOR)] == [
            "functor.identity",
            "functor.composition",
        ]
        assert len(suite.laws_for(StructureKind.MONAD)) == 3

    def test_register_custom_law(self) -> None:
        """New laws are added by registration, not by editing the catalog."""
        commutativity = Law(
            "monoid.commutativity",
            StructureKind.MONOID,
            "combine(x, y) == combine(y, x)",
            ("x", "y"),
            _commutativity,
            lambda b: (b.values, b.values),
        )
        suite = create_default_suite()
        suite.register(commutativity)
        assert suite.check("monoid.commutativity", int_addition_binding(), seed=1).passed
        assert not suite.check(
            "monoid.commutativity", broken_subtraction_binding(), seed=1
        ).passed
        assert "monoid.commutativity" in suite.check_all(int_addition_binding(), seed=1)

    def test_duplicate_registration(self) -> None:
        """Names are unique unless replace=True."""
        suite = create_default_suite()
        law = suite.get("monoid.associativity")
        with pytest.raises(LawBindingError) as exc_info:
            suite.register(law)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DUPLICATE_LAW
        suite.register(law, replace=True)
        assert len(suite) == 8

    def test_copy_is_unfrozen(self) -> None:
        """copy() of a frozen suite accepts registrations."""
        copied = default_suite().copy()
        assert not copied.frozen
        assert tuple(copied) == tuple(default_suite())

    def test_repr_lists_names(self) -> None:
        """repr shows registered names."""
        assert repr(LawSuite()) == "LawSuite([])"

    def test_check_all_logs_summary(self, lawcheck_debug_logs: pytest.LogCaptureFixture) -> None:
        """check_all() logs which laws did not pass."""
        default_suite().check_all(broken_subtraction_binding(), seed=42, trial_budget=50)
        assert "monoid laws: 3 checked, 2 not passed" in lawcheck_debug_logs.text


class TestCapabilityBundles:
    """Equality capabilities are honoured."""

    def test_custom_equality(self) -> None:
        """A modular equality makes addition mod 3 lawful with a non-zero identity."""
        modular = Monoid(operator.add, 3, eq=lambda a, b: a % 3 == b % 3)
        result = check_law("monoid.left_identity", MonoidBinding(modular, integers()), seed=1)
        assert result.passed

    def test_just_values_digest_structurally(self) -> None:
        """Container values from the reference structures are valid function arguments."""
        f = functions(integers()).generate(Seed.from_int(1), 10)
        assert f.apply(Just(3)) == f.apply(Just(3))
