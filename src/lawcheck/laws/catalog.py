"""Catalog of named laws and the law-check entry points.

Each Law is generic over the structure's operations: it turns a binding
into a proposition and one generator per law variable. New structures
are checked by supplying a binding, never by editing the catalog.

Laws:
    monoid.associativity   combine(x, combine(y, z)) == combine(combine(x, y), z)
    monoid.left_identity   combine(identity, x) == x
    monoid.right_identity  combine(x, identity) == x
    functor.identity       fmap(x, id) == x
    functor.composition    fmap(x, g . f) == fmap(fmap(x, f), g)
    monad.left_identity    bind(unit(a), f) == f(a)
    monad.right_identity   bind(x, unit) == x
    monad.associativity    bind(bind(x, f), g) == bind(x, a -> bind(f(a), g))

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from lawcheck.core import Seed
from lawcheck.diagnostics import ErrorTemplate, LawBindingError
from lawcheck.generation import ValueGenerator, functions
from lawcheck.runtime import CancellationToken, PropertyRunner, Proposition, RunConfig, TestResult

from .structures import Binding, FunctorBinding, MonadBinding, MonoidBinding, StructureKind

__all__ = [
    "Law",
    "LawSuite",
    "check_law",
    "create_default_suite",
    "default_suite",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Law:
    """Named law over one structure kind.

    Attributes:
        name: Catalog name (kind.law)
        kind: Structure kind the law applies to
        equation: Human-readable statement
        variables: Proposition argument names, in order
        proposition: binding -> proposition over the variables
        generators: binding -> one generator per variable
    """

    name: str
    kind: StructureKind
    equation: str
    variables: tuple[str, ...]
    proposition: Callable[[Any], Proposition]
    generators: Callable[[Any], tuple[ValueGenerator[Any], ...]]


def _identity(value: object) -> object:
    return value


# ============================================================================
# MONOID LAWS
# ============================================================================


def _monoid_associativity(binding: MonoidBinding[Any]) -> Proposition:
    m = binding.structure

    def holds(x: Any, y: Any, z: Any) -> bool:
        return m.eq(m.combine(x, m.combine(y, z)), m.combine(m.combine(x, y), z))

    return holds


def _monoid_left_identity(binding: MonoidBinding[Any]) -> Proposition:
    m = binding.structure
    return lambda x: m.eq(m.combine(m.identity, x), x)


def _monoid_right_identity(binding: MonoidBinding[Any]) -> Proposition:
    m = binding.structure
    return lambda x: m.eq(m.combine(x, m.identity), x)


# ============================================================================
# FUNCTOR LAWS
# ============================================================================


def _functor_identity(binding: FunctorBinding) -> Proposition:
    fn = binding.structure
    return lambda x: fn.eq(fn.fmap(x, _identity), x)


def _functor_composition(binding: FunctorBinding) -> Proposition:
    fn = binding.structure

    def holds(x: Any, f: Any, g: Any) -> bool:
        composed = fn.fmap(x, lambda a: g.apply(f.apply(a)))
        chained = fn.fmap(fn.fmap(x, f.apply), g.apply)
        return fn.eq(composed, chained)

    return holds


def _functor_composition_generators(binding: FunctorBinding) -> tuple[ValueGenerator[Any], ...]:
    return (
        binding.containers,
        functions(binding.b_values, domain=binding.a_values, digest=binding.digest),
        functions(binding.c_values, domain=binding.b_values, digest=binding.digest),
    )


# ============================================================================
# MONAD LAWS
# ============================================================================


def _monad_left_identity(binding: MonadBinding) -> Proposition:
    m = binding.structure
    return lambda a, f: m.eq(m.bind(m.unit(a), f.apply), f.apply(a))


def _monad_right_identity(binding: MonadBinding) -> Proposition:
    m = binding.structure
    return lambda x: m.eq(m.bind(x, m.unit), x)


def _monad_associativity(binding: MonadBinding) -> Proposition:
    m = binding.structure

    def holds(x: Any, f: Any, g: Any) -> bool:
        left = m.bind(m.bind(x, f.apply), g.apply)
        right = m.bind(x, lambda a: m.bind(f.apply(a), g.apply))
        return m.eq(left, right)

    return holds


def _f_arrow(binding: MonadBinding) -> ValueGenerator[Any]:
    return functions(binding.f_results, domain=binding.values, digest=binding.digest)


def _g_arrow(binding: MonadBinding) -> ValueGenerator[Any]:
    return functions(binding.g_results, domain=binding.b_values, digest=binding.digest)


_BUILTIN_LAWS: tuple[Law, ...] = (
    Law(
        "monoid.associativity",
        StructureKind.MONOID,
        "combine(x, combine(y, z)) == combine(combine(x, y), z)",
        ("x", "y", "z"),
        _monoid_associativity,
        lambda b: (b.values, b.values, b.values),
    ),
    Law(
        "monoid.left_identity",
        StructureKind.MONOID,
        "combine(identity, x) == x",
        ("x",),
        _monoid_left_identity,
        lambda b: (b.values,),
    ),
    Law(
        "monoid.right_identity",
        StructureKind.MONOID,
        "combine(x, identity) == x",
        ("x",),
        _monoid_right_identity,
        lambda b: (b.values,),
    ),
    Law(
        "functor.identity",
        StructureKind.FUNCTOR,
        "fmap(x, id) == x",
        ("x",),
        _functor_identity,
        lambda b: (b.containers,),
    ),
    Law(
        "functor.composition",
        StructureKind.FUNCTOR,
        "fmap(x, g . f) == fmap(fmap(x, f), g)",
        ("x", "f", "g"),
        _functor_composition,
        _functor_composition_generators,
    ),
    Law(
        "monad.left_identity",
        StructureKind.MONAD,
        "bind(unit(a), f) == f(a)",
        ("a", "f"),
        _monad_left_identity,
        lambda b: (b.values, _f_arrow(b)),
    ),
    Law(
        "monad.right_identity",
        StructureKind.MONAD,
        "bind(x, unit) == x",
        ("x",),
        _monad_right_identity,
        lambda b: (b.containers,),
    ),
    Law(
        "monad.associativity",
        StructureKind.MONAD,
        "bind(bind(x, f), g) == bind(x, a -> bind(f(a), g))",
        ("x", "f", "g"),
        _monad_associativity,
        lambda b: (b.containers, _f_arrow(b), _g_arrow(b)),
    ),
)


class LawSuite:
    """Registry of named laws.

    Supports dict-like introspection:
        - get(name): Law by name
        - laws_for(kind): Laws applying to a structure kind
        - __iter__: Iterate over law names
        - __len__: Count registered laws
        - __contains__: Check if a law exists (supports 'in' operator)

    Example:
        >>> suite = create_default_suite()
        >>> "monoid.associativity" in suite
        True
        >>> result = suite.check("monoid.right_identity", MonoidBinding(addition, integers()))
        >>> result.passed
        True
    """

    __slots__ = ("_frozen", "_laws")

    def __init__(self, laws: Iterable[Law] = ()) -> None:
        """Initialize suite with laws (registered in order)."""
        self._laws: dict[str, Law] = {}
        self._frozen = False
        for law in laws:
            self.register(law)

    def register(self, law: Law, *, replace: bool = False) -> None:
        """Register a law.

        Raises:
            TypeError: If the suite is frozen
            LawBindingError: If the name is taken and replace is False
        """
        if self._frozen:
            msg = "Cannot register laws in a frozen LawSuite; use copy()"
            raise TypeError(msg)
        if law.name in self._laws and not replace:
            raise LawBindingError(ErrorTemplate.duplicate_law(law.name))
        self._laws[law.name] = law

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """True once freeze() has been called."""
        return self._frozen

    def copy(self) -> LawSuite:
        """Unfrozen copy sharing the Law objects."""
        return LawSuite(self._laws.values())

    def get(self, name: str) -> Law:
        """Law by name.

        Raises:
            LawBindingError: If no law has that name
        """
        try:
            return self._laws[name]
        except KeyError:
            raise LawBindingError(ErrorTemplate.unknown_law(name, tuple(self._laws))) from None

    def laws_for(self, kind: StructureKind) -> tuple[Law, ...]:
        """Laws applying to kind, in registration order."""
        return tuple(law for law in self._laws.values() if law.kind == kind)

    def check(
        self,
        name: str,
        binding: Binding,
        *,
        trial_budget: int | None = None,
        seed: Seed | int | str | None = None,
        config: RunConfig | None = None,
        cancel: CancellationToken | None = None,
    ) -> TestResult:
        """Check one law against a binding.

        Args:
            name: Law name
            binding: Structure operations plus generators
            trial_budget: Overrides the configured budget (default: 100)
            seed: Master seed; None draws process entropy
            config: Run configuration
            cancel: Cooperative cancellation token

        Raises:
            LawBindingError: Unknown law or binding of the wrong kind
            LawCheckError: On generation errors
        """
        law = self.get(name)
        if binding.kind != law.kind:
            raise LawBindingError(
                ErrorTemplate.binding_mismatch(law.name, law.kind.value, binding.kind.value)
            )
        runner = PropertyRunner(config)
        return runner.run(
            law.proposition(binding),
            law.generators(binding),
            seed=seed,
            trial_budget=trial_budget,
            names=law.variables,
            label=law.name,
            cancel=cancel,
        )

    def check_all(
        self,
        binding: Binding,
        *,
        trial_budget: int | None = None,
        seed: Seed | int | str | None = None,
        config: RunConfig | None = None,
        cancel: CancellationToken | None = None,
    ) -> dict[str, TestResult]:
        """Check every law of the binding's kind with one master seed.

        Returns:
            Mapping of law name to result, in registration order
        """
        master = Seed.coerce(seed)
        results: dict[str, TestResult] = {}
        for law in self.laws_for(binding.kind):
            results[law.name] = self.check(
                law.name,
                binding,
                trial_budget=trial_budget,
                seed=master,
                config=config,
                cancel=cancel,
            )
        failed = [name for name, result in results.items() if not result.passed]
        logger.info(
            "%s laws: %d checked, %d not passed%s",
            binding.kind.value,
            len(results),
            len(failed),
            f" ({', '.join(failed)})" if failed else "",
        )
        return results

    def __contains__(self, name: object) -> bool:
        """Check if a law is registered."""
        return name in self._laws

    def __iter__(self) -> Iterator[str]:
        """Iterate over law names."""
        return iter(self._laws)

    def __len__(self) -> int:
        """Number of registered laws."""
        return len(self._laws)

    def __repr__(self) -> str:
        """Return name-listing representation."""
        return f"LawSuite({list(self._laws)!r})"


def create_default_suite() -> LawSuite:
    """Create a new, unfrozen LawSuite holding the eight built-in laws."""
    return LawSuite(_BUILTIN_LAWS)


_SHARED_SUITE: LawSuite | None = None


def default_suite() -> LawSuite:
    """Shared, frozen LawSuite with the built-in laws.

    Raises:
        TypeError: If you attempt to call register() on the returned suite.
    """
    global _SHARED_SUITE  # noqa: PLW0603
    if _SHARED_SUITE is None:
        _SHARED_SUITE = create_default_suite()
        _SHARED_SUITE.freeze()
    return _SHARED_SUITE


def check_law(
    name: str,
    binding: Binding,
    *,
    trial_budget: int | None = None,
    seed: Seed | int | str | None = None,
    config: RunConfig | None = None,
    cancel: CancellationToken | None = None,
) -> TestResult:
    """Check a built-in law against a binding.

    Example:
        >>> addition = MonoidBinding(Monoid(operator.add, 0), integers())
        >>> check_law("monoid.right_identity", addition, seed=42).trials_run
        100
    """
    return default_suite().check(
        name, binding, trial_budget=trial_budget, seed=seed, config=config, cancel=cancel
    )
