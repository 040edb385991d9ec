"""Capability bundles and generator bindings for law checking.

A structure under test is described by an explicit record of its
operations plus an equality capability, instead of implicit instance
resolution. A binding pairs that record with the generators a law needs
for its variables.

Bundles:
    Monoid(combine, identity)   combine-with-identity structure
    Functor(fmap)               mapping-preserving structure
    Monad(bind, unit)           sequencing structure

Container values are passed to the operations as-is; the library never
inspects them. Functions handed to fmap and bind are plain callables
(bound FunctionValue.apply methods or compositions of them).

Python 3.13+.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar

from lawcheck.core import stable_digest
from lawcheck.generation import ValueGenerator
from lawcheck.generation.function_values import Digest

__all__ = [
    "Binding",
    "Functor",
    "FunctorBinding",
    "Monad",
    "MonadBinding",
    "Monoid",
    "MonoidBinding",
    "StructureKind",
]

type Equality = Callable[[Any, Any], bool]


class StructureKind(StrEnum):
    """Abstraction kinds with a law catalog."""

    MONOID = "monoid"
    FUNCTOR = "functor"
    MONAD = "monad"


@dataclass(frozen=True, slots=True)
class Monoid[T]:
    """Combine-with-identity structure.

    Attributes:
        combine: Associative binary operation
        identity: Two-sided identity element of combine
        eq: Equality on T (default: ==)

    Example:
        >>> addition = Monoid(operator.add, 0)
        >>> concatenation = Monoid(operator.add, [], eq=list.__eq__)
    """

    combine: Callable[[T, T], T]
    identity: T
    eq: Equality = operator.eq


@dataclass(frozen=True, slots=True)
class Functor:
    """Mapping-preserving structure.

    Attributes:
        fmap: (container, function) -> container
        eq: Equality on containers (default: ==)
    """

    fmap: Callable[[Any, Callable[[Any], Any]], Any]
    eq: Equality = operator.eq


@dataclass(frozen=True, slots=True)
class Monad:
    """Sequencing structure.

    Attributes:
        bind: (container, function returning a container) -> container
        unit: Injection of a plain value into a container
        eq: Equality on containers (default: ==)
    """

    bind: Callable[[Any, Callable[[Any], Any]], Any]
    unit: Callable[[Any], Any]
    eq: Equality = operator.eq


@dataclass(frozen=True, slots=True)
class MonoidBinding[T]:
    """Monoid plus a generator of its elements.

    Attributes:
        structure: Operations under test
        values: Generator of T
    """

    structure: Monoid[T]
    values: ValueGenerator[T]

    kind: ClassVar[StructureKind] = StructureKind.MONOID


@dataclass(frozen=True, slots=True)
class FunctorBinding:
    """Functor plus generators for x: F[A], f: A -> B and g: B -> C.

    Attributes:
        structure: Operations under test
        containers: Generator of F[A]
        b_values: Generator of B (codomain of f, domain of g)
        c_values: Generator of C (codomain of g)
        a_values: Optional generator of A, probed to validate f's domain
        digest: Stable digest for function arguments
    """

    structure: Functor
    containers: ValueGenerator[Any]
    b_values: ValueGenerator[Any]
    c_values: ValueGenerator[Any]
    a_values: ValueGenerator[Any] | None = None
    digest: Digest = stable_digest

    kind: ClassVar[StructureKind] = StructureKind.FUNCTOR


@dataclass(frozen=True, slots=True)
class MonadBinding:
    """Monad plus generators for a: A, x: M[A], f: A -> M[B], g: B -> M[C].

    Attributes:
        structure: Operations under test
        values: Generator of A
        containers: Generator of M[A]
        f_results: Generator of M[B] (codomain of f)
        g_results: Generator of M[C] (codomain of g)
        b_values: Optional generator of B, probed to validate g's domain
        digest: Stable digest for function arguments
    """

    structure: Monad
    values: ValueGenerator[Any]
    containers: ValueGenerator[Any]
    f_results: ValueGenerator[Any]
    g_results: ValueGenerator[Any]
    b_values: ValueGenerator[Any] | None = None
    digest: Digest = stable_digest

    kind: ClassVar[StructureKind] = StructureKind.MONAD


type Binding = MonoidBinding[Any] | FunctorBinding | MonadBinding
