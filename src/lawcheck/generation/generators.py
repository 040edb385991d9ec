"""Value generators: the consumed generation interface plus thin glue.

A ValueGenerator produces an arbitrary value of one type from a Seed and a
size hint. Generation is a pure function of (seed, size): the same pair
always yields an equal value.

Size semantics of the bundled generators:
    integers:     magnitude <= size (clamped to explicit bounds)
    booleans:     False at size 0
    sampled_from: picks among the first size + 1 elements
    text, lists:  length <= size (never below min_size)
    optionals:    None at size 0, None becomes rarer as size grows
    one_of:       picks among the first size + 1 alternatives

Composite generators consume one split of the seed per sub-value so that
sibling values are independent. Constraints that cannot hold at a small
size (a non-empty list at size 0) substitute the minimal valid value.

Python 3.13+.
"""

from __future__ import annotations

import string
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from lawcheck.constants import MAX_FILTER_ATTEMPTS
from lawcheck.core import Seed
from lawcheck.diagnostics import ErrorTemplate, GeneratorExhaustedError

__all__ = [
    "Gen",
    "ValueGenerator",
    "booleans",
    "integers",
    "just",
    "lists",
    "one_of",
    "optionals",
    "sampled_from",
    "text",
    "tuples",
]

_DEFAULT_ALPHABET: str = string.ascii_letters + string.digits


class ValueGenerator[T](Protocol):
    """Protocol for generators consumed by the runner.

    Implementations must be pure and total within their size bound.
    """

    def generate(self, seed: Seed, size: int) -> T:
        ...  # pragma: no cover  # Protocol stub - not executable

    def render(self, value: T) -> str:
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class Gen[T]:
    """Generator built from a sampling function.

    Attributes:
        sample: Pure function (seed, size) -> value
        label: Short name used in diagnostics
        renderer: Textual rendering for counterexample reports

    Example:
        >>> small = integers(min_value=0).map(lambda n: n * 2, label="evens")
        >>> small.generate(Seed.from_int(1), 10) % 2
        0
    """

    sample: Callable[[Seed, int], T]
    label: str = "gen"
    renderer: Callable[[T], str] = repr

    def generate(self, seed: Seed, size: int) -> T:
        """Generate one value.

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            msg = f"size must be >= 0, got {size}"
            raise ValueError(msg)
        return self.sample(seed, size)

    def render(self, value: T) -> str:
        """Render a generated value for reports."""
        return self.renderer(value)

    def map[U](self, fn: Callable[[T], U], *, label: str | None = None) -> Gen[U]:
        """Generator of fn applied to this generator's values."""

        def sample(seed: Seed, size: int) -> U:
            return fn(self.generate(seed, size))

        return Gen(sample, label or f"{self.label}.map")

    def filter(
        self,
        predicate: Callable[[T], bool],
        *,
        max_attempts: int = MAX_FILTER_ATTEMPTS,
        label: str | None = None,
    ) -> Gen[T]:
        """Generator of values satisfying predicate.

        Candidates come from the request seed, then from its children.

        Raises:
            GeneratorExhaustedError: At generation time, if no candidate
                out of max_attempts satisfies predicate
        """
        name = label or f"{self.label}.filter"

        def sample(seed: Seed, size: int) -> T:
            for attempt in range(max_attempts):
                candidate_seed = seed if attempt == 0 else seed.child(attempt)
                value = self.generate(candidate_seed, size)
                if predicate(value):
                    return value
            raise GeneratorExhaustedError(
                ErrorTemplate.generator_exhausted(name, max_attempts, seed.hex, size)
            )

        return Gen(sample, name, self.renderer)

    def __repr__(self) -> str:
        """Return label-based representation."""
        return f"Gen({self.label})"


def integers(min_value: int | None = None, max_value: int | None = None) -> Gen[int]:
    """Integers with magnitude bounded by the size hint.

    When the bounds exclude every value of magnitude <= size, the valid
    value closest to zero is produced.

    Raises:
        ValueError: If min_value > max_value
    """
    if min_value is not None and max_value is not None and min_value > max_value:
        msg = f"min_value ({min_value}) must be <= max_value ({max_value})"
        raise ValueError(msg)

    def sample(seed: Seed, size: int) -> int:
        lo, hi = -size, size
        if min_value is not None:
            lo = max(lo, min_value)
        if max_value is not None:
            hi = min(hi, max_value)
        if lo > hi:
            # Bounds lie entirely on one side of [-size, size].
            return min_value if min_value is not None and min_value > 0 else hi
        return seed.rng().randint(lo, hi)

    return Gen(sample, "integers")


def booleans() -> Gen[bool]:
    """Booleans; False is the simplest value."""

    def sample(seed: Seed, size: int) -> bool:
        return size > 0 and seed.rng().random() < 0.5

    return Gen(sample, "booleans")


def just[T](value: T) -> Gen[T]:
    """Constant generator."""
    return Gen(lambda _seed, _size: value, f"just({value!r})")


def sampled_from[T](elements: Sequence[T]) -> Gen[T]:
    """Elements of a sequence; earlier elements are simpler.

    Raises:
        GeneratorExhaustedError: If elements is empty
    """
    options = tuple(elements)
    if not options:
        raise GeneratorExhaustedError(ErrorTemplate.empty_choice("sampled_from"))

    def sample(seed: Seed, size: int) -> T:
        reachable = min(len(options), size + 1)
        return options[seed.rng().randrange(reachable)]

    return Gen(sample, "sampled_from")


def text(alphabet: str = _DEFAULT_ALPHABET, *, min_size: int = 0) -> Gen[str]:
    """Strings over alphabet with length <= max(size, min_size).

    Raises:
        GeneratorExhaustedError: If alphabet is empty and min_size > 0
    """
    if not alphabet and min_size > 0:
        raise GeneratorExhaustedError(ErrorTemplate.empty_choice("text"))

    def sample(seed: Seed, size: int) -> str:
        if not alphabet:
            return ""
        rng = seed.rng()
        length = rng.randint(min_size, max(min_size, size))
        return "".join(rng.choice(alphabet) for _ in range(length))

    return Gen(sample, "text")


def optionals[T](inner: ValueGenerator[T]) -> Gen[T | None]:
    """None or a value of inner; None at size 0."""

    def sample(seed: Seed, size: int) -> T | None:
        choice_seed, value_seed = seed.split()
        if size == 0 or choice_seed.rng().random() < max(0.1, 1 / (size + 1)):
            return None
        return inner.generate(value_seed, size)

    def render(value: T | None) -> str:
        return "None" if value is None else inner.render(value)

    return Gen(sample, "optionals", render)


def lists[T](
    elements: ValueGenerator[T], *, min_size: int = 0, max_size: int | None = None
) -> Gen[list[T]]:
    """Lists of elements with length <= size, clamped to [min_size, max_size].

    Raises:
        ValueError: If min_size is negative or exceeds max_size
    """
    if min_size < 0:
        msg = f"min_size must be >= 0, got {min_size}"
        raise ValueError(msg)
    if max_size is not None and max_size < min_size:
        msg = f"max_size ({max_size}) must be >= min_size ({min_size})"
        raise ValueError(msg)

    def sample(seed: Seed, size: int) -> list[T]:
        length_seed, elements_seed = seed.split()
        upper = size if max_size is None else min(size, max_size)
        length = length_seed.rng().randint(min_size, max(min_size, upper))
        return [elements.generate(s, size) for s in elements_seed.splits(length)]

    def render(value: list[T]) -> str:
        return "[" + ", ".join(elements.render(v) for v in value) + "]"

    return Gen(sample, "lists", render)


def tuples(*components: ValueGenerator[object]) -> Gen[tuple[object, ...]]:
    """Fixed-length tuples, one independent seed per component."""

    def sample(seed: Seed, size: int) -> tuple[object, ...]:
        seeds = seed.splits(len(components))
        return tuple(g.generate(s, size) for g, s in zip(components, seeds, strict=True))

    def render(value: tuple[object, ...]) -> str:
        inner = ", ".join(g.render(v) for g, v in zip(components, value, strict=True))
        return f"({inner},)" if len(value) == 1 else f"({inner})"

    return Gen(sample, "tuples", render)


def one_of[T](*alternatives: ValueGenerator[T]) -> Gen[T]:
    """Value from one alternative; earlier alternatives are simpler.

    Raises:
        GeneratorExhaustedError: If no alternative is given
    """
    if not alternatives:
        raise GeneratorExhaustedError(ErrorTemplate.empty_choice("one_of"))

    def sample(seed: Seed, size: int) -> T:
        choice_seed, value_seed = seed.split()
        reachable = min(len(alternatives), size + 1)
        return alternatives[choice_seed.rng().randrange(reachable)].generate(value_seed, size)

    # The producing alternative is unknown once generated.
    return Gen(sample, "one_of")
