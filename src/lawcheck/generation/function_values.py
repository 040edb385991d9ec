"""Arbitrary function values between two types.

A FunctionValue behaves like an unstructured mapping A -> B without ever
materializing a table. Applying it to an argument derives a child seed
from the function's own seed and a stable digest of the argument, then
asks the codomain generator for a value at the function's size hint:

    apply(fv, a) = codomain.generate(fv.seed.derive(digest(a)), fv.size)

Consequences:
    - Determinism: the same argument always re-derives the same child
      seed, in any order relative to other applications.
    - Independence: distinct arguments derive unrelated seeds, so the
      function is neither the identity nor monotone.
    - Constant memory: nothing is retained between applications.

Function values cannot be digested themselves (their seed is an
implementation detail), so a domain containing functions is rejected with
UngeneratableDomainError.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from lawcheck.constants import DOMAIN_PROBE_COUNT, FUNCTION_PLACEHOLDER
from lawcheck.core import OpaqueValue, Seed, stable_digest
from lawcheck.diagnostics import ErrorTemplate, GeneratorFailedError, LawCheckError

from .generators import ValueGenerator

__all__ = ["FunctionGenerator", "FunctionValue", "functions"]

logger = logging.getLogger(__name__)

type Digest = Callable[[object], bytes]


@dataclass(frozen=True, slots=True, eq=False)
class FunctionValue[A, B](OpaqueValue):
    """Opaque deterministic mapping A -> B.

    Equality between two instances is identity; only application is
    deterministic.

    Attributes:
        seed: Seed the mapping is keyed on
        size: Size hint passed to the codomain generator
        codomain: Generator of results
        digest: Stable digest of arguments

    Example:
        >>> fv = functions(integers()).generate(Seed.from_int(7), 10)
        >>> fv.apply("a") == fv.apply("a")
        True
    """

    seed: Seed
    size: int
    codomain: ValueGenerator[B]
    digest: Digest = stable_digest

    def apply(self, argument: A) -> B:
        """Apply the function.

        Raises:
            UngeneratableDomainError: If argument has no stable digest
            GeneratorFailedError: If the codomain generator raises anything
                other than a LawCheckError
        """
        child = self.seed.derive(self.digest(argument))
        try:
            return self.codomain.generate(child, self.size)
        except LawCheckError:
            raise
        except Exception as e:
            raise GeneratorFailedError(
                ErrorTemplate.generator_failed(repr(self.codomain), e, child.hex, self.size)
            ) from e

    def resized(self, size: int) -> FunctionValue[A, B]:
        """Same mapping seed at another size hint."""
        return replace(self, size=size)

    def __repr__(self) -> str:
        """Return opaque placeholder; internal state is not meaningful."""
        return FUNCTION_PLACEHOLDER.format(seed=self.seed.hex[:8], size=self.size)


@dataclass(frozen=True, slots=True)
class FunctionGenerator[A, B]:
    """ValueGenerator of FunctionValue[A, B].

    Attributes:
        codomain: Generator of function results
        domain: Optional generator of arguments, probed by preflight()
        digest: Stable digest of arguments (default: stable_digest)
    """

    codomain: ValueGenerator[B]
    domain: ValueGenerator[A] | None = None
    digest: Digest = stable_digest

    def generate(self, seed: Seed, size: int) -> FunctionValue[A, B]:
        """Generate a function value keyed on seed."""
        if size < 0:
            msg = f"size must be >= 0, got {size}"
            raise ValueError(msg)
        return FunctionValue(seed, size, self.codomain, self.digest)

    def render(self, value: FunctionValue[A, B]) -> str:
        """Render the opaque placeholder."""
        return repr(value)

    def preflight(self, seed: Seed, max_size: int) -> None:
        """Verify that sample domain values can be digested.

        Called by the runner before any trial so that an ungeneratable
        domain fails fast instead of inside the first evaluation.

        Raises:
            UngeneratableDomainError: If a probed domain value has no
                stable digest
        """
        if self.domain is None:
            return
        sizes = sorted({0, max_size // 2, max_size})
        for index, probe_seed in enumerate(seed.splits(DOMAIN_PROBE_COUNT)):
            value = self.domain.generate(probe_seed, sizes[index % len(sizes)])
            self.digest(value)
        logger.debug("Domain preflight passed for %d probe(s)", DOMAIN_PROBE_COUNT)


def functions[A, B](
    codomain: ValueGenerator[B],
    *,
    domain: ValueGenerator[A] | None = None,
    digest: Digest = stable_digest,
) -> FunctionGenerator[A, B]:
    """Generator of arbitrary functions into codomain.

    Args:
        codomain: Generator of function results
        domain: Generator of arguments; enables the preflight digest check
        digest: Custom stable digest for domains stable_digest cannot encode

    Returns:
        FunctionGenerator
    """
    return FunctionGenerator(codomain, domain, digest)
