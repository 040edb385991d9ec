"""lawcheck - randomized law checking for algebraic structures.

Checks, by sampling rather than proof, that a concrete implementation of a
monoid, functor or monad satisfies its defining equations. Structures are
described by explicit capability bundles; laws quantified over functions
are instantiated with deterministic, reproducible arbitrary functions;
failing inputs are shrunk to a minimal counterexample.

Public API:
    check_law - Check a built-in law against a binding
    LawSuite - Registry of named laws (default_suite, create_default_suite)
    Monoid, Functor, Monad - Capability bundles
    MonoidBinding, FunctorBinding, MonadBinding - Bundles plus generators
    PropertyRunner - Trial loop and shrinking for arbitrary propositions
    RunConfig - Trial budget, size schedule and shrink bounds
    Seed - Splittable, reproducible pseudorandom seed
    functions - Generator of arbitrary function values
    format_report - Human-readable run report

Exceptions:
    LawCheckError - Base exception class
    UngeneratableDomainError - Function domain without a stable digest
    GeneratorExhaustedError - Generator constraints unsatisfiable
    LawBindingError - Unknown law or mismatched binding

Submodules:
    lawcheck.generation - Value generators and function values
    lawcheck.runtime - Runner, shrinker, results and reports
    lawcheck.laws - Law catalog and capability bundles
    lawcheck.diagnostics - Error types and diagnostic formatting
"""

from .core import Seed
from .diagnostics import (
    GeneratorExhaustedError,
    LawBindingError,
    LawCheckError,
    UngeneratableDomainError,
)
from .generation import FunctionValue, functions
from .laws import (
    Functor,
    FunctorBinding,
    LawSuite,
    Monad,
    MonadBinding,
    Monoid,
    MonoidBinding,
    check_law,
    create_default_suite,
    default_suite,
)
from .runtime import (
    CancellationToken,
    Failure,
    Inconclusive,
    PropertyRunner,
    RunConfig,
    Success,
    TestResult,
    format_report,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("lawcheck")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CancellationToken",
    "Failure",
    "FunctionValue",
    "Functor",
    "FunctorBinding",
    "GeneratorExhaustedError",
    "Inconclusive",
    "LawBindingError",
    "LawCheckError",
    "LawSuite",
    "Monad",
    "MonadBinding",
    "Monoid",
    "MonoidBinding",
    "PropertyRunner",
    "RunConfig",
    "Seed",
    "Success",
    "TestResult",
    "UngeneratableDomainError",
    "__version__",
    "check_law",
    "create_default_suite",
    "default_suite",
    "format_report",
    "functions",
]
