"""Law catalog and capability bundles.

Python 3.13+.
"""

from .catalog import Law, LawSuite, check_law, create_default_suite, default_suite
from .structures import (
    Binding,
    Functor,
    FunctorBinding,
    Monad,
    MonadBinding,
    Monoid,
    MonoidBinding,
    StructureKind,
)

__all__ = [
    "Binding",
    "Functor",
    "FunctorBinding",
    "Law",
    "LawSuite",
    "Monad",
    "MonadBinding",
    "Monoid",
    "MonoidBinding",
    "StructureKind",
    "check_law",
    "create_default_suite",
    "default_suite",
]
