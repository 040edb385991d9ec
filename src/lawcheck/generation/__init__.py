"""Value and function generation.

Python 3.13+.
"""

from .function_values import FunctionGenerator, FunctionValue, functions
from .generators import (
    Gen,
    ValueGenerator,
    booleans,
    integers,
    just,
    lists,
    one_of,
    optionals,
    sampled_from,
    text,
    tuples,
)

__all__ = [
    "FunctionGenerator",
    "FunctionValue",
    "Gen",
    "ValueGenerator",
    "booleans",
    "functions",
    "integers",
    "just",
    "lists",
    "one_of",
    "optionals",
    "sampled_from",
    "text",
    "tuples",
]
