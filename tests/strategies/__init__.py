"""Hypothesis strategies for lawcheck property-based testing.

Strategies are organized by domain:

- core: seeds, size hints and digestible values

Usage:
    from tests.strategies import seeds, size_hints, digestible_values
"""

from .core import digestible_values, int_seeds, seeds, size_hints

__all__ = [
    "digestible_values",
    "int_seeds",
    "seeds",
    "size_hints",
]
