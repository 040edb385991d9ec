"""Core primitives: splittable seeds and stable value digests.

Python 3.13+.
"""

from .digest import OpaqueValue, SupportsStableDigest, encode_value, stable_digest
from .seed import Seed

__all__ = [
    "OpaqueValue",
    "Seed",
    "SupportsStableDigest",
    "encode_value",
    "stable_digest",
]
