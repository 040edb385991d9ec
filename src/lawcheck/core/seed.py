"""Splittable, immutable pseudorandom seeds.

A Seed is an opaque 128-bit key. Every derivation (split, child, derive)
hashes the parent key together with a domain-separation tag using BLAKE2b,
so children are independent of each other and of the parent, and the
parent itself is never mutated. Randomness is drawn from a private
random.Random seeded with the key; global random state is never touched.

Derivation tags:
    0x00 / 0x01: left / right half of split()
    0x02: child(index), keyed by the index
    0x03: derive(data), keyed by arbitrary bytes (function application)

Python 3.13+.
"""

from __future__ import annotations

import hashlib
import random
import secrets
from dataclasses import dataclass

from lawcheck.constants import SEED_BYTES

__all__ = ["Seed"]

_TAG_LEFT = b"\x00"
_TAG_RIGHT = b"\x01"
_TAG_CHILD = b"\x02"
_TAG_DERIVE = b"\x03"


def _hash(*parts: bytes) -> bytes:
    h = hashlib.blake2b(digest_size=SEED_BYTES)
    for part in parts:
        h.update(part)
    return h.digest()


@dataclass(frozen=True, slots=True)
class Seed:
    """Immutable handle to a pseudorandom stream.

    Attributes:
        key: Raw seed key (SEED_BYTES bytes)

    Example:
        >>> master = Seed.from_int(42)
        >>> left, right = master.split()
        >>> left == master.split()[0]
        True
        >>> left == right
        False
        >>> Seed.from_hex(master.hex) == master
        True
    """

    key: bytes

    def __post_init__(self) -> None:
        """Validate key width.

        Raises:
            ValueError: If key is not exactly SEED_BYTES bytes long
        """
        if len(self.key) != SEED_BYTES:
            msg = f"Seed key must be {SEED_BYTES} bytes, got {len(self.key)}"
            raise ValueError(msg)

    @classmethod
    def from_int(cls, value: int) -> Seed:
        """Build a seed from an integer (any sign, any magnitude)."""
        sign = b"-" if value < 0 else b"+"
        magnitude = abs(value)
        raw = magnitude.to_bytes(max(1, (magnitude.bit_length() + 7) // 8), "big")
        return cls(_hash(b"lawcheck.seed", sign, raw))

    @classmethod
    def from_hex(cls, text: str) -> Seed:
        """Parse the hex rendering produced by Seed.hex."""
        return cls(bytes.fromhex(text))

    @classmethod
    def from_entropy(cls) -> Seed:
        """Build a fresh seed from process entropy."""
        return cls(secrets.token_bytes(SEED_BYTES))

    @classmethod
    def coerce(cls, seed: Seed | int | str | None) -> Seed:
        """Normalize the seed forms accepted by the public API.

        Args:
            seed: Seed instance, integer, hex string, or None for entropy

        Returns:
            Seed instance
        """
        match seed:
            case Seed():
                return seed
            case None:
                return cls.from_entropy()
            case bool():
                msg = "Seed cannot be a bool"
                raise TypeError(msg)
            case int():
                return cls.from_int(seed)
            case str():
                return cls.from_hex(seed)
            case _:
                msg = f"Unsupported seed type: {type(seed).__name__}"
                raise TypeError(msg)

    @property
    def hex(self) -> str:
        """Hex rendering, stable across processes and platforms."""
        return self.key.hex()

    def split(self) -> tuple[Seed, Seed]:
        """Split into two independent child seeds."""
        return Seed(_hash(self.key, _TAG_LEFT)), Seed(_hash(self.key, _TAG_RIGHT))

    def splits(self, count: int) -> tuple[Seed, ...]:
        """Split into count independent seeds by repeated splitting.

        Seed i is the left half of the i-th right spine node, so
        splits(n)[:k] == splits(k) for k <= n.
        """
        seeds: list[Seed] = []
        current = self
        for _ in range(count):
            left, current = current.split()
            seeds.append(left)
        return tuple(seeds)

    def child(self, index: int) -> Seed:
        """Derive the seed for position index (trial number, variant)."""
        if index < 0:
            msg = f"Seed child index must be >= 0, got {index}"
            raise ValueError(msg)
        return Seed(_hash(self.key, _TAG_CHILD, index.to_bytes(8, "big")))

    def derive(self, data: bytes) -> Seed:
        """Derive a child seed keyed by an arbitrary byte string."""
        return Seed(_hash(self.key, _TAG_DERIVE, data))

    def rng(self) -> random.Random:
        """Private PRNG stream seeded from this key."""
        return random.Random(int.from_bytes(self.key, "big"))

    def __repr__(self) -> str:
        """Return short hex representation."""
        return f"Seed({self.hex})"
