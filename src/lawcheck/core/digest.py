"""Stable structural digests of generated values.

FunctionValue keys every application on a digest of its argument, so the
digest must be identical for equal inputs in every process. The builtin
hash() is salted per interpreter for str and bytes and cannot be used.

Encoding:
    Each value is encoded as a one-byte type tag followed by a
    length-prefixed payload. Containers encode their items recursively;
    dicts and sets sort item encodings so iteration order does not matter.
    Values that compare equal within one type encode identically
    (-0.0 and 0.0, every NaN, Decimal('1.0') and Decimal('1')).

Supported:
    None, bool, int, float, complex, str, bytes, bytearray, Decimal,
    Fraction, Enum members, tuple, list, dict, set, frozenset, dataclass
    instances, and any object implementing __stable_digest__().

Rejected with UngeneratableDomainError:
    Opaque values (generated functions), callables, cyclic or overly deep
    containers, and every other type.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses
import hashlib
import math
import struct
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Protocol, runtime_checkable

from lawcheck.constants import MAX_DIGEST_DEPTH, SEED_BYTES
from lawcheck.diagnostics import ErrorTemplate, UngeneratableDomainError

__all__ = ["OpaqueValue", "SupportsStableDigest", "encode_value", "stable_digest"]


class OpaqueValue:
    """Marker base for values whose internal state has no stable encoding.

    Generated functions derive from this class: a function embedded in a
    function's domain makes that domain ungeneratable.
    """

    __slots__ = ()


@runtime_checkable
class SupportsStableDigest(Protocol):
    """Protocol for user types that provide their own stable encoding."""

    def __stable_digest__(self) -> bytes:
        ...  # pragma: no cover  # Protocol stub - not executable


def _length(n: int) -> bytes:
    return n.to_bytes(8, "big")


def _type_name(value: object) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def _float_bytes(value: float) -> bytes:
    if math.isnan(value):
        return b"nan"
    if value == 0.0:
        value = 0.0  # collapse -0.0
    return struct.pack(">d", value)


def _text(value: str) -> bytes:
    raw = value.encode("utf-8", errors="surrogatepass")
    return _length(len(raw)) + raw


def _reject(value: object, reason: str) -> UngeneratableDomainError:
    return UngeneratableDomainError(
        ErrorTemplate.ungeneratable_domain(_type_name(value), reason)
    )


def encode_value(value: object, _depth: int = 0) -> bytes:
    """Encode value into its canonical byte string.

    Args:
        value: Value to encode

    Returns:
        Canonical, process-independent encoding

    Raises:
        UngeneratableDomainError: If the value has no stable encoding
    """
    if _depth > MAX_DIGEST_DEPTH:
        raise _reject(value, f"nesting deeper than {MAX_DIGEST_DEPTH} levels (cyclic value?)")

    depth = _depth + 1
    match value:
        case OpaqueValue():
            raise _reject(value, "generated functions have no stable digest")
        case SupportsStableDigest() if not isinstance(value, type):
            payload = value.__stable_digest__()
            return b"X" + _text(_type_name(value)) + _length(len(payload)) + payload
        case None:
            return b"N"
        case bool():
            return b"B1" if value else b"B0"
        case Enum():
            return b"E" + _text(_type_name(value)) + _text(value.name)
        case int():
            sign = b"-" if value < 0 else b"+"
            magnitude = abs(value)
            raw = magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")
            return b"I" + sign + _length(len(raw)) + raw
        case float():
            return b"F" + _float_bytes(value)
        case complex():
            return b"C" + _float_bytes(value.real) + _float_bytes(value.imag)
        case str():
            return b"S" + _text(value)
        case bytes() | bytearray():
            return b"Y" + _length(len(value)) + bytes(value)
        case Decimal():
            canonical = str(value) if value.is_nan() else str(value.normalize())
            return b"D" + _text(canonical)
        case Fraction():
            numerator = encode_value(value.numerator, depth)
            return b"Q" + numerator + encode_value(value.denominator, depth)
        case tuple():
            return b"T" + _length(len(value)) + b"".join(encode_value(v, depth) for v in value)
        case list():
            return b"L" + _length(len(value)) + b"".join(encode_value(v, depth) for v in value)
        case dict():
            items = sorted(
                encode_value(k, depth) + encode_value(v, depth) for k, v in value.items()
            )
            return b"M" + _length(len(items)) + b"".join(items)
        case set() | frozenset():
            members = sorted(encode_value(v, depth) for v in value)
            return b"Z" + _length(len(members)) + b"".join(members)
        case _ if dataclasses.is_dataclass(value) and not isinstance(value, type):
            parts = [
                _text(f.name) + encode_value(getattr(value, f.name), depth)
                for f in dataclasses.fields(value)
            ]
            return b"R" + _text(_type_name(value)) + _length(len(parts)) + b"".join(parts)
        case _ if callable(value):
            raise _reject(value, "callables have no stable digest")
        case _:
            raise _reject(value, "no stable structural encoding is known for this type")


def stable_digest(value: object) -> bytes:
    """Fixed-width digest of the canonical encoding of value.

    Example:
        >>> stable_digest((1, "a")) == stable_digest((1, "a"))
        True
        >>> stable_digest({1, 2}) == stable_digest({2, 1})
        True
    """
    return hashlib.blake2b(encode_value(value), digest_size=SEED_BYTES).digest()
