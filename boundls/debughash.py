"""Cheap 64-bit checksums of floats and vectors, for debugging."""

from __future__ import annotations

import struct
from collections.abc import Iterable

__all__ = ["hash_double", "hash_int_vector", "hash_double_vector"]

_MASK = (1 << 64) - 1


def hash_double(x: float) -> int:
    """Return the IEEE-754 bit pattern of ``x``; both zeros hash to 0."""
    if x == 0.0:
        return 0
    return struct.unpack("<Q", struct.pack("<d", x))[0]


def hash_int_vector(values: Iterable[int] | None) -> int:
    """Sum of the integers as unsigned 64-bit values, wrapping on overflow."""
    if values is None:
        return 0
    return sum(int(v) & _MASK for v in values) & _MASK


def hash_double_vector(values: Iterable[float] | None) -> int:
    """Sum of the bit patterns of the non-zero values, modulo 2**64."""
    if values is None:
        return 0
    return sum(hash_double(v) for v in values) & _MASK