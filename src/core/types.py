"""Core type definitions for uniform random engines.

This module contains:
- Type aliases documenting the integer widths the engines work with
- Range constants and masks for 32- and 64-bit two's-complement values
- Reinterpretation helpers between signed and unsigned bit patterns
- Scale constants used by the fractional conversions
"""

from __future__ import annotations

__all__ = [
    "Int32",
    "Int64",
    "INT32_MIN",
    "INT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "UINT32_MASK",
    "UINT64_MASK",
    "TWO_POW_MINUS_32",
    "TWO_POW_MINUS_64",
    "INT64_MIN_AS_DOUBLE",
    "OPERATIONS",
    "to_uint32",
    "to_int32",
    "to_uint64",
    "to_int64",
    "is_int32",
]

# Python ints are unbounded; these aliases document the value range only
Int32 = int
Int64 = int

INT32_MIN: Int32 = -(2**31)
INT32_MAX: Int32 = 2**31 - 1
INT64_MIN: Int64 = -(2**63)
INT64_MAX: Int64 = 2**63 - 1

UINT32_MASK = 0xFFFFFFFF
UINT64_MASK = 0xFFFFFFFFFFFFFFFF

# 2.3283064365386963e-10 == 1 / 2**32
TWO_POW_MINUS_32 = 2.3283064365386963e-10
# 5.421010862427522e-20 == 1 / 2**64
TWO_POW_MINUS_64 = 5.421010862427522e-20
# -9.223372036854776e18 == float(INT64_MIN)
INT64_MIN_AS_DOUBLE = -9.223372036854776e18

# Operation names accepted by sampling helpers and the runner
OPERATIONS: tuple[str, ...] = (
    "next_int",
    "next_long",
    "raw",
    "next_double",
    "next_float",
    "choose",
)


def to_uint32(x: int) -> int:
    """Return the low 32 bits of x as an unsigned value in [0, 2**32)."""
    return x & UINT32_MASK


def to_int32(x: int) -> Int32:
    """Return the low 32 bits of x as a two's-complement signed value."""
    x &= UINT32_MASK
    return x - (1 << 32) if x & 0x80000000 else x


def to_uint64(x: int) -> int:
    """Return the low 64 bits of x as an unsigned value in [0, 2**64)."""
    return x & UINT64_MASK


def to_int64(x: int) -> Int64:
    """Return the low 64 bits of x as a two's-complement signed value."""
    x &= UINT64_MASK
    return x - (1 << 64) if x & 0x8000000000000000 else x


def is_int32(x: int) -> bool:
    return INT32_MIN <= x <= INT32_MAX
