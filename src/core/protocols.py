"""Protocol definitions for uniform random engines.

This module contains Protocol classes defining interfaces for:
- IntSource: anything producing uniformly distributed 32-bit signed integers
- UniformSource: the full derived surface layered on top of an IntSource

Concrete engines normally subclass core.rng.UniformEngine, which satisfies
both protocols. The protocols let helpers such as benchmarks.metrics accept
any object with the right shape.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.types import Int32, Int64

__all__ = [
    "IntSource",
    "UniformSource",
]


@runtime_checkable
class IntSource(Protocol):
    """Protocol for primitive 32-bit integer sources."""

    def next_int(self) -> Int32:
        """Return a value uniform over [-2**31, 2**31 - 1], both ends included.

        Returns:
            A 32-bit signed integer.
        """
        ...


@runtime_checkable
class UniformSource(IntSource, Protocol):
    """Protocol for engines exposing every derived uniform operation.

    The derived operations are:
    - next_long: 64-bit signed integers from two primitive draws
    - raw: doubles in (0, 1) from a single nonzero primitive draw
    - next_double: doubles in (0, 1) from a 64-bit draw
    - next_float: single-precision values in (0, 1)
    - choose: integers in an inclusive range
    - next_int_below: integers in [0, bound)
    """

    def next_long(self) -> Int64:
        """Return a value uniform over [-2**63, 2**63 - 1]."""
        ...

    def raw(self) -> float:
        """Return a double strictly inside (0.0, 1.0) with 32 random bits."""
        ...

    def next_double(self) -> float:
        """Return a double strictly inside (0.0, 1.0) with 64 random bits."""
        ...

    def next_float(self) -> float:
        """Return a single-precision value strictly inside (0.0, 1.0)."""
        ...

    def choose(self, lo: Int32, hi: Int32 | None = None) -> Int32:
        """Return an integer uniform over [lo, hi], or [1, lo] with one argument."""
        ...

    def next_int_below(self, bound: Int32) -> Int32:
        """Return an integer uniform over [0, bound - 1]."""
        ...
