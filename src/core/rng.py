"""Abstract base class for uniform pseudo-random number engines.

Most probability distributions are obtained by taking a uniform engine and
transforming its output. Subclasses produce:
- int's in the closed interval [INT32_MIN, INT32_MAX]
- long's in the closed interval [INT64_MIN, INT64_MAX]
- float's and double's in the open unit interval (0.0, 1.0)

Subclasses override a single method, next_int(). Everything else is layered
on top of it here:
- longs concatenate two 32-bit draws, high word first
- raw() splits [0.0, 1.0] into 2**32 sub intervals and picks one
- next_double() splits [0.0, 1.0] into 2**64 sub intervals and picks one
- next_float() narrows raw() to single precision

Engines are not synchronized. Share one instance per thread of execution.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta

import numpy as np

from core.logging import get_logger
from core.types import (
    INT64_MIN_AS_DOUBLE,
    TWO_POW_MINUS_32,
    TWO_POW_MINUS_64,
    UINT32_MASK,
    Int32,
    Int64,
    is_int32,
    to_int64,
)

__all__ = [
    "UniformEngine",
    "clock_seed",
]

logger = get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def clock_seed(when: datetime | None = None) -> Int64:
    """Return a seed equal to the milliseconds since the Unix epoch.

    Args:
        when: Point in time to convert. Naive datetimes are taken as local
            time. Defaults to the current wall-clock time.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z.
    """
    if when is None:
        return time.time_ns() // 1_000_000
    return (when.astimezone(UTC) - _EPOCH) // timedelta(milliseconds=1)


class UniformEngine(ABC):
    """Base class for engines built on one 32-bit primitive.

    Subclasses implement next_int() and inherit next_long(), raw(),
    next_double(), next_float(), choose() and next_int_below(). Derived
    operations only ever call next_int(); given a deterministic subclass
    they are deterministic too.
    """

    @abstractmethod
    def next_int(self) -> Int32:
        """Return a 32-bit value uniform over [INT32_MIN, INT32_MAX].

        Both endpoints and zero must be reachable. Derived operations use
        only the low 32 bits of the result, so an unsigned pattern in
        [0, 2**32) is accepted as well.
        """

    def next_long(self) -> Int64:
        """Return a 64-bit value uniform over [INT64_MIN, INT64_MAX].

        Consumes exactly two primitive draws: the first supplies the high
        word, the second the low word.
        """
        high = self.next_int() & UINT32_MASK
        low = self.next_int() & UINT32_MASK
        return to_int64((high << 32) | low)

    def raw(self) -> float:
        """Return a 32-bit uniform double in the open interval (0.0, 1.0).

        Zero draws are discarded so that 0.0 can never be returned.

        Examples of the mapping (primitive draw -> result):
            INT32_MAX -> 0.49999999976716936
            INT32_MIN -> 0.5
            1         -> 2.3283064365386963e-10
            -1        -> 0.9999999997671694
        """
        while True:
            bits = self.next_int() & UINT32_MASK
            if bits != 0:
                return bits * TWO_POW_MINUS_32
            logger.debug("raw() drew zero; redrawing")

    def next_double(self) -> float:
        """Return a 64-bit uniform double in the open interval (0.0, 1.0).

        The long is offset by INT64_MIN and scaled by 2**-64 in double
        precision. Rounding in the long -> double conversion sends values
        near INT64_MAX to 1.0 and values near INT64_MIN to 0.0; those draws
        are rejected and a fresh long is drawn.

        Examples of the mapping (next_long -> result):
            INT64_MAX          -> 1.0 (redrawn)
            INT64_MIN          -> 0.0 (redrawn)
            INT64_MAX - 100000 -> 0.9999999999999946
            1, -1, 2, -2       -> 0.5
            2 + 100000         -> 0.5000000000000054
        """
        while True:
            value = (float(self.next_long()) - INT64_MIN_AS_DOUBLE) * TWO_POW_MINUS_64
            if 0.0 < value < 1.0:
                return value
            logger.debug("next_double() rounded to %r; redrawing", value)

    def next_float(self) -> float:
        """Return a single-precision uniform value in (0.0, 1.0).

        raw() is rounded to the nearest float32; when that rounds up to 1.0
        the whole draw is repeated. The result is returned as a Python float
        holding an exactly representable float32 value.
        """
        while True:
            value = float(np.float32(self.raw()))
            if value < 1.0:
                return value
            logger.debug("next_float() rounded to %r; redrawing", value)

    def choose(self, lo: Int32, hi: Int32 | None = None) -> Int32:
        """Return an integer uniform over the inclusive range [lo, hi].

        With a single argument, choose(hi) returns a value in [1, hi].

        Args:
            lo: Lower limit of the range (upper limit when hi is omitted).
            hi: Upper limit of the range.

        Returns:
            One of lo, lo + 1, ..., hi.

        Raises:
            ValueError: If a limit is outside the 32-bit signed range or
                lo > hi.
        """
        if hi is None:
            lo, hi = 1, lo
        if not (is_int32(lo) and is_int32(hi)):
            raise ValueError(f"choose() limits must be 32-bit signed integers, got [{lo}, {hi}]")
        if lo > hi:
            raise ValueError(f"choose() requires lo <= hi, got [{lo}, {hi}]")
        # span is at most 2**32 and raw() < 1, so the offset is at most hi - lo
        span = 1 + hi - lo
        return lo + int(span * self.raw())

    def next_int_below(self, bound: Int32) -> Int32:
        """Return an integer uniform over [0, bound - 1].

        Raises:
            ValueError: If bound < 1.
        """
        if bound < 1:
            raise ValueError(f"bound must be >= 1, got {bound}")
        return self.choose(0, bound - 1)
