"""Mersenne Twister MT19937 engine.

A 32-bit generator with period 2**19937 - 1 and 623-dimensional
equidistribution. Seeding follows the reference init_genrand routine, so
sequences match other conforming MT19937 implementations for the same
32-bit seed.
"""

from __future__ import annotations

from core.rng import UniformEngine, clock_seed
from core.types import UINT32_MASK, Int32, to_int32

__all__ = ["MersenneTwister"]


class MersenneTwister(UniformEngine):
    """MT19937 uniform engine.

    Attributes:
        seed: The seed the engine was created with (before 32-bit reduction).
    """

    DEFAULT_SEED = 5489

    _N = 624
    _M = 397
    _MATRIX_A = 0x9908B0DF
    _UPPER_MASK = 0x80000000
    _LOWER_MASK = 0x7FFFFFFF

    def __init__(self, seed: int | None = DEFAULT_SEED) -> None:
        """Initialize the engine.

        Args:
            seed: Any integer; only its low 32 bits are used. None seeds
                from the wall clock.
        """
        if seed is None:
            seed = clock_seed()
        self.seed = int(seed)
        self._state = [0] * self._N
        self._index = self._N
        self._init_genrand(self.seed & UINT32_MASK)

    def _init_genrand(self, seed32: int) -> None:
        state = self._state
        state[0] = seed32
        for i in range(1, self._N):
            prev = state[i - 1]
            state[i] = (1812433253 * (prev ^ (prev >> 30)) + i) & UINT32_MASK
        self._index = self._N

    def _twist(self) -> None:
        state = self._state
        n, m = self._N, self._M
        for i in range(n):
            y = (state[i] & self._UPPER_MASK) | (state[(i + 1) % n] & self._LOWER_MASK)
            value = state[(i + m) % n] ^ (y >> 1)
            if y & 1:
                value ^= self._MATRIX_A
            state[i] = value
        self._index = 0

    def next_uint32(self) -> int:
        """Return the next tempered output as an unsigned 32-bit value."""
        if self._index >= self._N:
            self._twist()
        y = self._state[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & UINT32_MASK

    def next_int(self) -> Int32:
        return to_int32(self.next_uint32())

    def __repr__(self) -> str:
        return f"MersenneTwister(seed={self.seed})"
