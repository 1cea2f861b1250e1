"""PCG32 engine (PCG-XSH-RR with 64-bit state and 32-bit output).

Seeding follows the reference pcg32_srandom_r routine, so a (seed, stream)
pair reproduces the reference sequence. Python ints are unbounded, so
every state update is clipped to 64 bits and every output to 32 bits.
"""

from __future__ import annotations

from core.rng import UniformEngine, clock_seed
from core.types import UINT32_MASK, UINT64_MASK, Int32, to_int32

__all__ = ["PCG32"]

_MULTIPLIER = 6364136223846793005


class PCG32(UniformEngine):
    """Permuted congruential engine.

    Attributes:
        seed: Initial state the engine was created with.
        stream: Stream selector; different streams give independent sequences.
    """

    DEFAULT_SEED = 42
    DEFAULT_STREAM = 54

    def __init__(self, seed: int | None = DEFAULT_SEED, stream: int = DEFAULT_STREAM) -> None:
        """Initialize the engine.

        Args:
            seed: 64-bit initial state. None seeds from the wall clock.
            stream: 63-bit stream selector.

        Raises:
            ValueError: If stream is negative.
        """
        if stream < 0:
            raise ValueError(f"stream must be non-negative, got {stream}")
        if seed is None:
            seed = clock_seed()
        self.seed = int(seed)
        self.stream = int(stream)
        self._state = 0
        self._inc = ((self.stream << 1) | 1) & UINT64_MASK
        self.next_uint32()
        self._state = (self._state + (self.seed & UINT64_MASK)) & UINT64_MASK
        self.next_uint32()

    def next_uint32(self) -> int:
        """Advance the state and return the output as an unsigned 32-bit value."""
        oldstate = self._state
        self._state = (oldstate * _MULTIPLIER + self._inc) & UINT64_MASK
        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & UINT32_MASK
        rot = oldstate >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & UINT32_MASK

    def next_int(self) -> Int32:
        return to_int32(self.next_uint32())

    def __repr__(self) -> str:
        return f"PCG32(seed={self.seed}, stream={self.stream})"
