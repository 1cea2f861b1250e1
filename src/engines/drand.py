"""Multiplicative congruential engine.

Computes z(i+1) = a * z(i) mod 2**32 with a = 663608941 (0x278DDE6D). The
state is kept congruent to 1 mod 4, which gives the maximal period of 2**30
for this modulus. Quick, small and statistically weak; use it where speed
and a one-word state matter more than quality.
"""

from __future__ import annotations

from core.rng import UniformEngine, clock_seed
from core.types import UINT32_MASK, Int32, to_int32

__all__ = ["DRand"]

# (2**32 - 1) // 4: largest seed for which 4 * seed + 1 fits in 32 bits
_SEED_LIMIT = 1073741823


class DRand(UniformEngine):
    """Multiplicative congruential engine with a single 32-bit word of state."""

    DEFAULT_SEED = 1
    MULTIPLIER = 0x278DDE6D

    def __init__(self, seed: int | None = DEFAULT_SEED) -> None:
        """Initialize the engine.

        Args:
            seed: Non-negative seed; negative seeds are negated and seeds at
                or above 2**30 - 1 are shifted right by 3. None seeds from
                the wall clock.
        """
        if seed is None:
            seed = to_int32(clock_seed())
        self.seed = int(seed)
        self._current = self._initial_state(self.seed)

    @staticmethod
    def _initial_state(seed: int) -> int:
        if seed < 0:
            seed = -seed
        if seed >= _SEED_LIMIT:
            seed >>= 3
        return (4 * seed + 1) & UINT32_MASK

    def next_int(self) -> Int32:
        self._current = (self._current * self.MULTIPLIER) & UINT32_MASK
        return to_int32(self._current)

    def __repr__(self) -> str:
        return f"DRand(seed={self.seed})"
