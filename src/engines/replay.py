"""Engine replaying a fixed sequence of primitive words.

Useful wherever the exact primitive draws must be controlled: reproducing a
recorded stream, exercising boundary words of the derived conversions, or
pinning expected values in tests.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.rng import UniformEngine
from core.types import Int32, to_int32

__all__ = [
    "ReplayEngine",
    "SequenceExhaustedError",
]


class SequenceExhaustedError(RuntimeError):
    """Raised when a non-cycling ReplayEngine has no words left."""


class ReplayEngine(UniformEngine):
    """Uniform engine returning a fixed list of words in order.

    Words may be given signed or unsigned; only their low 32 bits are used,
    so 0xFFFFFFFF and -1 are the same word.

    Attributes:
        words: The words being replayed, as 32-bit signed values.
        cycle: Whether to wrap around to the first word after the last.
    """

    def __init__(self, words: Iterable[int], *, cycle: bool = False) -> None:
        """Initialize the engine.

        Args:
            words: Sequence of primitive outputs to replay.
            cycle: Wrap around instead of raising when the words run out.

        Raises:
            ValueError: If words is empty.
        """
        self.words: tuple[Int32, ...] = tuple(to_int32(int(w)) for w in words)
        if not self.words:
            raise ValueError("ReplayEngine needs at least one word")
        self.cycle = cycle
        self._position = 0

    @property
    def position(self) -> int:
        """Number of primitive draws made since construction or reset()."""
        return self._position

    def reset(self) -> None:
        """Rewind to the first word."""
        self._position = 0

    def next_int(self) -> Int32:
        index = self._position
        if index >= len(self.words):
            if not self.cycle:
                raise SequenceExhaustedError(
                    f"ReplayEngine exhausted after {len(self.words)} words"
                )
            index %= len(self.words)
        self._position += 1
        return self.words[index]

    def __repr__(self) -> str:
        return f"ReplayEngine(words={len(self.words)}, cycle={self.cycle}, position={self._position})"
