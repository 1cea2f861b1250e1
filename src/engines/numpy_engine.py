"""Adapter exposing a numpy Generator as a uniform engine."""

from __future__ import annotations

import numpy as np

from core.rng import UniformEngine, clock_seed
from core.types import INT32_MAX, INT32_MIN, Int32

__all__ = ["NumpyEngine"]


class NumpyEngine(UniformEngine):
    """Uniform engine backed by numpy.random.Generator.

    Each primitive draw is one call to Generator.integers over the closed
    32-bit signed range, so the derived operations see exactly the same
    stream as any other consumer of the generator would.

    Attributes:
        seed: Seed used to build the generator, or None when a generator
            was passed in.
        generator: The wrapped numpy Generator.
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        generator: np.random.Generator | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            seed: Seed for np.random.default_rng. None seeds from the wall
                clock so runs are still recorded with a concrete seed.
            generator: Existing Generator to wrap. Mutually exclusive with seed.

        Raises:
            ValueError: If both seed and generator are given.
        """
        if generator is not None:
            if seed is not None:
                raise ValueError("Pass either seed or generator, not both")
            self.seed: int | None = None
            self.generator = generator
            return
        if seed is None:
            seed = clock_seed()
        self.seed = int(seed)
        self.generator = np.random.default_rng(self.seed)

    def next_int(self) -> Int32:
        return int(self.generator.integers(INT32_MIN, INT32_MAX, endpoint=True, dtype=np.int64))

    def __repr__(self) -> str:
        return f"NumpyEngine(seed={self.seed})"
