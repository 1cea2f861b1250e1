"""Concrete uniform engines.

Each engine implements only the 32-bit primitive next_int() and inherits the
derived operations from core.rng.UniformEngine:

- MersenneTwister: MT19937, the default engine
- DRand: 32-bit multiplicative congruential generator
- PCG32: permuted congruential generator with selectable streams
- NumpyEngine: adapter around numpy.random.Generator
- ReplayEngine: replays a fixed word sequence
"""

from __future__ import annotations

from engines.drand import DRand
from engines.mersenne_twister import MersenneTwister
from engines.numpy_engine import NumpyEngine
from engines.pcg32 import PCG32
from engines.replay import ReplayEngine, SequenceExhaustedError

__all__ = [
    "DRand",
    "MersenneTwister",
    "NumpyEngine",
    "PCG32",
    "ReplayEngine",
    "SequenceExhaustedError",
]
