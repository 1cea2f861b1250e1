"""Registry for uniform engines.

This module provides a factory layer for creating engines by name, so the
runner and the check suite can be pointed at any engine from the CLI or a
config file.

Adding a new engine:
1. Subclass core.rng.UniformEngine and implement next_int()
2. Register it here with register_engine(name, factory_fn)
3. It becomes available in the CLI via --engine name

Engines outside the registry can also be built from a config spec:
    {"class": "engines.pcg32:PCG32", "params": {"seed": 7, "stream": 3}}

Example:
    >>> from benchmarks.registry import get_engine
    >>> engine = get_engine("mt19937", {"seed": 0})
    >>> engine.choose(1, 6)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from benchmarks.config import resolve_spec
from core.logging import get_logger
from core.rng import UniformEngine
from engines.drand import DRand
from engines.mersenne_twister import MersenneTwister
from engines.numpy_engine import NumpyEngine
from engines.pcg32 import PCG32

__all__ = [
    "ENGINES",
    "EngineFactory",
    "register_engine",
    "get_engine",
]

logger = get_logger(__name__)

# Factory functions take the run config and return an engine
EngineFactory = Callable[[dict[str, Any]], UniformEngine]

# Global registry
ENGINES: dict[str, EngineFactory] = {}


def register_engine(name: str, factory: EngineFactory) -> None:
    """Register an engine factory.

    Args:
        name: Unique name for the engine (used in CLI).
        factory: Callable that takes config dict and returns a UniformEngine.

    Raises:
        ValueError: If name is already registered.
    """
    if name in ENGINES:
        raise ValueError(f"Engine '{name}' is already registered")
    ENGINES[name] = factory


def get_engine(engine: str | dict[str, Any], config: dict[str, Any]) -> UniformEngine:
    """Get an engine instance from a registry name or a class spec.

    Args:
        engine: Registered engine name, or a {"class", "params"} spec.
        config: Configuration dictionary passed to the factory.

    Returns:
        A UniformEngine instance.

    Raises:
        KeyError: If a name is not registered.
        TypeError: If engine is neither a name nor a class spec, or the spec
            does not build a UniformEngine.
    """
    if isinstance(engine, dict) and "class" in engine:
        instance = resolve_spec(engine)
        if not isinstance(instance, UniformEngine):
            raise TypeError(f"Spec {engine['class']!r} did not build a UniformEngine")
        logger.debug("Built engine %r from spec", instance)
        return instance
    if not isinstance(engine, str):
        raise TypeError(f"Engine must be a name or a class spec, got {type(engine).__name__}")
    if engine not in ENGINES:
        available = ", ".join(sorted(ENGINES.keys()))
        raise KeyError(f"Unknown engine '{engine}'. Available: {available}")
    instance = ENGINES[engine](config)
    logger.debug("Built engine %r from registry name %r", instance, engine)
    return instance


# =============================================================================
# Built-in engines
# =============================================================================


def _make_mt19937(config: dict[str, Any]) -> UniformEngine:
    return MersenneTwister(seed=config.get("seed", MersenneTwister.DEFAULT_SEED))


def _make_drand(config: dict[str, Any]) -> UniformEngine:
    return DRand(seed=config.get("seed", DRand.DEFAULT_SEED))


def _make_pcg32(config: dict[str, Any]) -> UniformEngine:
    return PCG32(
        seed=config.get("seed", PCG32.DEFAULT_SEED),
        stream=config.get("stream", PCG32.DEFAULT_STREAM),
    )


def _make_numpy(config: dict[str, Any]) -> UniformEngine:
    return NumpyEngine(seed=config.get("seed"))


register_engine("mt19937", _make_mt19937)
register_engine("drand", _make_drand)
register_engine("pcg32", _make_pcg32)
register_engine("numpy", _make_numpy)
