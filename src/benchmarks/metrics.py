"""Sampling metrics for uniform engines.

This module provides numpy helpers for drawing samples from an engine and
measuring how uniform they are: frequency tables, the chi-square statistic
against a flat expectation, and plain summary statistics.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from core.protocols import UniformSource
from core.types import OPERATIONS

__all__ = [
    "sample_array",
    "frequency_table",
    "chi_square_statistic",
    "chi_square_critical",
    "summarize",
]

# Integer-valued operations need int64 (or object for longs) storage
_DTYPES: dict[str, Any] = {
    "next_int": np.int64,
    "next_long": object,
    "raw": np.float64,
    "next_double": np.float64,
    "next_float": np.float64,
    "choose": np.int64,
}


def sample_array(
    engine: UniformSource,
    operation: str,
    n: int,
    *,
    lo: int = 1,
    hi: int = 6,
) -> np.ndarray:
    """Draw n values of a named operation into an array.

    Args:
        engine: Engine to sample from.
        operation: One of core.types.OPERATIONS.
        n: Number of draws. Must be non-negative.
        lo: Lower limit for "choose".
        hi: Upper limit for "choose".

    Returns:
        1D array of length n. next_long samples are stored as Python ints
        (object dtype) since they do not fit every numpy integer type.

    Raises:
        ValueError: If operation is unknown or n is negative.
    """
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown operation '{operation}'. Available: {', '.join(OPERATIONS)}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    if operation == "choose":
        draws = (engine.choose(lo, hi) for _ in range(n))
    else:
        method = getattr(engine, operation)
        draws = (method() for _ in range(n))

    dtype = _DTYPES[operation]
    if dtype is object:
        out = np.empty(n, dtype=object)
        for i, value in enumerate(draws):
            out[i] = value
        return out
    return np.fromiter(draws, dtype=dtype, count=n)


def frequency_table(values: np.ndarray, lo: int, hi: int) -> np.ndarray:
    """Count occurrences of each integer in [lo, hi].

    Returns:
        Array of length hi - lo + 1 where entry k counts value lo + k.

    Raises:
        ValueError: If any value lies outside [lo, hi].
    """
    values = np.asarray(values, dtype=np.int64)
    if values.size and (values.min() < lo or values.max() > hi):
        raise ValueError(
            f"Values outside [{lo}, {hi}]: min={values.min()}, max={values.max()}"
        )
    return np.bincount(values - lo, minlength=hi - lo + 1)


def chi_square_statistic(counts: np.ndarray) -> float:
    """Pearson chi-square statistic of counts against a uniform expectation."""
    counts = np.asarray(counts, dtype=np.float64)
    total = counts.sum()
    if total == 0:
        return 0.0
    expected = total / counts.size
    return float(np.sum((counts - expected) ** 2) / expected)


def chi_square_critical(dof: int, z: float) -> float:
    """Approximate upper critical value of chi-square with dof degrees of freedom.

    Uses the Wilson-Hilferty cube-root normal approximation; z is the
    standard normal quantile of the desired tail (e.g. 3.09 for 0.001).
    """
    if dof < 1:
        raise ValueError(f"dof must be >= 1, got {dof}")
    c = 2.0 / (9.0 * dof)
    return dof * (1.0 - c + z * math.sqrt(c)) ** 3


def summarize(values: np.ndarray) -> dict[str, float]:
    """Summary statistics of a numeric sample."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return {"n": 0, "min": 0.0, "max": 0.0, "mean": 0.0, "std": 0.0}
    return {
        "n": int(arr.size),
        "min": float(arr.min()),
        "max": float(arr.max()),
        "mean": float(arr.mean()),
        "std": float(arr.std()),
    }
