"""Conformance check suite for uniform engines.

This module provides a fast, deterministic check suite to verify that:
- Fractional draws stay strictly inside the open unit interval
- Boundary words take the retry paths of raw/next_double/next_float
- 64-bit values are concatenated high word first without sign extension
- Degenerate and small inclusive ranges behave as documented
- Range draws are uniform (chi-square against a flat expectation)
- Engines built from the same seed replay the same stream

The word-level checks use ReplayEngine and are independent of the
configured engine; the sampling checks run against the configured engine.
The checks are designed to be run locally or in CI without manual inspection.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from benchmarks.metrics import (
    chi_square_critical,
    chi_square_statistic,
    frequency_table,
    sample_array,
)
from benchmarks.registry import get_engine
from core.logging import get_logger
from core.rng import UniformEngine, clock_seed
from core.types import INT32_MAX, INT32_MIN, INT64_MIN, OPERATIONS, TWO_POW_MINUS_32
from engines.replay import ReplayEngine

__all__ = [
    "CheckResult",
    "ChecksSummary",
    "check_open_unit_interval",
    "check_double_mean",
    "check_boundary_words",
    "check_long_concatenation",
    "check_degenerate_ranges",
    "check_choose_frequencies",
    "check_replay_determinism",
    "run_checks",
]

logger = get_logger(__name__)

# Ranges wider than this only get the in-range check, not chi-square
MAX_CHI_SQUARE_BINS = 1000


@dataclass
class CheckResult:
    """Result of a single check.

    Attributes:
        name: Name of the check.
        passed: Whether the check passed.
        details: Additional details (numeric values, thresholds, config).
    """

    name: str
    passed: bool
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "passed": self.passed,
            "details": self.details,
        }


@dataclass
class ChecksSummary:
    """Summary of all checks.

    Attributes:
        passed: Whether all checks passed.
        results: List of individual check results.
    """

    passed: bool
    results: list[CheckResult] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "passed": self.passed,
            "num_checks": len(self.results),
            "num_passed": sum(1 for r in self.results if r.passed),
            "num_failed": sum(1 for r in self.results if not r.passed),
            "results": [r.to_dict() for r in self.results],
        }


def _engine_from_config(config: dict[str, Any]) -> UniformEngine:
    return get_engine(config.get("engine", "mt19937"), config)


# =============================================================================
# Sampling checks (configured engine)
# =============================================================================


def check_open_unit_interval(config: dict[str, Any]) -> CheckResult:
    """Check that raw, next_double and next_float never hit 0.0 or 1.0.

    Args:
        config: Configuration with keys: engine, seed, samples.

    Returns:
        CheckResult with pass/fail and per-operation min/max.
    """
    n = int(config.get("samples", 20000))
    engine = _engine_from_config(config)

    details: dict[str, Any] = {"samples": n}
    passed = True
    for operation in ("raw", "next_double", "next_float"):
        values = sample_array(engine, operation, n)
        if values.size:
            lo, hi = float(values.min()), float(values.max())
            inside = bool(lo > 0.0 and hi < 1.0)
        else:
            lo, hi, inside = math.nan, math.nan, True
        details[operation] = {"min": lo, "max": hi, "inside": inside}
        passed = passed and inside

    return CheckResult(name="open_unit_interval", passed=passed, details=details)


def check_double_mean(config: dict[str, Any]) -> CheckResult:
    """Check that the next_double sample mean is close to 0.5.

    The tolerance is z standard errors of a U(0, 1) mean: z / sqrt(12 n).
    """
    n = int(config.get("samples", 20000))
    z = float(config.get("z", 4.0))
    if n < 1:
        return CheckResult(
            name="double_mean",
            passed=True,
            details={"skipped": True, "reason": "no samples requested"},
        )
    engine = _engine_from_config(config)
    values = sample_array(engine, "next_double", n)
    mean = float(np.mean(values))
    tolerance = z / math.sqrt(12.0 * n)
    deviation = abs(mean - 0.5)
    return CheckResult(
        name="double_mean",
        passed=deviation <= tolerance,
        details={
            "samples": n,
            "mean": mean,
            "deviation": deviation,
            "tolerance": tolerance,
            "z": z,
        },
    )


def check_choose_frequencies(config: dict[str, Any]) -> CheckResult:
    """Check that choose(lo, hi) stays in range and is uniform.

    Args:
        config: Configuration with keys: engine, seed, samples, lo, hi, z.

    Returns:
        CheckResult with the observed range, chi-square statistic and
        critical value.
    """
    n = int(config.get("samples", 20000))
    lo = int(config.get("lo", 1))
    hi = int(config.get("hi", 6))
    z = float(config.get("z", 4.0))

    engine = _engine_from_config(config)
    values = sample_array(engine, "choose", n, lo=lo, hi=hi)

    details: dict[str, Any] = {"lo": lo, "hi": hi, "samples": n, "z": z}
    if values.size == 0:
        details.update({"skipped": True, "reason": "no samples requested"})
        return CheckResult(name="choose_frequencies", passed=True, details=details)

    observed_min, observed_max = int(values.min()), int(values.max())
    in_range = lo <= observed_min and observed_max <= hi
    details.update({"observed_min": observed_min, "observed_max": observed_max, "in_range": in_range})

    bins = hi - lo + 1
    if not in_range or bins < 2 or bins > MAX_CHI_SQUARE_BINS:
        details["chi_square_skipped"] = True
        return CheckResult(name="choose_frequencies", passed=in_range, details=details)

    counts = frequency_table(values, lo, hi)
    statistic = chi_square_statistic(counts)
    critical = chi_square_critical(bins - 1, z)
    details.update(
        {
            "counts": [int(c) for c in counts],
            "chi_square": statistic,
            "critical": critical,
        }
    )
    return CheckResult(name="choose_frequencies", passed=statistic <= critical, details=details)


def check_degenerate_ranges(config: dict[str, Any]) -> CheckResult:
    """Check choose(x, x) == x and next_int_below(1) == 0.

    Covers the 32-bit extremes, where the span computation is most fragile.
    """
    repeats = int(config.get("degenerate_repeats", 100))
    engine = _engine_from_config(config)

    failures: list[str] = []
    for x in (-5, 0, INT32_MAX, INT32_MIN):
        for _ in range(repeats):
            value = engine.choose(x, x)
            if value != x:
                failures.append(f"choose({x}, {x}) -> {value}")
                break
    for _ in range(repeats):
        value = engine.next_int_below(1)
        if value != 0:
            failures.append(f"next_int_below(1) -> {value}")
            break

    return CheckResult(
        name="degenerate_ranges",
        passed=not failures,
        details={"repeats": repeats, "failures": failures},
    )


def check_replay_determinism(config: dict[str, Any]) -> CheckResult:
    """Check that two engines with the same seed produce the same draws."""
    draws = int(config.get("determinism_draws", 50))
    seeded = dict(config)
    if seeded.get("seed") is None:
        seeded["seed"] = clock_seed()

    first = _engine_from_config(seeded)
    second = _engine_from_config(seeded)

    mismatched: list[str] = []
    for operation in OPERATIONS:
        a = sample_array(first, operation, draws).tolist()
        b = sample_array(second, operation, draws).tolist()
        if a != b:
            mismatched.append(operation)

    return CheckResult(
        name="replay_determinism",
        passed=not mismatched,
        details={"seed": seeded["seed"], "draws": draws, "mismatched": mismatched},
    )


# =============================================================================
# Word-level checks (ReplayEngine)
# =============================================================================


def _replay_case(
    words: list[int],
    operation: Callable[[ReplayEngine], Any],
    expected: Any,
    expected_draws: int,
) -> dict[str, Any]:
    engine = ReplayEngine(words)
    value = operation(engine)
    return {
        "words": [hex(w & 0xFFFFFFFF) for w in words],
        "value": value,
        "expected": expected,
        "draws": engine.position,
        "expected_draws": expected_draws,
        "passed": value == expected and engine.position == expected_draws,
    }


def check_boundary_words() -> CheckResult:
    """Check the retry paths of raw, next_double and next_float.

    Each case replays words that hit a rejected boundary first, followed by
    words with a known result, and verifies both the result and the number
    of primitive draws consumed.
    """
    cases = {
        # zero is discarded, 1 maps to 2**-32
        "raw_skips_zero": _replay_case([0, 1], UniformEngine.raw, TWO_POW_MINUS_32, 2),
        "raw_max_word": _replay_case([-1], UniformEngine.raw, 0.9999999997671694, 1),
        # INT64_MAX rounds to 1.0, then long 1 maps to 0.5
        "double_rejects_int64_max": _replay_case(
            [0x7FFFFFFF, 0xFFFFFFFF, 0, 1], UniformEngine.next_double, 0.5, 4
        ),
        # INT64_MIN maps to 0.0, then long -1 maps to 0.5
        "double_rejects_int64_min": _replay_case(
            [0x80000000, 0, 0xFFFFFFFF, 0xFFFFFFFF], UniformEngine.next_double, 0.5, 4
        ),
        # raw(-1) narrows to 1.0f, then raw(1) narrows exactly to 2**-32
        "float_rejects_one": _replay_case([-1, 1], UniformEngine.next_float, TWO_POW_MINUS_32, 2),
    }
    passed = all(case["passed"] for case in cases.values())
    return CheckResult(name="boundary_words", passed=passed, details=cases)


def check_long_concatenation() -> CheckResult:
    """Check that next_long places the first word high, without sign extension."""
    cases = {
        "one_two": _replay_case([1, 2], UniformEngine.next_long, 0x0000000100000002, 2),
        "all_ones": _replay_case([-1, -1], UniformEngine.next_long, -1, 2),
        "sign_bit_only": _replay_case([0x80000000, 0], UniformEngine.next_long, INT64_MIN, 2),
        "negative_low_word": _replay_case([0, -1], UniformEngine.next_long, 0xFFFFFFFF, 2),
    }
    passed = all(case["passed"] for case in cases.values())
    return CheckResult(name="long_concatenation", passed=passed, details=cases)


# =============================================================================
# Suite
# =============================================================================


def run_checks(config: dict[str, Any]) -> ChecksSummary:
    """Run all checks for the given configuration.

    Args:
        config: Configuration dictionary with engine, seed, samples, lo, hi, z.

    Returns:
        ChecksSummary with all check results.
    """
    results: list[CheckResult] = [
        check_boundary_words(),
        check_long_concatenation(),
        check_open_unit_interval(config),
        check_double_mean(config),
        check_degenerate_ranges(config),
        check_choose_frequencies(config),
        check_replay_determinism(config),
    ]
    for result in results:
        logger.debug("Check %s: %s", result.name, "passed" if result.passed else "FAILED")

    all_passed = all(r.passed for r in results)
    return ChecksSummary(passed=all_passed, results=results)
