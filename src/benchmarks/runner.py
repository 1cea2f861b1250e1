"""Runner CLI for uniform engine checks and sampling.

This module provides a command-line interface for exercising uniform
engines with configurable engine, seed and sample sizes.

Supports two modes:
- checks: Run the conformance check suite and produce a report
- sample: Draw samples of one operation, summarize and plot them

Every run creates workflow_dir/run_XXXX/ with meta.json, config.json and
an artifacts/ directory.

Usage:
    python -m benchmarks.runner --mode checks --engine mt19937 --seed 0
    python -m benchmarks.runner --mode checks --engine pcg32 --set stream=7
    python -m benchmarks.runner --mode sample --operation choose --lo 1 --hi 6
    python -m benchmarks.runner --config run.json --set samples=100000
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import numpy as np

from benchmarks.checks import run_checks
from benchmarks.config import DEFAULT_CONFIG, apply_overrides, build_config
from benchmarks.metrics import sample_array, summarize
from benchmarks.plotting import plot_histogram
from benchmarks.registry import ENGINES, get_engine
from benchmarks.report import render_checks_markdown, render_sample_markdown
from benchmarks.workflow import next_run_dir, try_get_git_commit, write_run_files
from core.logging import configure_logging, get_logger
from core.types import OPERATIONS

__all__ = ["main", "parse_args", "resolve_config", "run_checks_mode", "run_sample_mode"]

logger = get_logger(__name__)

# CLI options that map one-to-one onto config keys
_CONFIG_OPTIONS = ("engine", "seed", "samples", "operation", "lo", "hi", "z")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Check and sample uniform random engines",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--mode",
        type=str,
        choices=["checks", "sample"],
        default="checks",
        help="Run mode: conformance checks suite or sampling of one operation",
    )
    parser.add_argument(
        "--engine",
        type=str,
        choices=sorted(ENGINES.keys()),
        default=None,
        help=f"Engine name (default from config: {DEFAULT_CONFIG['engine']})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Engine seed")
    parser.add_argument("--samples", type=int, default=None, help="Number of draws per sample")
    parser.add_argument(
        "--operation",
        type=str,
        choices=list(OPERATIONS),
        default=None,
        help="Operation to draw in sample mode",
    )
    parser.add_argument("--lo", type=int, default=None, help="Lower limit for choose")
    parser.add_argument("--hi", type=int, default=None, help="Upper limit for choose")
    parser.add_argument("--z", type=float, default=None, help="z-score for statistical tolerances")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Config override (repeatable), e.g. --set stream=3",
    )
    parser.add_argument(
        "--workflow-dir",
        type=Path,
        default=Path("workflow"),
        help="Directory holding run_XXXX directories",
    )
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    parser.add_argument("--no-render", action="store_true", help="Skip plot rendering")

    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> dict[str, Any]:
    """Build the run config: defaults, then --config file, then CLI options, then --set."""
    config = build_config(args.config)
    for key in _CONFIG_OPTIONS:
        value = getattr(args, key, None)
        if value is not None:
            config[key] = value
    return apply_overrides(config, args.overrides)


def run_checks_mode(config: dict[str, Any], run_dir: Path) -> tuple[dict[str, Any], bool]:
    """Run checks mode: execute the conformance checks.

    Args:
        config: Resolved run configuration.
        run_dir: Run directory.

    Returns:
        Tuple of (checks_summary_dict, all_passed).
    """
    artifacts_dir = run_dir / "artifacts"
    artifacts_dir.mkdir(parents=True, exist_ok=True)

    summary = run_checks(config)

    with (artifacts_dir / "checks.json").open("w", encoding="utf-8") as f:
        json.dump(summary.to_json(), f, indent=2, sort_keys=True)

    with (artifacts_dir / "checks.md").open("w", encoding="utf-8") as f:
        f.write(render_checks_markdown(summary, config))

    return summary.to_json(), summary.passed


def run_sample_mode(config: dict[str, Any], run_dir: Path, *, render: bool = True) -> dict[str, Any]:
    """Run sample mode: draw one operation repeatedly and summarize it.

    Args:
        config: Resolved run configuration.
        run_dir: Run directory.
        render: Whether to write the histogram plot.

    Returns:
        Summary statistics dictionary.
    """
    artifacts_dir = run_dir / "artifacts"
    artifacts_dir.mkdir(parents=True, exist_ok=True)

    operation = config.get("operation", "next_double")
    engine = get_engine(config.get("engine", "mt19937"), config)
    values = sample_array(
        engine,
        operation,
        int(config.get("samples", 20000)),
        lo=int(config.get("lo", 1)),
        hi=int(config.get("hi", 6)),
    )

    # next_long samples are Python ints; store them losslessly as int64
    stored = values.astype(np.int64) if values.dtype == object else values
    np.save(artifacts_dir / "samples.npy", stored)

    stats: dict[str, Any] = {"operation": operation, **summarize(values)}
    with (artifacts_dir / "summary.json").open("w", encoding="utf-8") as f:
        json.dump(stats, f, indent=2, sort_keys=True)

    plots: dict[str, Path] = {}
    if render:
        path = plot_histogram(values, run_dir, title=f"{operation} ({engine!r})")
        if path is not None:
            plots["histogram"] = path

    with (artifacts_dir / "report.md").open("w", encoding="utf-8") as f:
        f.write(render_sample_markdown(stats, config, plots))

    return stats


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the runner.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 2 for checks failure).
    """
    args = parse_args(argv)
    configure_logging(args.log_level)
    config = resolve_config(args)

    run_dir = next_run_dir(args.workflow_dir)
    logger.info("Created run directory: %s", run_dir)

    meta: dict[str, Any] = {
        "created_at": datetime.now(UTC).isoformat(),
        "argv": sys.argv if argv is None else ["runner"] + list(argv),
        "mode": args.mode,
    }
    git_commit = try_get_git_commit()
    if git_commit:
        meta["git_commit"] = git_commit
    write_run_files(run_dir, meta=meta, config=config)

    if args.mode == "sample":
        stats = run_sample_mode(config, run_dir, render=not args.no_render)
        logger.info("Sampling completed: %s", run_dir.name)
        logger.info(
            "  %s: n=%d min=%r max=%r mean=%.6f",
            stats["operation"],
            stats["n"],
            stats["min"],
            stats["max"],
            stats["mean"],
        )
        return 0

    summary, checks_passed = run_checks_mode(config, run_dir)
    status = "PASSED" if checks_passed else "FAILED"
    logger.info("Checks completed: %s", run_dir.name)
    logger.info("  status: %s", status)
    logger.info("  num_passed: %d/%d", summary["num_passed"], summary["num_checks"])
    logger.info("  checks.md: %s", run_dir / "artifacts" / "checks.md")

    # Exit code 2 if checks failed (for CI)
    if not checks_passed:
        for result in summary["results"]:
            if not result["passed"]:
                logger.warning("Check failed: %s", result["name"])
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
