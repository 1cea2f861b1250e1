"""Benchmarks module for checking and sampling uniform engines.

This package provides utilities for exercising engines end to end:

- config: JSON config loading and key=value overrides
- registry: Engine factories by name
- metrics: Sampling and uniformity statistics
- checks: Conformance check suite
- report: Markdown report generation
- plotting: Histogram plots
- workflow: Run directory management
- runner: CLI for running checks and sampling
"""

from __future__ import annotations

from benchmarks.checks import CheckResult, ChecksSummary, run_checks
from benchmarks.config import DEFAULT_CONFIG, apply_overrides, build_config
from benchmarks.metrics import (
    chi_square_critical,
    chi_square_statistic,
    frequency_table,
    sample_array,
    summarize,
)
from benchmarks.registry import ENGINES, get_engine, register_engine
from benchmarks.report import render_checks_markdown, render_sample_markdown
from benchmarks.workflow import next_run_dir, try_get_git_commit, write_run_files

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "apply_overrides",
    "build_config",
    # Registry
    "ENGINES",
    "get_engine",
    "register_engine",
    # Metrics
    "sample_array",
    "frequency_table",
    "chi_square_statistic",
    "chi_square_critical",
    "summarize",
    # Checks
    "CheckResult",
    "ChecksSummary",
    "run_checks",
    # Report
    "render_checks_markdown",
    "render_sample_markdown",
    # Workflow
    "next_run_dir",
    "write_run_files",
    "try_get_git_commit",
]
