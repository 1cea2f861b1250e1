"""Markdown report generation for checks and sample runs.

This module provides functions to render check results and sample-mode
summaries as human-readable Markdown reports with embedded plots.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from benchmarks.checks import ChecksSummary

__all__ = [
    "render_checks_markdown",
    "render_sample_markdown",
]


def _engine_label(engine: Any) -> str:
    if isinstance(engine, dict):
        return str(engine.get("class", "custom"))
    return str(engine)


def _format_metrics(name: str, details: dict[str, Any]) -> str:
    """Format the key metrics of one check for the results table."""
    if name == "open_unit_interval":
        parts = []
        for operation in ("raw", "next_double", "next_float"):
            op = details.get(operation, {})
            parts.append(f"{operation}=[{op.get('min', 0):.3g}, {op.get('max', 0):.12f}]")
        return ", ".join(parts)
    if name == "double_mean":
        return (
            f"mean={details.get('mean', 0):.6f}, "
            f"deviation={details.get('deviation', 0):.6f} "
            f"(tolerance={details.get('tolerance', 0):.6f})"
        )
    if name == "choose_frequencies":
        metrics = (
            f"range=[{details.get('observed_min')}, {details.get('observed_max')}] "
            f"in [{details.get('lo')}, {details.get('hi')}]"
        )
        if "chi_square" in details:
            metrics += (
                f", chi2={details['chi_square']:.3f} "
                f"(critical={details.get('critical', 0):.3f})"
            )
        return metrics
    if name == "degenerate_ranges":
        failures = details.get("failures", [])
        return "; ".join(failures) if failures else f"repeats={details.get('repeats', 0)}"
    if name == "replay_determinism":
        mismatched = details.get("mismatched", [])
        return f"seed={details.get('seed')}, mismatched={', '.join(mismatched) or 'none'}"
    if name in ("boundary_words", "long_concatenation"):
        failed = [case for case, info in details.items() if not info.get("passed", False)]
        return f"cases={len(details)}, failed={', '.join(failed) or 'none'}"
    # Generic fallback
    return ", ".join(f"{k}={v}" for k, v in details.items() if k != "error")


def render_checks_markdown(summary: ChecksSummary, config: dict[str, Any]) -> str:
    """Render checks summary as Markdown.

    Args:
        summary: ChecksSummary from run_checks().
        config: Configuration dictionary.

    Returns:
        Markdown string.
    """
    lines: list[str] = []

    # Title
    status = "✅ PASSED" if summary.passed else "❌ FAILED"
    lines.append(f"# Uniform Engine Check Report — {status}")
    lines.append("")

    # Config summary
    lines.append("## Configuration")
    lines.append("")
    lines.append(f"- **Engine**: {_engine_label(config.get('engine', 'mt19937'))}")
    lines.append(f"- **Seed**: {config.get('seed')}")
    lines.append(f"- **Samples**: {config.get('samples', 20000)}")
    lines.append(f"- **Choose range**: [{config.get('lo', 1)}, {config.get('hi', 6)}]")
    lines.append(f"- **z-score**: {config.get('z', 4.0)}")
    lines.append("")

    # Results table
    lines.append("## Check Results")
    lines.append("")
    lines.append("| Check | Status | Key Metrics |")
    lines.append("|-------|--------|-------------|")

    for result in summary.results:
        details = result.details

        # Skipped checks get minimal info
        if details.get("skipped"):
            lines.append(f"| {result.name} | ⏭️ Skipped | {details.get('reason', 'N/A')} |")
            continue

        status_icon = "✅" if result.passed else "❌"
        metrics = _format_metrics(result.name, details)
        lines.append(f"| {result.name} | {status_icon} | {metrics} |")

    lines.append("")

    # Summary
    num_passed = sum(1 for r in summary.results if r.passed)
    lines.append("## Summary")
    lines.append("")
    lines.append(f"**{num_passed}/{len(summary.results)} checks passed.**")
    lines.append("")

    return "\n".join(lines)


def render_sample_markdown(
    stats: dict[str, Any],
    config: dict[str, Any],
    plots: dict[str, Path] | None = None,
) -> str:
    """Render a sample-mode summary as Markdown.

    Args:
        stats: Summary statistics from benchmarks.metrics.summarize().
        config: Configuration dictionary.
        plots: Mapping of plot names to paths, linked relative to the run dir.

    Returns:
        Markdown string.
    """
    operation = config.get("operation", "next_double")
    lines: list[str] = []
    lines.append(f"# Sample Report — {operation}")
    lines.append("")
    lines.append("## Configuration")
    lines.append("")
    lines.append(f"- **Engine**: {_engine_label(config.get('engine', 'mt19937'))}")
    lines.append(f"- **Seed**: {config.get('seed')}")
    lines.append(f"- **Operation**: {operation}")
    if operation == "choose":
        lines.append(f"- **Range**: [{config.get('lo', 1)}, {config.get('hi', 6)}]")
    lines.append("")

    lines.append("## Statistics")
    lines.append("")
    lines.append("| Statistic | Value |")
    lines.append("|-----------|-------|")
    for key in ("n", "min", "max", "mean", "std"):
        if key in stats:
            lines.append(f"| {key} | {stats[key]} |")
    lines.append("")

    if plots:
        lines.append("## Plots")
        lines.append("")
        for name, path in plots.items():
            lines.append(f"![{name}]({path.parent.name}/{path.name})")
        lines.append("")

    return "\n".join(lines)
