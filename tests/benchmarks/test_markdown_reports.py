from __future__ import annotations

from pathlib import Path

import numpy as np

from benchmarks.checks import CheckResult, ChecksSummary, run_checks
from benchmarks.plotting import plot_histogram
from benchmarks.report import render_checks_markdown, render_sample_markdown


def test_render_checks_markdown_for_real_summary() -> None:
    config = {"engine": "pcg32", "seed": 3, "samples": 1000, "lo": 1, "hi": 6, "z": 5.0}
    summary = run_checks(config)

    md = render_checks_markdown(summary, config)

    assert md.startswith("# Uniform Engine Check Report")
    assert "- **Engine**: pcg32" in md
    assert "- **Choose range**: [1, 6]" in md
    for result in summary.results:
        assert f"| {result.name} |" in md
    assert f"**{len(summary.results)}/{len(summary.results)} checks passed.**" in md


def test_render_checks_markdown_covers_failure_skip_and_fallback() -> None:
    summary = ChecksSummary(
        passed=False,
        results=[
            CheckResult(
                name="choose_frequencies",
                passed=False,
                details={
                    "lo": 1,
                    "hi": 6,
                    "observed_min": 1,
                    "observed_max": 7,
                    "chi_square": 99.0,
                    "critical": 20.0,
                },
            ),
            CheckResult(
                name="degenerate_ranges",
                passed=False,
                details={"repeats": 5, "failures": ["choose(0, 0) -> 1"]},
            ),
            CheckResult(name="custom_check", passed=True, details={"foo": "bar", "error": "x"}),
            CheckResult(
                name="double_mean",
                passed=True,
                details={"skipped": True, "reason": "no samples requested"},
            ),
        ],
    )
    config = {"engine": {"class": "engines.pcg32:PCG32"}, "seed": None}

    md = render_checks_markdown(summary, config)

    assert "FAILED" in md
    assert "- **Engine**: engines.pcg32:PCG32" in md
    assert "range=[1, 7] in [1, 6], chi2=99.000 (critical=20.000)" in md
    assert "choose(0, 0) -> 1" in md
    assert "| custom_check | ✅ | foo=bar |" in md
    assert "| double_mean | ⏭️ Skipped | no samples requested |" in md
    # skipped checks count as passed, matching ChecksSummary.to_json
    assert "**2/4 checks passed.**" in md
    assert summary.to_json()["num_passed"] == 2


def test_render_sample_markdown_with_plot(tmp_path: Path) -> None:
    stats = {"operation": "choose", "n": 3, "min": 1.0, "max": 6.0, "mean": 3.5, "std": 1.0}
    config = {"engine": "mt19937", "seed": 0, "operation": "choose", "lo": 1, "hi": 6}
    plots = {"histogram": tmp_path / "plots" / "histogram.png"}

    md = render_sample_markdown(stats, config, plots)

    assert md.startswith("# Sample Report — choose")
    assert "- **Range**: [1, 6]" in md
    assert "| mean | 3.5 |" in md
    assert "![histogram](plots/histogram.png)" in md


def test_render_sample_markdown_without_plots() -> None:
    md = render_sample_markdown({"n": 0}, {"operation": "raw"})
    assert "## Plots" not in md
    assert "- **Range**" not in md


def test_plot_histogram_writes_png(tmp_path: Path) -> None:
    values = np.random.default_rng(0).random(500)
    path = plot_histogram(values, tmp_path, title="raw")
    assert path == tmp_path / "plots" / "histogram.png"
    assert path.exists()
    assert path.stat().st_size > 0


def test_plot_histogram_skips_empty(tmp_path: Path) -> None:
    assert plot_histogram(np.array([]), tmp_path, title="empty") is None
    assert not (tmp_path / "plots").exists()
