"""Plotting utilities for sample visualization.

Uses matplotlib only (no seaborn), with the non-interactive Agg backend so
plots can be written from CI and headless machines.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

__all__ = [
    "plot_histogram",
]


def _ensure_plots_dir(out_dir: Path) -> Path:
    plots_dir = out_dir / "plots"
    plots_dir.mkdir(parents=True, exist_ok=True)
    return plots_dir


def plot_histogram(
    values: np.ndarray,
    out_dir: Path,
    *,
    title: str,
    bins: int = 50,
) -> Path | None:
    """Plot a histogram of sampled values.

    Args:
        values: 1D sample array.
        out_dir: Output directory (the plot goes to out_dir/plots/histogram.png).
        title: Plot title.
        bins: Number of histogram bins.

    Returns:
        Path to the written plot, or None when values is empty.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return None

    plots_dir = _ensure_plots_dir(out_dir)
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist(arr, bins=bins, edgecolor="black", alpha=0.7)
    # Flat reference line at the expected count per bin
    ax.axhline(arr.size / bins, color="red", linestyle="--", linewidth=1, label="uniform")
    ax.set_xlabel("Value")
    ax.set_ylabel("Count")
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)
    path = plots_dir / "histogram.png"
    fig.savefig(path, dpi=100, bbox_inches="tight")
    plt.close(fig)
    return path
