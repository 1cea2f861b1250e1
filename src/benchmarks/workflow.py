"""Run directory management.

This module provides utilities for creating run directories with
consistent naming and writing their metadata files.
"""

from __future__ import annotations

import json
import re
import subprocess
from pathlib import Path
from typing import Any

__all__ = [
    "next_run_dir",
    "write_run_files",
    "try_get_git_commit",
]

_RUN_DIR_PATTERN = re.compile(r"^run_(\d{4})$")


def next_run_dir(workflow_dir: Path) -> Path:
    """Create the next run directory with zero-padded naming.

    Creates directories:
    - workflow_dir/run_XXXX/
    - workflow_dir/run_XXXX/artifacts/

    Policy: next index after the maximum existing index, so gaps left by
    deleted runs are never reused.

    Args:
        workflow_dir: Parent directory for all runs.

    Returns:
        Path to the newly created run directory.

    Example:
        >>> next_run_dir(Path("workflow"))
        PosixPath('workflow/run_0000')
    """
    workflow_dir.mkdir(parents=True, exist_ok=True)

    max_index = -1
    for entry in workflow_dir.iterdir():
        if entry.is_dir():
            match = _RUN_DIR_PATTERN.match(entry.name)
            if match:
                max_index = max(max_index, int(match.group(1)))

    run_dir = workflow_dir / f"run_{max_index + 1:04d}"
    run_dir.mkdir(parents=True, exist_ok=True)
    (run_dir / "artifacts").mkdir(exist_ok=True)
    return run_dir


def write_run_files(
    run_dir: Path,
    *,
    meta: dict[str, Any],
    config: dict[str, Any],
) -> None:
    """Write run_dir/meta.json and run_dir/config.json."""
    with (run_dir / "meta.json").open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2, sort_keys=True)

    with (run_dir / "config.json").open("w", encoding="utf-8") as f:
        json.dump(config, f, indent=2, sort_keys=True)


def try_get_git_commit() -> str | None:
    """Attempt to get the current git commit hash.

    Returns:
        The git commit hash, or None if git is unavailable or not in a
        git repository.
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        pass
    return None
