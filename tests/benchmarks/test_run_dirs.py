from __future__ import annotations

import json
import subprocess
from pathlib import Path

import pytest

import benchmarks.workflow as workflow_module
from benchmarks.workflow import next_run_dir, try_get_git_commit, write_run_files


def test_next_run_dir_starts_at_zero(tmp_path: Path) -> None:
    run_dir = next_run_dir(tmp_path / "workflow")
    assert run_dir.name == "run_0000"
    assert (run_dir / "artifacts").is_dir()


def test_next_run_dir_uses_max_index(tmp_path: Path) -> None:
    (tmp_path / "run_0003").mkdir()
    (tmp_path / "run_0001").mkdir()
    (tmp_path / "run_abcd").mkdir()
    (tmp_path / "run_0009.txt").write_text("not a dir", encoding="utf-8")

    assert next_run_dir(tmp_path).name == "run_0004"


def test_write_run_files(tmp_path: Path) -> None:
    write_run_files(tmp_path, meta={"mode": "checks"}, config={"seed": 1})
    assert json.loads((tmp_path / "meta.json").read_text(encoding="utf-8")) == {"mode": "checks"}
    assert json.loads((tmp_path / "config.json").read_text(encoding="utf-8")) == {"seed": 1}


def test_try_get_git_commit_without_git(monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing(*args: object, **kwargs: object) -> None:
        raise FileNotFoundError("git")

    monkeypatch.setattr(workflow_module.subprocess, "run", _missing)
    assert try_get_git_commit() is None


def test_try_get_git_commit_outside_repo(monkeypatch: pytest.MonkeyPatch) -> None:
    def _failed(*args: object, **kwargs: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(args=["git"], returncode=128, stdout="", stderr="")

    monkeypatch.setattr(workflow_module.subprocess, "run", _failed)
    assert try_get_git_commit() is None
