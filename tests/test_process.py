# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess helpers used by git queries."""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from tidydiff.git import GitChangedLines
from tidydiff.models import LineRange
from tidydiff.process import TIMEOUT_RETURNCODE, CommandOptions, run_command


def test_run_command_captures_text(tmp_path: Path) -> None:
    completed = run_command(
        [sys.executable, "-c", "import os; print(os.getcwd())"],
        options=CommandOptions(cwd=tmp_path),
    )

    assert completed.returncode == 0
    assert Path(completed.stdout.strip()).resolve() == tmp_path.resolve()


def test_run_command_returns_failure_status() -> None:
    completed = run_command([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(2)"])

    assert completed.returncode == 2
    assert completed.stderr == "boom"


def test_run_command_keeps_undecodable_bytes() -> None:
    completed = run_command(
        [sys.executable, "-c", r"import sys; sys.stdout.buffer.write(b'+// caf\xe9\n')"],
    )

    assert completed.returncode == 0
    assert completed.stdout.encode("utf-8", errors="surrogateescape") == b"+// caf\xe9\n"


def test_run_command_timeout_maps_to_status() -> None:
    completed = run_command(
        [sys.executable, "-c", "import time; time.sleep(5)"],
        options=CommandOptions(timeout=0.2),
    )

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert "timed out" in completed.stderr


def test_missing_executable_is_reported() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["tidydiff-no-such-tool"])


def test_default_git_runner_survives_missing_git(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PATH", str(tmp_path))

    assert GitChangedLines().repo_root(tmp_path) is None


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_default_git_runner_reads_latin1_changes(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "config", "user.email", "dev@example.com")
    _git(repo, "config", "user.name", "Dev")
    _git(repo, "config", "commit.gpgsign", "false")
    (repo / "a.cpp").write_bytes(b"int main() {}\n")
    _git(repo, "add", "a.cpp")
    _git(repo, "commit", "-q", "-m", "base")
    _git(repo, "tag", "base")
    (repo / "a.cpp").write_bytes(b"int main() {}\n// caf\xe9\n")
    _git(repo, "commit", "-q", "-am", "latin-1 comment")

    snapshot = GitChangedLines().changed_ranges("base", repo)

    assert snapshot.ranges == {"a.cpp": (LineRange(start=2, count=1),)}
