# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the show, diff and ranges commands."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from tidydiff.cli import app
from tidydiff.cli.shared import build_cli_logger

OLD_LOG = """\
/repo/src/a.cpp:10:5: warning: unused variable 'x' [clang-diagnostic-unused-variable]
   10 |     int x;
"""

NEW_LOG = """\
/repo/src/a.cpp:10:5: warning: unused variable 'x' [clang-diagnostic-unused-variable]
   10 |     int x;
/repo/src/b.cpp:3:7: warning: variable 'y' is not initialized [cppcoreguidelines-init-variables]
    3 |   int y;
"""


def _write_logs(root: Path, *, new_log: str = NEW_LOG) -> None:
    (root / "old.log").write_text(OLD_LOG, encoding="utf-8")
    (root / "new.log").write_text(new_log, encoding="utf-8")


def test_show_lists_warnings(tmp_path: Path) -> None:
    _write_logs(tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["show", "new.log", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 0
    assert "/repo/src/a.cpp:10:5: unused variable 'x'" in result.output
    assert "/repo/src/b.cpp:3:7: variable 'y' is not initialized" in result.output
    assert "2 warning(s)" in result.output


def test_show_missing_log_fails(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["show", "absent.log", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "Failed to open" in result.output


def test_show_rejects_missing_root(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["show", "--root", str(tmp_path / "nope"), "--no-emoji"])

    assert result.exit_code == 2


def test_diff_writes_new_warnings(tmp_path: Path) -> None:
    _write_logs(tmp_path)
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["diff", "old.log", "new.log", "diff.log", "--no-filter", "--root", str(tmp_path), "--no-emoji"],
        env={"TIDYDIFF_DEBUG": ""},
    )

    assert result.exit_code == 0
    assert "/repo/src/b.cpp:3:7: variable 'y' is not initialized" in result.output
    assert "/repo/src/a.cpp:10:5" not in result.output
    assert (tmp_path / "diff.log").read_text(encoding="utf-8") == (
        "/repo/src/b.cpp:3:7: warning: variable 'y' is not initialized [cppcoreguidelines-init-variables]\n"
        "    3 |   int y;\n"
    )


def test_diff_fail_on_new(tmp_path: Path) -> None:
    _write_logs(tmp_path)
    runner = CliRunner()
    args = ["diff", "old.log", "new.log", "diff.log", "--no-filter", "--root", str(tmp_path), "--no-emoji"]

    assert runner.invoke(app, [*args, "--fail-on-new"], env={"TIDYDIFF_DEBUG": ""}).exit_code == 1

    _write_logs(tmp_path, new_log=OLD_LOG)
    result = runner.invoke(app, [*args, "--fail-on-new"], env={"TIDYDIFF_DEBUG": ""})
    assert result.exit_code == 0
    assert "0 new warning(s)" in result.output
    assert (tmp_path / "diff.log").read_text(encoding="utf-8") == ""


def test_diff_debug_traces_decisions(tmp_path: Path) -> None:
    _write_logs(tmp_path)
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["diff", "old.log", "new.log", "diff.log", "--no-filter", "--debug", "--root", str(tmp_path), "--no-emoji"],
    )

    assert result.exit_code == 0
    assert "excluded:by_key" in result.output
    assert "--- summary: old=1 new=2 -> kept=1" in result.output


def test_diff_missing_baseline_fails(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["diff", "missing.log", "new.log", "diff.log", "--no-filter", "--root", str(tmp_path), "--no-emoji"],
        env={"TIDYDIFF_DEBUG": ""},
    )

    assert result.exit_code == 1
    assert "Failed to open" in result.output
    assert not (tmp_path / "diff.log").exists()


def test_cli_logger_writes_debug_to_stderr() -> None:
    logger = build_cli_logger(emoji=False, debug=True)

    assert logger.console.stderr
    assert logger.debug_enabled
    assert not logger.use_emoji
