# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from tidydiff.console import get_console_manager


@dataclass
class FakeGit:
    """Record git invocations and answer them from canned responses."""

    toplevel: str | None = None
    upstream: str | None = None
    diff_output: str = ""
    diff_returncode: int = 0
    diff_stderr: str = ""
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def __call__(self, cmd: Sequence[str], cwd: Path) -> subprocess.CompletedProcess[str]:
        del cwd
        args = tuple(cmd)
        self.calls.append(args)
        if args[1:3] == ("rev-parse", "--show-toplevel"):
            return self._answer(args, self.toplevel)
        if args[1:3] == ("rev-parse", "--abbrev-ref"):
            return self._answer(args, self.upstream)
        if args[1] == "diff":
            return subprocess.CompletedProcess(
                args=list(args),
                returncode=self.diff_returncode,
                stdout=self.diff_output,
                stderr=self.diff_stderr,
            )
        return subprocess.CompletedProcess(args=list(args), returncode=1, stdout="", stderr="unsupported")

    @staticmethod
    def _answer(args: tuple[str, ...], value: str | None) -> subprocess.CompletedProcess[str]:
        if value is None:
            return subprocess.CompletedProcess(args=list(args), returncode=128, stdout="", stderr="fatal")
        return subprocess.CompletedProcess(args=list(args), returncode=0, stdout=f"{value}\n", stderr="")


@pytest.fixture
def fake_git() -> FakeGit:
    """Return a git runner double with no repository configured."""

    return FakeGit()


@pytest.fixture(autouse=True)
def _reset_consoles() -> None:
    """Drop cached Rich consoles between tests."""

    get_console_manager().clear()


@pytest.fixture
def sample_log() -> str:
    """Return a small clang-tidy log with two warnings and leading noise."""

    return (
        "[1/2] Processing file /repo/src/a.cpp.\n"
        "/repo/src/a.cpp:10:5: warning: unused variable 'x' [clang-diagnostic-unused-variable]\n"
        "   10 |     int x;\n"
        "      |         ^\n"
        "/repo/src/b.cpp:3:1: warning: function 'f' has no return [bugprone-x]\n"
        "/repo/src/b.cpp:1:1: note: declared here\n"
        "2 warnings generated.\n"
    )
