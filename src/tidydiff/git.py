# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git queries feeding the changed-lines filter."""

from __future__ import annotations

import subprocess  # nosec B404 - only used for CompletedProcess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .changed_ranges import parse_unified_diff
from .errors import ChangedRangesUnavailable
from .models import LineRange
from .process import CommandOptions, run_command
from .text import displayable

GitRunner = Callable[[Sequence[str], Path], subprocess.CompletedProcess[str]]

GIT_EXECUTABLE: Final[str] = "git"
UPSTREAM_SPEC: Final[str] = "@{upstream}"
COMMAND_NOT_FOUND: Final[int] = 127
GIT_TIMEOUT_SECONDS: Final[float] = 120.0


@dataclass(frozen=True, slots=True)
class ChangedRangeSnapshot:
    """Changed line ranges of ``<ref>...HEAD`` and the repository they belong to."""

    upstream_ref: str
    repo_root: Path
    ranges: Mapping[str, tuple[LineRange, ...]] = field(default_factory=dict)


class GitChangedLines:
    """Ask git which lines changed since an upstream reference."""

    def __init__(self, *, runner: GitRunner | None = None) -> None:
        """Create the query helper.

        Args:
            runner: Optional command runner used to execute git commands. A
                default based on :func:`run_command` is used when omitted.
        """

        self._runner = runner or self._default_runner

    def repo_root(self, cwd: Path) -> Path | None:
        """Return the top-level directory of the repository containing ``cwd``."""

        completed = self._runner([GIT_EXECUTABLE, "rev-parse", "--show-toplevel"], cwd)
        root = (completed.stdout or "").strip()
        if completed.returncode != 0 or not root:
            return None
        return Path(root)

    def upstream_ref(self, cwd: Path) -> str | None:
        """Return the current branch's upstream (e.g. ``origin/main``), if configured."""

        completed = self._runner([GIT_EXECUTABLE, "rev-parse", "--abbrev-ref", UPSTREAM_SPEC], cwd)
        ref = (completed.stdout or "").strip()
        if completed.returncode != 0 or not ref:
            return None
        return ref

    def changed_ranges(self, upstream_ref: str, cwd: Path) -> ChangedRangeSnapshot:
        """Return new-side line ranges changed on ``HEAD`` since it forked from ``upstream_ref``.

        Args:
            upstream_ref: Reference to compare against with a three-dot diff.
            cwd: Directory inside the repository.

        Returns:
            ChangedRangeSnapshot: Ranges keyed by repository-relative path.

        Raises:
            ChangedRangesUnavailable: When ``cwd`` is not in a git repository or
                ``git diff`` fails (for instance because the ref is unknown).
        """

        root = self.repo_root(cwd)
        if root is None:
            raise ChangedRangesUnavailable(
                f'not a git repo or invalid upstream ref "{upstream_ref}"',
                upstream_ref=upstream_ref,
            )
        completed = self._runner(
            [GIT_EXECUTABLE, "diff", f"{upstream_ref}...HEAD", "--no-color", "-U0"],
            cwd,
        )
        if completed.returncode != 0:
            detail = displayable(completed.stderr or "").strip() or f"git diff exited with {completed.returncode}"
            raise ChangedRangesUnavailable(
                f'not a git repo or invalid upstream ref "{upstream_ref}": {detail}',
                upstream_ref=upstream_ref,
            )
        return ChangedRangeSnapshot(
            upstream_ref=upstream_ref,
            repo_root=root,
            ranges=parse_unified_diff(completed.stdout or ""),
        )

    @staticmethod
    def _default_runner(cmd: Sequence[str], cwd: Path) -> subprocess.CompletedProcess[str]:
        """Execute ``cmd`` in ``cwd`` without raising on failure.

        Args:
            cmd: Git command to execute.
            cwd: Working directory for the command.

        Returns:
            subprocess.CompletedProcess[str]: Completed process; a missing git
            executable is reported with exit status 127 and a timeout with 124.
        """

        try:
            return run_command(cmd, options=CommandOptions(cwd=cwd, timeout=GIT_TIMEOUT_SECONDS))
        except FileNotFoundError as exc:
            return subprocess.CompletedProcess(args=list(cmd), returncode=COMMAND_NOT_FOUND, stdout="", stderr=str(exc))


def resolve_upstream_ref(cwd: Path, *, runner: GitRunner | None = None) -> str | None:
    """Return the upstream reference of the branch checked out in ``cwd``."""

    return GitChangedLines(runner=runner).upstream_ref(cwd)


def collect_changed_ranges(upstream_ref: str, cwd: Path, *, runner: GitRunner | None = None) -> ChangedRangeSnapshot:
    """Return the changed-range map for ``upstream_ref...HEAD``.

    Raises:
        ChangedRangesUnavailable: When git cannot produce the diff.
    """

    return GitChangedLines(runner=runner).changed_ranges(upstream_ref, cwd)


__all__ = [
    "GIT_TIMEOUT_SECONDS",
    "ChangedRangeSnapshot",
    "GitChangedLines",
    "GitRunner",
    "collect_changed_ranges",
    "resolve_upstream_ref",
]
