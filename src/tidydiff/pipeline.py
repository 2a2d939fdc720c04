# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the parse, diff, changed-lines filter and write stages end to end."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .changed_ranges import RangeFilterResult, filter_warnings
from .config import DiffSettings
from .diffing import DiffResult, diff_warnings
from .git import ChangedRangeSnapshot, GitChangedLines
from .logging import trace as emit_trace
from .models import LogWarning
from .parsers import parse_log
from .reporting import format_diff_summary, format_filter_summary, format_trace, write_diff_log

TraceSink = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class DiffRun:
    """Everything produced by one :func:`run_diff` invocation."""

    settings: DiffSettings
    baseline: tuple[LogWarning, ...]
    candidate: tuple[LogWarning, ...]
    diff: DiffResult
    warnings: tuple[LogWarning, ...]
    out_log: Path
    snapshot: ChangedRangeSnapshot | None = None
    range_filter: RangeFilterResult | None = None

    @property
    def filtered(self) -> bool:
        """Return ``True`` when the changed-lines filter was applied."""

        return self.range_filter is not None

    @property
    def upstream_ref(self) -> str | None:
        """Return the reference the changed lines were computed against."""

        return self.snapshot.upstream_ref if self.snapshot is not None else None


def resolve_filter_ref(settings: DiffSettings, cwd: Path, git: GitChangedLines) -> str | None:
    """Return the reference used for changed-line filtering, if any.

    An explicit ``upstream_ref`` wins; otherwise the current branch's upstream
    is used. ``None`` disables filtering.
    """

    if not settings.filter_changed_lines:
        return None
    if settings.upstream_ref:
        return settings.upstream_ref
    return git.upstream_ref(cwd)


def run_diff(
    settings: DiffSettings,
    *,
    cwd: Path,
    git: GitChangedLines | None = None,
    trace: TraceSink | None = None,
) -> DiffRun:
    """Diff ``settings.new_log`` against ``settings.old_log`` and write the result.

    Args:
        settings: Resolved run settings.
        cwd: Directory used for git queries.
        git: Git query helper; a default instance is created when omitted.
        trace: Receiver for per-warning decision lines. Defaults to stderr
            output when ``settings.debug`` is set, otherwise tracing is off.

    Returns:
        DiffRun: Parsed inputs, diff statistics and the final warning list.

    Raises:
        LogReadError: When either log cannot be read.
        ChangedRangesUnavailable: When filtering was requested but git could
            not report the changed lines.
        OutputWriteError: When the output log cannot be written.
    """

    sink = trace if trace is not None else (emit_trace if settings.debug else None)
    git_lines = git or GitChangedLines()

    baseline = parse_log(settings.old_log).unwrap()
    candidate = parse_log(settings.new_log).unwrap()

    diff = diff_warnings(baseline, candidate)
    if sink is not None:
        for decision in diff.decisions:
            sink(format_trace(decision.warning, decision.tier.label))
        sink(format_diff_summary(baseline_count=len(baseline), candidate_count=len(candidate), stats=diff.stats))

    warnings = diff.novel
    snapshot: ChangedRangeSnapshot | None = None
    range_filter: RangeFilterResult | None = None
    upstream_ref = resolve_filter_ref(settings, cwd, git_lines)
    if upstream_ref:
        snapshot = git_lines.changed_ranges(upstream_ref, cwd)
        range_filter = filter_warnings(
            warnings,
            snapshot.ranges,
            str(snapshot.repo_root),
            strategy=settings.prefix_match,
        )
        warnings = range_filter.kept
        if sink is not None:
            for range_decision in range_filter.decisions:
                sink(format_trace(range_decision.warning, range_decision.label))
            sink(format_filter_summary(upstream_ref=upstream_ref, kept=len(warnings)))

    out_log = write_diff_log(settings.out_log, warnings)
    return DiffRun(
        settings=settings,
        baseline=baseline,
        candidate=candidate,
        diff=diff,
        warnings=warnings,
        out_log=out_log,
        snapshot=snapshot,
        range_filter=range_filter,
    )


__all__ = [
    "DiffRun",
    "TraceSink",
    "resolve_filter_ref",
    "run_diff",
]
