# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Restrict warnings to lines touched by a version-control diff."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final

from .models import ChangedRanges, LineRange, LogWarning

_DIFF_GIT_HEADER: Final[re.Pattern[str]] = re.compile(r"^diff --git a/.+ b/(?P<path>.+)$")
_HUNK_HEADER: Final[re.Pattern[str]] = re.compile(r"^@@ .*?\+(?P<start>\d+)(?:,(?P<count>\d*))? @@")
_PATH_SEPARATOR: Final[str] = "/"


class PrefixMatch(str, Enum):
    """Select how a path missing from the range map falls back to a prefix match."""

    FIRST = "first"
    LONGEST = "longest"


@dataclass(frozen=True, slots=True)
class RangeDecision:
    """Record whether a warning survived the changed-lines filter."""

    warning: LogWarning
    included: bool

    @property
    def label(self) -> str:
        """Return the trace label describing this decision."""

        return "in_changed_lines" if self.included else "dropped:not_in_changed_lines"


@dataclass(frozen=True, slots=True)
class RangeFilterResult:
    """Warnings kept by the filter alongside every individual decision."""

    kept: tuple[LogWarning, ...]
    decisions: tuple[RangeDecision, ...]


def parse_unified_diff(diff_text: str) -> dict[str, tuple[LineRange, ...]]:
    """Return new-side changed line ranges keyed by repository-relative path.

    Expects zero-context output (``git diff -U0``). Lines are separated by
    ``\\n`` only, so form feeds inside content lines are kept as data. A file
    header without hunks (renames, mode or binary changes) yields an entry with
    no ranges.

    Args:
        diff_text: Unified diff produced by ``git diff``.

    Returns:
        dict[str, tuple[LineRange, ...]]: Ranges per file in diff order.
    """

    collected: dict[str, list[LineRange]] = {}
    current: str | None = None
    for entry in diff_text.split("\n"):
        raw_line = entry.removesuffix("\r")
        header = _DIFF_GIT_HEADER.match(raw_line)
        if header:
            current = header.group("path") or None
            if current is not None:
                collected.setdefault(current, [])
            continue
        if current is None:
            continue
        hunk = _HUNK_HEADER.match(raw_line)
        if hunk:
            count_text = hunk.group("count")
            count = int(count_text) if count_text else 1
            collected[current].append(LineRange(start=int(hunk.group("start")), count=count))
    return {path: tuple(ranges) for path, ranges in collected.items()}


def _normalize_separators(path: str) -> str:
    return path.replace("\\", _PATH_SEPARATOR)


def relative_to_root(path: str, repo_root: str | None) -> str:
    """Return ``path`` relative to ``repo_root`` when it lives underneath it.

    Args:
        path: Path reported by the analysis tool, absolute or relative.
        repo_root: Repository top-level directory, or ``None``.

    Returns:
        str: POSIX-style path relative to the root, or ``path`` unchanged (with
        separators normalised) when it is outside the root.
    """

    normalized = _normalize_separators(path)
    if not repo_root:
        return normalized
    root = _normalize_separators(repo_root).rstrip(_PATH_SEPARATOR)
    if not root:
        return normalized.lstrip(_PATH_SEPARATOR)
    if normalized == root:
        return ""
    prefix = root + _PATH_SEPARATOR
    if normalized.startswith(prefix):
        return normalized[len(prefix) :].lstrip(_PATH_SEPARATOR)
    return normalized


def lookup_ranges(
    relative_path: str,
    ranges: ChangedRanges,
    *,
    strategy: PrefixMatch = PrefixMatch.FIRST,
) -> Sequence[LineRange] | None:
    """Return the ranges recorded for ``relative_path``.

    When the path is not a key of ``ranges``, any key that is a string prefix of
    the path (or the other way round) is accepted. ``PrefixMatch.FIRST`` keeps
    the first such key in map order; ``PrefixMatch.LONGEST`` the longest one.

    Args:
        relative_path: Repository-relative path of the warning.
        ranges: Changed-range map.
        strategy: Tie-breaking rule for the prefix fallback.

    Returns:
        Sequence[LineRange] | None: Matching ranges, or ``None`` when the file
        has no known changes.
    """

    direct = ranges.get(relative_path)
    if direct is not None:
        return direct
    best: str | None = None
    for key in ranges:
        if not (relative_path.startswith(key) or key.startswith(relative_path)):
            continue
        if strategy is PrefixMatch.FIRST:
            return ranges[key]
        if best is None or len(key) > len(best):
            best = key
    return ranges[best] if best is not None else None


def is_included(
    path: str,
    line: int,
    ranges: ChangedRanges | None,
    repo_root: str | None,
    *,
    strategy: PrefixMatch = PrefixMatch.FIRST,
) -> bool:
    """Return whether a warning at ``path:line`` lies on a changed line.

    Args:
        path: File path reported for the warning.
        line: 1-based line number of the warning.
        ranges: Changed-range map, or ``None`` to disable filtering.
        repo_root: Repository root used to relativise ``path``.
        strategy: Tie-breaking rule for the prefix fallback.

    Returns:
        bool: ``True`` when filtering is disabled or the line was changed.
        Files without a matching entry are excluded.
    """

    if ranges is None:
        return True
    matched = lookup_ranges(relative_to_root(path, repo_root), ranges, strategy=strategy)
    if matched is None:
        return False
    return any(entry.contains(line) for entry in matched)


def filter_warnings(
    warnings: Iterable[LogWarning],
    ranges: ChangedRanges | None,
    repo_root: str | None,
    *,
    strategy: PrefixMatch = PrefixMatch.FIRST,
) -> RangeFilterResult:
    """Apply :func:`is_included` to every warning, preserving order.

    Args:
        warnings: Warnings to filter.
        ranges: Changed-range map, or ``None`` to keep everything.
        repo_root: Repository root used to relativise warning paths.
        strategy: Tie-breaking rule for the prefix fallback.

    Returns:
        RangeFilterResult: Kept warnings and one decision per input warning.
    """

    decisions = tuple(
        RangeDecision(
            warning=warning,
            included=is_included(warning.file_path, warning.line, ranges, repo_root, strategy=strategy),
        )
        for warning in warnings
    )
    kept = tuple(decision.warning for decision in decisions if decision.included)
    return RangeFilterResult(kept=kept, decisions=decisions)


__all__ = [
    "PrefixMatch",
    "RangeDecision",
    "RangeFilterResult",
    "filter_warnings",
    "is_included",
    "lookup_ranges",
    "parse_unified_diff",
    "relative_to_root",
]
