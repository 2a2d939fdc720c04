# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Serialise and present warning sets."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final

from rich import box
from rich.table import Table
from rich.text import Text

from .diffing import DiffStats
from .errors import OutputWriteError
from .models import LogWarning
from .text import TEXT_ENCODING, TEXT_ERRORS, displayable

TRACE_PREFIX: Final[str] = "[tidydiff]"
_SHORT_PATH_LIMIT: Final[int] = 40
_SHORT_MESSAGE_LIMIT: Final[int] = 52
_ELLIPSIS: Final[str] = "..."


def format_diff_log(warnings: Iterable[LogWarning]) -> str:
    """Return the log text for ``warnings``: each header and its continuation lines.

    Every line is terminated with ``\\n`` so the output parses back into the
    same warnings. Undecodable input bytes are carried as escaped surrogates
    and only become bytes again in :func:`write_diff_log`.
    """

    return "".join(f"{line}\n" for warning in warnings for line in warning.raw_lines)


def write_diff_log(path: Path, warnings: Iterable[LogWarning]) -> Path:
    """Write ``warnings`` to ``path`` in log format.

    Args:
        path: Destination file; parent directories must exist.
        warnings: Warnings to serialise in order.

    Returns:
        Path: The written path.

    Raises:
        OutputWriteError: When the file cannot be written.
    """

    try:
        with path.open("w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="\n") as handle:
            handle.write(format_diff_log(warnings))
    except OSError as exc:
        raise OutputWriteError(path, exc.strerror or str(exc)) from exc
    return path


def format_location(warning: LogWarning) -> str:
    """Return ``file:line:col: message`` for editor error lists, safe to print."""

    return displayable(f"{warning.file_path}:{warning.line}:{warning.column}: {warning.message}")


def format_locations(warnings: Iterable[LogWarning]) -> list[str]:
    """Return one navigable ``file:line:col: message`` entry per warning."""

    return [format_location(warning) for warning in warnings]


def build_warning_table(warnings: Sequence[LogWarning], *, title: str | None = None) -> Table:
    """Create a Rich table listing ``warnings`` with their locations.

    Args:
        warnings: Warnings to list.
        title: Optional table caption.

    Returns:
        Table: Table with file, line, column and message columns.
    """

    table = Table(title=title, box=box.SIMPLE, pad_edge=False, expand=False)
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Message")
    for warning in warnings:
        table.add_row(
            displayable(warning.file_path),
            str(warning.line),
            str(warning.column),
            Text(displayable(warning.message)),
        )
    return table


def debug_label(warning: LogWarning) -> tuple[str, str]:
    """Return a short ``basename:line`` location and truncated message for tracing."""

    path = displayable(warning.file_path).replace("\\", "/")
    short_path = path.rsplit("/", 1)[-1] or path
    if len(short_path) > _SHORT_PATH_LIMIT:
        short_path = _ELLIPSIS + short_path[-(_SHORT_PATH_LIMIT - len(_ELLIPSIS)) :]
    short_message = displayable(warning.message).strip()[:_SHORT_MESSAGE_LIMIT]
    if len(short_message) >= _SHORT_MESSAGE_LIMIT:
        short_message += _ELLIPSIS
    return f"{short_path}:{warning.line}", short_message


def format_trace(warning: LogWarning, decision: str) -> str:
    """Return a trace line recording ``decision`` for ``warning``."""

    location, short_message = debug_label(warning)
    return f"{TRACE_PREFIX} {location} | {decision} | {short_message}"


def format_diff_summary(*, baseline_count: int, candidate_count: int, stats: DiffStats) -> str:
    """Return the trace line summarising a baseline/candidate diff."""

    return (
        f"{TRACE_PREFIX} --- summary: old={baseline_count} new={candidate_count} -> kept={stats.kept} "
        f"(excluded: by_key={stats.exact} by_content={stats.content} by_message={stats.message})"
    )


def format_filter_summary(*, upstream_ref: str, kept: int) -> str:
    """Return the trace line summarising the changed-lines filter."""

    return f"{TRACE_PREFIX} --- after changed-lines filter (ref={upstream_ref}): {kept} kept"


__all__ = [
    "TRACE_PREFIX",
    "build_warning_table",
    "debug_label",
    "format_diff_log",
    "format_diff_summary",
    "format_filter_summary",
    "format_location",
    "format_locations",
    "format_trace",
    "write_diff_log",
]
