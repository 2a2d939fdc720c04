# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console rendering for warning lists produced by CLI commands."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from ..console import get_console_manager
from ..diffing import DiffStats
from ..models import LogWarning
from ..reporting import build_warning_table, format_locations
from .shared import OutputFormat


def emit_warnings(warnings: Sequence[LogWarning], *, output: OutputFormat, title: str | None = None) -> None:
    """Print ``warnings`` in the requested ``output`` format.

    ``plain`` output uses ``file:line:col: message`` so editors can load it as
    an error list.
    """

    if output is OutputFormat.NONE or not warnings:
        return
    if output is OutputFormat.TABLE:
        console = get_console_manager().get(color=True, emoji=False)
        console.print(build_warning_table(warnings, title=title))
        return
    for entry in format_locations(warnings):
        typer.echo(entry)


def describe_stats(stats: DiffStats) -> str:
    """Return a one-line summary of diff counters."""

    return (
        f"kept={stats.kept} excluded: by_key={stats.exact} "
        f"by_content={stats.content} by_message={stats.message}"
    )


__all__ = ["describe_stats", "emit_warnings"]
