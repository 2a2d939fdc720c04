# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command printing the changed-line map used for filtering."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..errors import ChangedRangesUnavailable
from ..git import GitChangedLines
from ..text import displayable
from .shared import CLIError, build_cli_logger, resolve_root


def ranges_command(
    upstream_ref: Annotated[
        str | None,
        typer.Argument(help="Reference to diff against (default: the branch upstream)."),
    ] = None,
    root: Annotated[Path | None, typer.Option("--root", help="Directory inside the repository.")] = None,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in status messages.")] = True,
) -> None:
    """Print the lines changed on HEAD since UPSTREAM_REF, one file per line."""

    logger = build_cli_logger(emoji=emoji)
    git = GitChangedLines()
    try:
        base = resolve_root(root)
        ref = upstream_ref or git.upstream_ref(base)
        if not ref:
            raise CLIError("tidydiff: no upstream ref given and the current branch has no upstream")
        snapshot = git.changed_ranges(ref, base)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except ChangedRangesUnavailable as exc:
        logger.fail(f"tidydiff: {exc}")
        raise typer.Exit(code=1) from exc

    for path, line_ranges in snapshot.ranges.items():
        spans = ", ".join(f"{entry.start}-{entry.end - 1}" for entry in line_ranges) or "-"
        typer.echo(f"{displayable(path)}: {spans}")
    logger.info(f"tidydiff: {len(snapshot.ranges)} changed file(s) since {ref} in {snapshot.repo_root}")


__all__ = ["ranges_command"]
