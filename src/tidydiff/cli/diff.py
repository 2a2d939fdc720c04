# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command diffing a new warning log against a baseline."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer

from ..changed_ranges import PrefixMatch
from ..config import DEFAULT_NEW_LOG, DEFAULT_OLD_LOG, DEFAULT_OUT_LOG, load_settings
from ..errors import TidyDiffError
from ..pipeline import run_diff
from .rendering import describe_stats, emit_warnings
from .shared import CLIError, OutputFormat, build_cli_logger, resolve_root


def diff_command(
    old_log: Annotated[
        Path | None,
        typer.Argument(help=f"Baseline log (default: {DEFAULT_OLD_LOG})."),
    ] = None,
    new_log: Annotated[
        Path | None,
        typer.Argument(help=f"Log to compare against the baseline (default: {DEFAULT_NEW_LOG})."),
    ] = None,
    out_log: Annotated[
        Path | None,
        typer.Argument(help=f"Where to write the new warnings (default: {DEFAULT_OUT_LOG})."),
    ] = None,
    upstream_ref: Annotated[
        str | None,
        typer.Option(
            "--upstream-ref",
            "-u",
            help="Keep only warnings on lines changed since REF...HEAD (default: the branch upstream).",
        ),
    ] = None,
    no_filter: Annotated[
        bool,
        typer.Option("--no-filter", help="Do not restrict warnings to changed lines."),
    ] = False,
    prefix_match: Annotated[
        PrefixMatch | None,
        typer.Option("--prefix-match", case_sensitive=False, help="Fallback rule for paths missing from the diff."),
    ] = None,
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Trace every warning decision on stderr."),
    ] = None,
    output: Annotated[
        OutputFormat,
        typer.Option("--format", case_sensitive=False, help="How to print the new warnings."),
    ] = OutputFormat.PLAIN,
    fail_on_new: Annotated[
        bool,
        typer.Option("--fail-on-new", help="Exit with status 1 when new warnings remain."),
    ] = False,
    root: Annotated[Path | None, typer.Option("--root", help="Working directory for logs and git.")] = None,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in status messages.")] = True,
) -> None:
    """Show warnings present in NEW_LOG but not in OLD_LOG.

    Duplicates are removed by location, by content (message plus the lines
    below it, so renamed files still match) and finally by message.
    """

    overrides: dict[str, Any] = {
        "old_log": old_log,
        "new_log": new_log,
        "out_log": out_log,
        "upstream_ref": upstream_ref,
        "prefix_match": prefix_match,
        "debug": debug,
    }
    if no_filter:
        overrides["filter_changed_lines"] = False

    logger = build_cli_logger(emoji=emoji, debug=bool(debug))
    try:
        base = resolve_root(root)
        settings = load_settings(base, overrides=overrides)
        logger.debug_enabled = settings.debug
        logger.debug(
            f"old={settings.old_log} new={settings.new_log} out={settings.out_log} "
            f"ref={settings.upstream_ref or '-'} filter={settings.filter_changed_lines}",
        )
        run = run_diff(settings, cwd=base)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except TidyDiffError as exc:
        logger.fail(f"tidydiff: {exc}")
        raise typer.Exit(code=1) from exc

    emit_warnings(run.warnings, output=output, title=str(run.out_log))
    logger.debug(describe_stats(run.diff.stats))
    summary = f"tidydiff: {len(run.warnings)} new warning(s) -> {run.out_log}"
    if run.warnings:
        logger.warn(summary)
    else:
        logger.ok(summary)
    if fail_on_new and run.warnings:
        raise typer.Exit(code=1)


__all__ = ["diff_command"]
