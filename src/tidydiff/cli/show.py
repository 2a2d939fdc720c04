# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command listing the warnings contained in one log."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import DEFAULT_SHOW_LOG
from ..parsers import parse_log
from .rendering import emit_warnings
from .shared import CLIError, OutputFormat, build_cli_logger, resolve_root


def show_command(
    log: Annotated[
        Path | None,
        typer.Argument(help=f"Warning log to parse (default: {DEFAULT_SHOW_LOG} in the root)."),
    ] = None,
    root: Annotated[Path | None, typer.Option("--root", help="Directory used to resolve relative paths.")] = None,
    output: Annotated[
        OutputFormat,
        typer.Option("--format", case_sensitive=False, help="How to print the warning list."),
    ] = OutputFormat.PLAIN,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in status messages.")] = True,
) -> None:
    """Parse a warning log and list its warnings."""

    logger = build_cli_logger(emoji=emoji)
    try:
        base = resolve_root(root)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    log_path = log or Path(DEFAULT_SHOW_LOG)
    if not log_path.is_absolute():
        log_path = base / log_path
    result = parse_log(log_path)
    if result.error is not None:
        logger.fail(f"tidydiff: {result.error}")
        raise typer.Exit(code=1)

    emit_warnings(result.warnings, output=output, title=str(log_path))
    if not result.warnings:
        logger.info(f"tidydiff: no warnings in {log_path}")
    else:
        logger.info(f"tidydiff: {len(result.warnings)} warning(s) from {log_path}")


__all__ = ["show_command"]
