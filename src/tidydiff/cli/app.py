# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .diff import diff_command
from .ranges import ranges_command
from .show import show_command

app = typer.Typer(
    name="tidydiff",
    help="Diff clang-tidy warning logs and keep only new warnings on changed lines.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("show")(show_command)
app.command("diff")(diff_command)
app.command("ranges")(ranges_command)


def main() -> None:
    """Run the Typer application."""

    app()


__all__ = ["app", "main"]
