# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared utilities for CLI commands (logging, errors, output modes)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.text import Text

from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


class OutputFormat(str, Enum):
    """Enumerate the ways a warning list can be printed."""

    PLAIN = "plain"
    TABLE = "table"
    NONE = "none"


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool
    debug_enabled: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences."""

        core_ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        """Log an informational message honouring emoji preferences."""

        core_info(message, use_emoji=self.use_emoji)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        Args:
            message: Debug payload; ``key=value`` pairs are highlighted.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a ``CLILogger`` writing debug output to standard error.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(highlight=False, stderr=True)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


def resolve_root(root: Path | None) -> Path:
    """Return ``root`` as an absolute directory, defaulting to the working directory.

    Raises:
        CLIError: When ``root`` does not exist or is not a directory.
    """

    candidate = (root or Path.cwd()).expanduser()
    if not candidate.is_dir():
        raise CLIError(f"{candidate} is not a directory", exit_code=2)
    return candidate.resolve()


__all__ = [
    "CLIError",
    "CLILogger",
    "OutputFormat",
    "build_cli_logger",
    "resolve_root",
]
