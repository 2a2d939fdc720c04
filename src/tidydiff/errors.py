# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the tidydiff package."""

from __future__ import annotations

from pathlib import Path


class TidyDiffError(Exception):
    """Base class for recoverable tidydiff failures."""


class LogReadError(TidyDiffError):
    """Describe a warning log that could not be opened or read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        """Record the unreadable ``path`` together with the I/O ``reason``.

        Args:
            path: Location of the log that failed to load.
            reason: Human-readable description of the underlying I/O error.
        """

        super().__init__(f"Failed to open {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class ChangedRangesUnavailable(TidyDiffError):
    """Raised when version control cannot report changed line ranges."""

    def __init__(self, message: str, *, upstream_ref: str | None = None) -> None:
        super().__init__(message)
        self.upstream_ref = upstream_ref


class ConfigError(TidyDiffError):
    """Raised when configuration input is invalid."""


class OutputWriteError(TidyDiffError):
    """Raised when the filtered diff log cannot be written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"cannot write {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


__all__ = [
    "ChangedRangesUnavailable",
    "ConfigError",
    "LogReadError",
    "OutputWriteError",
    "TidyDiffError",
]
