# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse clang-tidy style warning logs into structured records.

A warning starts on a *header* line shaped like
``path:LINE:COL: warning: message`` and owns every following line (notes,
source snippets, fix-it hints) up to the next header. Anything else is opaque
payload: the parser never fails on log content, only on I/O.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .errors import LogReadError
from .models import LogWarning
from .text import decode_bytes

HEADER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<path>.+):(?P<line>\d+):(?P<column>\d+): warning: (?P<message>.*\S.*)$",
)
_LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class WarningHeader:
    """Location and message extracted from a single header line."""

    path: str
    line: int
    column: int
    message: str


@dataclass(slots=True)
class LogParseResult:
    """Outcome of reading and parsing one log file.

    ``error`` is populated instead of raising so callers decide whether an
    unreadable log aborts the run.
    """

    path: Path
    warnings: tuple[LogWarning, ...] = field(default_factory=tuple)
    error: LogReadError | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the log was read successfully."""

        return self.error is None

    def unwrap(self) -> tuple[LogWarning, ...]:
        """Return the parsed warnings or raise the captured read error.

        Returns:
            tuple[LogWarning, ...]: Warnings parsed from the log.

        Raises:
            LogReadError: When the log could not be read.
        """

        if self.error is not None:
            raise self.error
        return self.warnings


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` or ``\\r\\n`` keeping interior blank lines.

    Args:
        text: Raw log contents.

    Returns:
        list[str]: Individual lines; the empty tail after a final newline is
        not reported as a line.
    """

    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_warning_header(line: str) -> WarningHeader | None:
    """Return the header fields of ``line`` or ``None`` when it is not a header."""

    match = HEADER_PATTERN.match(line)
    if match is None:
        return None
    return WarningHeader(
        path=match.group("path"),
        line=int(match.group("line")),
        column=int(match.group("column")),
        message=match.group("message").strip(),
    )


def is_warning_header(line: str) -> bool:
    """Return ``True`` when ``line`` starts a new warning block."""

    return HEADER_PATTERN.match(line) is not None


def iter_warnings(lines: Sequence[str]) -> Iterator[LogWarning]:
    """Yield warnings assembled from contiguous header/continuation blocks.

    Args:
        lines: Log lines without line terminators.

    Yields:
        LogWarning: One record per header line, in input order.
    """

    header: WarningHeader | None = None
    header_text = ""
    continuation: list[str] = []
    for line in lines:
        parsed = parse_warning_header(line)
        if parsed is None:
            # Lines before the first header have no warning to belong to.
            if header is not None:
                continuation.append(line)
            continue
        if header is not None:
            yield _build_warning(header, header_text, continuation)
        header = parsed
        header_text = line
        continuation = []
    if header is not None:
        yield _build_warning(header, header_text, continuation)


def parse_log_text(text: str) -> tuple[LogWarning, ...]:
    """Parse raw log ``text`` into warnings.

    Args:
        text: Log contents as emitted by the analysis tool.

    Returns:
        tuple[LogWarning, ...]: Parsed warnings; empty when no header exists.
    """

    return tuple(iter_warnings(split_lines(text)))


def parse_log(path: Path | str) -> LogParseResult:
    """Read ``path`` and parse its warnings.

    Args:
        path: Location of the warning log.

    Returns:
        LogParseResult: Parsed warnings, or the :class:`LogReadError` describing
        why the file could not be read.
    """

    log_path = Path(path)
    try:
        payload = log_path.read_bytes()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        return LogParseResult(path=log_path, error=LogReadError(log_path, reason))
    # Decoded by hand so a lone "\r" is not translated into a line break.
    text = decode_bytes(payload)
    return LogParseResult(path=log_path, warnings=parse_log_text(text))


def _build_warning(header: WarningHeader, header_text: str, continuation: Sequence[str]) -> LogWarning:
    return LogWarning(
        file_path=header.path,
        line=header.line,
        column=header.column,
        message=header.message,
        continuation_lines=tuple(continuation),
        header=header_text,
    )


__all__ = [
    "HEADER_PATTERN",
    "LogParseResult",
    "WarningHeader",
    "is_warning_header",
    "iter_warnings",
    "parse_log",
    "parse_log_text",
    "parse_warning_header",
    "split_lines",
]
