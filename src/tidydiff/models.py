# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the tidydiff package."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogWarning(BaseModel):
    """Capture one diagnostic occurrence parsed from a warning log.

    Instances are frozen: every pipeline stage hands the same record along,
    so a warning kept by the diff is the very object found in the candidate
    log.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str
    line: int = Field(ge=0)
    column: int = Field(ge=0)
    message: str
    continuation_lines: tuple[str, ...] = Field(default_factory=tuple)
    header: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def _strip_message(cls, value: str) -> str:
        """Trim surrounding whitespace from the header message.

        Args:
            value: Message text captured from the header line.

        Returns:
            str: Message without leading or trailing whitespace.
        """

        return value.strip() if isinstance(value, str) else value

    @field_validator("continuation_lines", mode="before")
    @classmethod
    def _coerce_lines(cls, value: Sequence[str] | None) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return tuple(value)

    @property
    def exact_key(self) -> str:
        """Return ``file:line:col:message`` identifying this warning's location."""

        return f"{self.file_path}:{self.line}:{self.column}:{self.message}"

    @property
    def header_line(self) -> str:
        """Return the verbatim header, rebuilding it when none was recorded."""

        if self.header:
            return self.header
        return f"{self.file_path}:{self.line}:{self.column}: warning: {self.message}"

    @property
    def raw_lines(self) -> tuple[str, ...]:
        """Return the header followed by every continuation line."""

        return (self.header_line, *self.continuation_lines)


@dataclass(frozen=True, slots=True)
class LineRange:
    """Half-open interval ``[start, start + count)`` of changed lines."""

    start: int
    count: int = 1

    def __post_init__(self) -> None:
        # Zero-line hunks (pure deletions) still mark their anchor line.
        if self.count < 1:
            object.__setattr__(self, "count", 1)

    @property
    def end(self) -> int:
        """Return the first line past the interval."""

        return self.start + self.count

    def contains(self, line: int) -> bool:
        """Return ``True`` when ``line`` falls inside the interval."""

        return self.start <= line < self.end


ChangedRanges: TypeAlias = Mapping[str, Sequence[LineRange]]


__all__ = [
    "ChangedRanges",
    "LineRange",
    "LogWarning",
]
