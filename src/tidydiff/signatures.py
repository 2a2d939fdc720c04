# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Comparison keys used to match warnings between two logs.

Three progressively coarser signatures are derived from a warning:

``exact``
    File, line, column and message. The same warning at the same place.
``content``
    Message plus normalised continuation lines. Survives file renames and
    line drift as long as the attached snippet text is unchanged.
``message``
    The message alone. Matches the same diagnostic anywhere.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Final

from .models import LogWarning

_LOCATION_PREFIX: Final[re.Pattern[str]] = re.compile(r"^[^:]*:\d+:\d*:?\s*")
_GUTTER_PREFIX: Final[re.Pattern[str]] = re.compile(r"^\s*\d+\s*\|\s*")

Signature = Callable[[LogWarning], str]


def normalize_content_line(line: str) -> str:
    """Strip location and gutter prefixes from a continuation line.

    Args:
        line: Raw continuation line, e.g. ``"  10 |   int x;"`` or
            ``"a.cpp:3:1: note: declared here"``.

    Returns:
        str: Line content without ``path:line:col:`` or ``NN |`` prefixes and
        without surrounding whitespace.
    """

    stripped = _LOCATION_PREFIX.sub("", line, count=1)
    stripped = _GUTTER_PREFIX.sub("", stripped, count=1)
    return stripped.strip()


def exact_key(warning: LogWarning) -> str:
    """Return ``file:line:col:message`` for ``warning``."""

    return warning.exact_key


def content_signature(warning: LogWarning) -> str:
    """Return the location-independent content signature of ``warning``."""

    parts = [warning.message.strip()]
    parts.extend(normalize_content_line(line) for line in warning.continuation_lines)
    return "\n".join(parts)


def message_signature(warning: LogWarning) -> str:
    """Return the trimmed message of ``warning``."""

    return warning.message.strip()


__all__ = [
    "Signature",
    "content_signature",
    "exact_key",
    "message_signature",
    "normalize_content_line",
]
