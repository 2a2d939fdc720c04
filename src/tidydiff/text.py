# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Encoding policy for log files, git output and console display.

Logs and diffs are decoded as UTF-8 with ``surrogateescape`` so bytes that are
not valid UTF-8 (Latin-1 source snippets, for instance) survive a
read/write cycle unchanged. Such strings must not reach a terminal directly;
:func:`displayable` swaps the escaped bytes for U+FFFD first.
"""

from __future__ import annotations

from typing import Final

TEXT_ENCODING: Final[str] = "utf-8"
TEXT_ERRORS: Final[str] = "surrogateescape"


def decode_bytes(payload: bytes) -> str:
    """Return ``payload`` decoded losslessly under the package encoding policy."""

    return payload.decode(TEXT_ENCODING, errors=TEXT_ERRORS)


def displayable(text: str) -> str:
    """Return ``text`` with escaped undecodable bytes replaced by U+FFFD."""

    return text.encode(TEXT_ENCODING, errors=TEXT_ERRORS).decode(TEXT_ENCODING, errors="replace")


__all__ = [
    "TEXT_ENCODING",
    "TEXT_ERRORS",
    "decode_bytes",
    "displayable",
]
