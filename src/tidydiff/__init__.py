# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Baseline-aware filtering of clang-tidy warning logs."""

from __future__ import annotations

from importlib import metadata

from .changed_ranges import PrefixMatch, filter_warnings, is_included, parse_unified_diff
from .diffing import DiffResult, DiffStats, SuppressionTier, diff_warnings
from .errors import ChangedRangesUnavailable, ConfigError, LogReadError, OutputWriteError, TidyDiffError
from .models import ChangedRanges, LineRange, LogWarning
from .parsers import LogParseResult, parse_log, parse_log_text
from .signatures import content_signature, exact_key, message_signature

__all__ = [
    "ChangedRanges",
    "ChangedRangesUnavailable",
    "ConfigError",
    "DiffResult",
    "DiffStats",
    "LineRange",
    "LogParseResult",
    "LogReadError",
    "LogWarning",
    "OutputWriteError",
    "PrefixMatch",
    "SuppressionTier",
    "TidyDiffError",
    "__version__",
    "content_signature",
    "diff_warnings",
    "exact_key",
    "filter_warnings",
    "is_included",
    "message_signature",
    "parse_log",
    "parse_log_text",
    "parse_unified_diff",
]

try:
    __version__ = metadata.version("tidydiff")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
