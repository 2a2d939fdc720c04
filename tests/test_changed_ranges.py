# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for changed-line parsing and filtering."""

from __future__ import annotations

import pytest

from tidydiff.changed_ranges import (
    PrefixMatch,
    filter_warnings,
    is_included,
    lookup_ranges,
    parse_unified_diff,
    relative_to_root,
)
from tidydiff.models import LineRange, LogWarning

DIFF_TEXT = """\
diff --git a/src/a.cpp b/src/a.cpp
index 1111111..2222222 100644
--- a/src/a.cpp
+++ b/src/a.cpp
@@ -4,0 +5,2 @@ int main()
+  int x;
+  int y;
@@ -20 +22 @@ void f()
-  old();
+  new_call();
@@ -30,3 +31,0 @@
-gone
-gone
-gone
diff --git a/old_name.cpp b/new_name.cpp
similarity index 100%
rename from old_name.cpp
rename to new_name.cpp
"""


def test_parse_unified_diff_reads_new_side() -> None:
    ranges = parse_unified_diff(DIFF_TEXT)

    assert list(ranges) == ["src/a.cpp", "new_name.cpp"]
    assert ranges["src/a.cpp"] == (
        LineRange(start=5, count=2),
        LineRange(start=22, count=1),
        LineRange(start=31, count=1),
    )
    assert ranges["new_name.cpp"] == ()


def test_parse_unified_diff_empty() -> None:
    assert parse_unified_diff("") == {}


def test_zero_count_is_normalised() -> None:
    assert LineRange(start=5, count=0).count == 1
    assert LineRange(start=5).end == 6


def test_half_open_boundaries() -> None:
    ranges = {"a.cpp": (LineRange(start=10, count=3),)}

    assert is_included("a.cpp", 10, ranges, None)
    assert is_included("a.cpp", 12, ranges, None)
    assert not is_included("a.cpp", 9, ranges, None)
    assert not is_included("a.cpp", 13, ranges, None)


def test_zero_line_hunk_marks_anchor_line() -> None:
    ranges = {"a.cpp": (LineRange(start=5, count=0),)}

    assert is_included("a.cpp", 5, ranges, "/repo")
    assert not is_included("a.cpp", 6, ranges, "/repo")


def test_no_ranges_means_pass_through() -> None:
    assert is_included("anything.cpp", 1, None, "/repo")


def test_unknown_file_is_excluded() -> None:
    ranges = {"a.cpp": (LineRange(start=1, count=100),)}

    assert not is_included("other.cpp", 1, ranges, "/repo")


def test_file_without_hunks_excludes_every_line() -> None:
    ranges = parse_unified_diff(DIFF_TEXT)

    assert not is_included("/repo/new_name.cpp", 1, ranges, "/repo")


@pytest.mark.parametrize(
    ("path", "root", "expected"),
    [
        ("/repo/src/a.cpp", "/repo", "src/a.cpp"),
        ("/repo/src/a.cpp", "/repo/", "src/a.cpp"),
        ("C:\\repo\\src\\a.cpp", "C:\\repo", "src/a.cpp"),
        ("/repository/a.cpp", "/repo", "/repository/a.cpp"),
        ("src/a.cpp", "/repo", "src/a.cpp"),
        ("/repo/a.cpp", None, "/repo/a.cpp"),
    ],
)
def test_relative_to_root(path: str, root: str | None, expected: str) -> None:
    assert relative_to_root(path, root) == expected


def test_absolute_path_is_relativised_before_lookup() -> None:
    ranges = {"src/a.cpp": (LineRange(start=7, count=1),)}

    assert is_included("/repo/src/a.cpp", 7, ranges, "/repo")
    assert not is_included("/repo/src/a.cpp", 8, ranges, "/repo")


def test_prefix_fallback_requires_string_prefix() -> None:
    ranges = {"a.cpp": (LineRange(start=1, count=10),)}

    assert not is_included("sub/a.cpp", 1, ranges, "/repo")

    nested = {"pkg/sub": (LineRange(start=1, count=10),)}
    assert is_included("pkg/sub/a.cpp", 1, nested, "/repo")

    shorter = {"packages/core/src/a.cpp": (LineRange(start=3, count=1),)}
    assert is_included("packages/core", 3, shorter, "/repo")


def test_prefix_fallback_first_versus_longest() -> None:
    ranges = {
        "pkg": (LineRange(start=1, count=1),),
        "pkg/sub": (LineRange(start=50, count=1),),
    }

    assert lookup_ranges("pkg/sub/a.cpp", ranges) == ranges["pkg"]
    assert lookup_ranges("pkg/sub/a.cpp", ranges, strategy=PrefixMatch.LONGEST) == ranges["pkg/sub"]
    assert is_included("pkg/sub/a.cpp", 1, ranges, None)
    assert is_included("pkg/sub/a.cpp", 50, ranges, None, strategy=PrefixMatch.LONGEST)
    assert not is_included("pkg/sub/a.cpp", 50, ranges, None)


def test_filter_warnings_preserves_order() -> None:
    inside = LogWarning(file_path="/repo/a.cpp", line=5, column=1, message="in")
    outside = LogWarning(file_path="/repo/a.cpp", line=6, column=1, message="out")
    also_inside = LogWarning(file_path="/repo/a.cpp", line=5, column=9, message="in again")
    ranges = {"a.cpp": (LineRange(start=5, count=0),)}

    result = filter_warnings([inside, outside, also_inside], ranges, "/repo")

    assert result.kept == (inside, also_inside)
    assert [decision.included for decision in result.decisions] == [True, False, True]
    assert result.decisions[1].label == "dropped:not_in_changed_lines"


def test_filter_warnings_without_ranges_keeps_all() -> None:
    warnings = [LogWarning(file_path="x.cpp", line=1, column=1, message="m")]

    assert filter_warnings(warnings, None, None).kept == tuple(warnings)


def test_only_newlines_split_diff_lines() -> None:
    diff_text = (
        "diff --git a/src/a.cpp b/src/a.cpp\n"
        "@@ -1,0 +2,1 @@\n"
        "+int a;\x0c@@ -1 +500,3 @@\n"
        "+// page\u2028diff --git a/x b/src/other.cpp\n"
        "+// sep\x1c@@ -1 +900 @@\r\n"
    )

    assert parse_unified_diff(diff_text) == {"src/a.cpp": (LineRange(start=2, count=1),)}
