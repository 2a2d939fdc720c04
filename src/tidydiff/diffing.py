# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Suppress candidate warnings that already exist in a baseline log."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from .models import LogWarning
from .signatures import Signature, content_signature, exact_key, message_signature


class SuppressionTier(str, Enum):
    """Enumerate the outcome of matching a candidate against the baseline."""

    EXACT = "exact"
    CONTENT = "content"
    MESSAGE = "message"
    KEPT = "kept"

    @property
    def suppressed(self) -> bool:
        """Return ``True`` when the tier removes the warning from the output."""

        return self is not SuppressionTier.KEPT

    @property
    def label(self) -> str:
        """Return the trace label describing this decision."""

        return _TIER_LABELS[self]


_TIER_LABELS: Final[dict[SuppressionTier, str]] = {
    SuppressionTier.EXACT: "excluded:by_key",
    SuppressionTier.CONTENT: "excluded:by_content",
    SuppressionTier.MESSAGE: "excluded:by_message",
    SuppressionTier.KEPT: "kept",
}

SIGNATURE_CASCADE: Final[tuple[tuple[SuppressionTier, Signature], ...]] = (
    (SuppressionTier.EXACT, exact_key),
    (SuppressionTier.CONTENT, content_signature),
    (SuppressionTier.MESSAGE, message_signature),
)


@dataclass(frozen=True, slots=True)
class BaselineIndex:
    """Signature sets built once from the baseline warnings."""

    exact: frozenset[str] = frozenset()
    content: frozenset[str] = frozenset()
    message: frozenset[str] = frozenset()

    @classmethod
    def from_warnings(cls, baseline: Iterable[LogWarning]) -> BaselineIndex:
        """Index every signature tier of ``baseline``.

        Args:
            baseline: Warnings from the reference log.

        Returns:
            BaselineIndex: Immutable lookup sets for the suppression cascade.
        """

        exact: set[str] = set()
        content: set[str] = set()
        message: set[str] = set()
        for warning in baseline:
            exact.add(exact_key(warning))
            content.add(content_signature(warning))
            message.add(message_signature(warning))
        return cls(exact=frozenset(exact), content=frozenset(content), message=frozenset(message))

    def signatures_for(self, tier: SuppressionTier) -> frozenset[str]:
        """Return the baseline signature set backing ``tier``."""

        if tier is SuppressionTier.EXACT:
            return self.exact
        if tier is SuppressionTier.CONTENT:
            return self.content
        if tier is SuppressionTier.MESSAGE:
            return self.message
        return frozenset()

    def classify(self, warning: LogWarning) -> SuppressionTier:
        """Return the first tier whose signature of ``warning`` is in the baseline."""

        for tier, signature in SIGNATURE_CASCADE:
            if signature(warning) in self.signatures_for(tier):
                return tier
        return SuppressionTier.KEPT


@dataclass(frozen=True, slots=True)
class Classification:
    """Pair a candidate warning with the tier that decided its fate."""

    warning: LogWarning
    tier: SuppressionTier

    @property
    def kept(self) -> bool:
        """Return ``True`` when the warning survives the diff."""

        return not self.tier.suppressed


@dataclass(slots=True)
class DiffStats:
    """Count candidate warnings per suppression tier."""

    exact: int = 0
    content: int = 0
    message: int = 0
    kept: int = 0

    def record(self, tier: SuppressionTier) -> None:
        """Increment the counter associated with ``tier``."""

        if tier is SuppressionTier.EXACT:
            self.exact += 1
        elif tier is SuppressionTier.CONTENT:
            self.content += 1
        elif tier is SuppressionTier.MESSAGE:
            self.message += 1
        else:
            self.kept += 1

    @property
    def suppressed(self) -> int:
        """Return how many candidates matched the baseline."""

        return self.exact + self.content + self.message

    @property
    def total(self) -> int:
        """Return the number of classified candidates."""

        return self.suppressed + self.kept

    def as_dict(self) -> dict[str, int]:
        """Return the counters keyed by tier name."""

        return {
            SuppressionTier.EXACT.value: self.exact,
            SuppressionTier.CONTENT.value: self.content,
            SuppressionTier.MESSAGE.value: self.message,
            SuppressionTier.KEPT.value: self.kept,
        }


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Novel warnings plus the per-candidate decisions that produced them."""

    novel: tuple[LogWarning, ...]
    stats: DiffStats
    decisions: tuple[Classification, ...] = field(default_factory=tuple)


def diff_warnings(baseline: Sequence[LogWarning], candidate: Sequence[LogWarning]) -> DiffResult:
    """Return the candidate warnings that do not appear in ``baseline``.

    Each candidate is checked against the baseline with the exact, content and
    message signatures in that order; the first match suppresses it.

    Args:
        baseline: Warnings from the reference log.
        candidate: Warnings from the new log, in output order.

    Returns:
        DiffResult: Surviving warnings in candidate order, tier counters and
        one :class:`Classification` per candidate.
    """

    index = BaselineIndex.from_warnings(baseline)
    stats = DiffStats()
    decisions: list[Classification] = []
    novel: list[LogWarning] = []
    for warning in candidate:
        tier = index.classify(warning)
        stats.record(tier)
        decisions.append(Classification(warning=warning, tier=tier))
        if not tier.suppressed:
            novel.append(warning)
    return DiffResult(novel=tuple(novel), stats=stats, decisions=tuple(decisions))


__all__ = [
    "SIGNATURE_CASCADE",
    "BaselineIndex",
    "Classification",
    "DiffResult",
    "DiffStats",
    "SuppressionTier",
    "diff_warnings",
]
