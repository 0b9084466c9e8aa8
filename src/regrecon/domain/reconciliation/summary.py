"""Aggregate counts for a reconciled company list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from regrecon.domain.model import Confidence

if TYPE_CHECKING:
    from collections.abc import Sequence

    from regrecon.domain.model import SourceTag, ValidatedCompany


@dataclass(frozen=True, slots=True)
class ResultSummary:
    total: int
    high_confidence: int
    medium_confidence: int
    low_confidence: int
    sources_used: tuple[SourceTag, ...]

    def stats_payload(self) -> dict[str, int]:
        return {
            "total": self.total,
            "highConfidence": self.high_confidence,
            "mediumConfidence": self.medium_confidence,
            "lowConfidence": self.low_confidence,
        }


def summarize(companies: Sequence[ValidatedCompany]) -> ResultSummary:
    counts = dict.fromkeys(Confidence, 0)
    sources: dict[SourceTag, None] = {}
    for company in companies:
        counts[company.confidence] += 1
        sources.setdefault(company.source)
    return ResultSummary(
        total=len(companies),
        high_confidence=counts[Confidence.HIGH],
        medium_confidence=counts[Confidence.MEDIUM],
        low_confidence=counts[Confidence.LOW],
        sources_used=tuple(sources),
    )
