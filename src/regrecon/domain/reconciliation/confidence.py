"""Confidence policy: how provenance maps to trust.

Confidence is never taken from a source payload. It is derived here from the
source tag, and the same tables drive the tie-breaking used by deduplication.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from regrecon.domain.model import Confidence, SourceTag, ValidatedCompany

if TYPE_CHECKING:
    from regrecon.domain.model import CompanyRecord

CONFIDENCE_BY_SOURCE: Final[dict[SourceTag, Confidence]] = {
    SourceTag.AUTHORITATIVE: Confidence.HIGH,
    SourceTag.CROSS_VALIDATED: Confidence.HIGH,
    SourceTag.PRELIMINARY: Confidence.MEDIUM,
}

VALIDATION_NOTES: Final[dict[SourceTag, str]] = {
    SourceTag.AUTHORITATIVE: "Official federal registry record",
    SourceTag.CROSS_VALIDATED: "Cross-validated against the federal registry",
    SourceTag.PRELIMINARY: "Preliminary state registry record, pending federal confirmation",
}

CONFIDENCE_RANK: Final[dict[Confidence, int]] = {
    Confidence.HIGH: 3,
    Confidence.MEDIUM: 2,
    Confidence.LOW: 1,
}

SOURCE_PRIORITY: Final[dict[SourceTag, int]] = {
    SourceTag.AUTHORITATIVE: 3,
    SourceTag.CROSS_VALIDATED: 2,
    SourceTag.PRELIMINARY: 1,
}


def classify(record: CompanyRecord, source: SourceTag) -> ValidatedCompany:
    return ValidatedCompany(
        record=record,
        source=source,
        confidence=CONFIDENCE_BY_SOURCE[source],
        validation_note=VALIDATION_NOTES[source],
    )


def precedence(company: ValidatedCompany) -> tuple[int, int]:
    """Sort key: confidence first, then source priority."""

    return CONFIDENCE_RANK[company.confidence], SOURCE_PRIORITY[company.source]


def outranks(candidate: ValidatedCompany, incumbent: ValidatedCompany) -> bool:
    return precedence(candidate) > precedence(incumbent)
