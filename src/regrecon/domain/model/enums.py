"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SourceTag(StrEnum):
    """Provenance of a validated company, in descending priority order."""

    AUTHORITATIVE = "authoritative"
    CROSS_VALIDATED = "cross_validated"
    PRELIMINARY = "preliminary"


class Confidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SourceKind(StrEnum):
    """Identity of a source adapter; also the first part of its cache keys."""

    RECEITA = "receita"
    JUCESP = "jucesp"


class FetchStatus(StrEnum):
    LIVE = "live"
    CACHED = "cached"
    UNSUPPORTED_REGION = "unsupported_region"
    UNAVAILABLE = "unavailable"
    SKIPPED = "skipped"


class AuditAction(StrEnum):
    CROSS_VALIDATION = "cross_validation"
    AUTHORITATIVE_QUERY = "authoritative_query"
    PRELIMINARY_SCRAPE = "preliminary_scrape"
