"""Public domain model surface."""

from __future__ import annotations

from regrecon.domain.model.audit import AuditLogEntry
from regrecon.domain.model.cache import CacheEntry
from regrecon.domain.model.company import CompanyRecord, ValidatedCompany
from regrecon.domain.model.enums import (
    AuditAction,
    Confidence,
    FetchStatus,
    SourceKind,
    SourceTag,
)
from regrecon.domain.model.mirror import MirrorSync
from regrecon.domain.model.outcome import SourceOutcome
from regrecon.domain.model.primitives import (
    BRAZILIAN_REGIONS,
    ReconciliationQuery,
    RegionCode,
    TaxId,
    normalize_region,
    normalize_tax_id,
)

__all__ = [
    "BRAZILIAN_REGIONS",
    "AuditAction",
    "AuditLogEntry",
    "CacheEntry",
    "CompanyRecord",
    "Confidence",
    "FetchStatus",
    "MirrorSync",
    "ReconciliationQuery",
    "RegionCode",
    "SourceKind",
    "SourceOutcome",
    "SourceTag",
    "TaxId",
    "ValidatedCompany",
    "normalize_region",
    "normalize_tax_id",
]
