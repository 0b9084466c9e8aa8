"""Per-source fetch diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import FetchStatus

if TYPE_CHECKING:
    from .company import CompanyRecord
    from .enums import SourceKind


@dataclass(frozen=True, slots=True)
class SourceOutcome:
    """What one adapter produced for one query.

    ``status`` is metadata only: a ``CACHED`` outcome carries exactly the records a
    ``LIVE`` one would have.
    """

    source: SourceKind
    status: FetchStatus
    records: tuple[CompanyRecord, ...] = field(default_factory=tuple["CompanyRecord", ...])
    detail: str | None = None

    @classmethod
    def skipped(cls, source: SourceKind, detail: str | None = None) -> SourceOutcome:
        return cls(source=source, status=FetchStatus.SKIPPED, detail=detail)
