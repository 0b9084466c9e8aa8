"""Ports for fetching registry records from upstream sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from regrecon.domain.model import (
        CompanyRecord,
        ReconciliationQuery,
        SourceKind,
        SourceOutcome,
    )


@runtime_checkable
class RegistryQuery(Protocol):
    """Delegated query contract of the authoritative registry."""

    async def query(self, registration_date: date, region: str) -> Sequence[CompanyRecord]: ...


@runtime_checkable
class RegistryScraper(Protocol):
    """Scraping contract of a region-bound preliminary registry."""

    async def scrape(self, registration_date: date, region: str) -> Sequence[CompanyRecord]: ...


class RecordRetriever(Protocol):
    """Source-specific live retrieval, wrapped by the generic source adapter."""

    async def __call__(self, query: ReconciliationQuery) -> Sequence[CompanyRecord]: ...


@runtime_checkable
class SourceAdapter(Protocol):
    """What the reconciliation engine consults.

    ``fetch`` never raises for source-side problems; failures come back as an
    outcome with an ``UNAVAILABLE`` or ``UNSUPPORTED_REGION`` status.
    """

    @property
    def kind(self) -> SourceKind: ...

    async def fetch(self, query: ReconciliationQuery) -> SourceOutcome: ...


__all__ = ["RecordRetriever", "RegistryQuery", "RegistryScraper", "SourceAdapter"]
