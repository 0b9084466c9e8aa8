"""Generic source adapter: region gate, cache lookup, bounded live retrieval.

Every registry adapter is a ``CachedSource`` around a source-specific retriever.
Whatever goes wrong upstream, ``fetch`` answers with an outcome instead of
raising, so one source's outage never blocks reconciliation.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from regrecon.domain.errors import SourceError, StorageError, UnsupportedRegionError
from regrecon.domain.model import FetchStatus, SourceOutcome

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence
    from datetime import timedelta

    from regrecon.domain.model import CacheEntry, CompanyRecord, ReconciliationQuery, SourceKind
    from regrecon.domain.ports import CacheStore, RecordRetriever

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def cache_key(kind: SourceKind, query: ReconciliationQuery) -> str:
    return f"{kind}:{query.registration_date.isoformat()}:{query.region}"


@dataclass(slots=True)
class CachedSource:
    kind: SourceKind
    retrieve: RecordRetriever
    cache: CacheStore
    ttl: timedelta
    timeout_seconds: float
    supported_regions: frozenset[str] | None = None
    clock: Callable[[], datetime] = _utcnow
    closers: tuple[Callable[[], Awaitable[None]], ...] = ()

    async def aclose(self) -> None:
        """Release the HTTP clients owned by this source."""
        for close in self.closers:
            await close()

    def supports(self, region: str) -> bool:
        return self.supported_regions is None or region in self.supported_regions

    async def fetch(self, query: ReconciliationQuery) -> SourceOutcome:
        if not self.supports(query.region):
            error = UnsupportedRegionError(self.kind, query.region)
            log.info("Skipping %s: %s", self.kind, error)
            return SourceOutcome(
                source=self.kind,
                status=FetchStatus.UNSUPPORTED_REGION,
                detail=str(error),
            )

        key = cache_key(self.kind, query)
        entry = await self._read_cache(key)
        if entry is not None and entry.is_fresh(self.clock(), self.ttl):
            log.info("Cache hit for %s (stored %s)", key, entry.created_at.isoformat())
            return SourceOutcome(
                source=self.kind,
                status=FetchStatus.CACHED,
                records=entry.payload,
                detail=f"cached at {entry.created_at.isoformat()}",
            )

        try:
            async with asyncio.timeout(self.timeout_seconds):
                records = tuple(await self.retrieve(query))
        except TimeoutError:
            return self._unavailable(f"timed out after {self.timeout_seconds:g}s")
        except (httpx.HTTPError, SourceError, ValidationError, ValueError) as exc:
            return self._unavailable(str(exc) or type(exc).__name__)
        except Exception as exc:  # noqa: BLE001
            log.exception("Unexpected failure in source %s", self.kind)
            return self._unavailable(f"unexpected {type(exc).__name__}")

        await self._write_cache(key, records)
        return SourceOutcome(source=self.kind, status=FetchStatus.LIVE, records=records)

    async def _read_cache(self, key: str) -> CacheEntry | None:
        try:
            return await asyncio.to_thread(self.cache.get, key)
        except StorageError as exc:
            log.warning("Cache read failed for %s, fetching live: %s", key, exc)
            return None

    async def _write_cache(self, key: str, records: Sequence[CompanyRecord]) -> None:
        try:
            await asyncio.to_thread(self.cache.put, key, records, source=str(self.kind))
        except StorageError as exc:
            log.warning("Cache write failed for %s, using fresh payload only: %s", key, exc)

    def _unavailable(self, detail: str) -> SourceOutcome:
        log.warning("Source %s unavailable: %s", self.kind, detail)
        return SourceOutcome(source=self.kind, status=FetchStatus.UNAVAILABLE, detail=detail)
