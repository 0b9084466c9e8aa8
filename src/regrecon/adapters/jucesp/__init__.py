"""Sao Paulo board of trade (preliminary source) adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from regrecon.adapters.source import CachedSource
from regrecon.domain.model import SourceKind

from .client import JucespScraper
from .schema import JucespCompanyPayload
from .translator import parse_result_page

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence
    from datetime import timedelta

    from regrecon.config.jucesp import JucespConfig
    from regrecon.domain.model import CompanyRecord, ReconciliationQuery
    from regrecon.domain.ports import CacheStore, RegistryScraper


def build_jucesp_source(
    *,
    config: JucespConfig,
    cache: CacheStore,
    ttl: timedelta,
    scraper: RegistryScraper | None = None,
) -> CachedSource:
    closers: tuple[Callable[[], Awaitable[None]], ...] = ()
    if scraper is None:
        owned = JucespScraper(config=config)
        closers = (owned.aclose,)
        scraper = owned
    active_scraper = scraper

    async def retrieve(query: ReconciliationQuery) -> Sequence[CompanyRecord]:
        return await active_scraper.scrape(query.registration_date, query.region)

    return CachedSource(
        kind=SourceKind.JUCESP,
        retrieve=retrieve,
        cache=cache,
        ttl=ttl,
        timeout_seconds=config.timeout_seconds,
        supported_regions=frozenset({config.region}),
        closers=closers,
    )


__all__ = [
    "JucespCompanyPayload",
    "JucespScraper",
    "build_jucesp_source",
    "parse_result_page",
]
