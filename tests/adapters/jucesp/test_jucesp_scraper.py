from __future__ import annotations

import asyncio
from datetime import date, timedelta
from typing import TYPE_CHECKING

import httpx
import pytest

from regrecon.adapters.http_resilience import ResilienceConfig, ResilientClient
from regrecon.adapters.jucesp import JucespScraper, build_jucesp_source
from regrecon.adapters.memory import InMemoryCacheStore
from regrecon.config import JucespConfig
from regrecon.config.jucesp import JUCESP_BASE_URL, JUCESP_USER_AGENT
from regrecon.domain.errors import SourceUnavailableError, UnsupportedRegionError
from regrecon.domain.model import FetchStatus, ReconciliationQuery, SourceKind

if TYPE_CHECKING:
    from collections.abc import Callable


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            headers=dict(resilience.default_headers or {}),
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def test_scrape_waits_then_requests_the_search_page(result_page: str) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=result_page)

    sleep = RecordingSleep()
    scraper = JucespScraper(
        config=JucespConfig(),
        client_factory=_make_client_factory(handler),
        sleep=sleep,
    )

    records = asyncio.run(scraper.scrape(date(2024, 5, 2), "SP"))

    assert len(records) == 2
    assert sleep.delays == [5.0]
    request = seen[0]
    assert str(request.url).startswith(f"{JUCESP_BASE_URL}/ResultadoBusca.aspx")
    assert request.url.params["dataConstituicao"] == "02/05/2024"
    assert request.url.params["uf"] == "SP"
    assert request.headers["User-Agent"] == JUCESP_USER_AGENT


def test_scrape_rejects_other_regions_without_waiting() -> None:
    sleep = RecordingSleep()
    scraper = JucespScraper(config=JucespConfig(), sleep=sleep)

    with pytest.raises(UnsupportedRegionError):
        asyncio.run(scraper.scrape(date(2024, 5, 2), "RJ"))

    assert sleep.delays == []


def test_scrape_raises_on_error_status() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="maintenance")

    scraper = JucespScraper(
        config=JucespConfig(),
        client_factory=_make_client_factory(handler),
        sleep=RecordingSleep(),
    )

    with pytest.raises(SourceUnavailableError, match="HTTP 503"):
        asyncio.run(scraper.scrape(date(2024, 5, 2), "SP"))


def test_jucesp_source_is_bound_to_sao_paulo(result_page: str) -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return httpx.Response(200, text=result_page)

    config = JucespConfig()
    scraper = JucespScraper(
        config=config,
        client_factory=_make_client_factory(handler),
        sleep=RecordingSleep(),
    )
    source = build_jucesp_source(
        config=config,
        cache=InMemoryCacheStore(),
        ttl=timedelta(hours=24),
        scraper=scraper,
    )

    rj = asyncio.run(source.fetch(ReconciliationQuery(date(2024, 5, 2), "RJ")))
    sp = asyncio.run(source.fetch(ReconciliationQuery(date(2024, 5, 2), "SP")))
    again = asyncio.run(source.fetch(ReconciliationQuery(date(2024, 5, 2), "SP")))

    assert source.kind is SourceKind.JUCESP
    assert rj.status is FetchStatus.UNSUPPORTED_REGION
    assert sp.status is FetchStatus.LIVE
    assert again.status is FetchStatus.CACHED
    assert again.records == sp.records
    assert len(calls) == 1


def test_scraper_keeps_one_client_across_scrapes(result_page: str) -> None:
    created: list[ResilientClient] = []
    build = _make_client_factory(lambda _request: httpx.Response(200, text=result_page))

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = build(resilience)
        created.append(client)
        return client

    scraper = JucespScraper(config=JucespConfig(), client_factory=factory, sleep=RecordingSleep())

    async def run() -> None:
        await scraper.scrape(date(2024, 5, 2), "SP")
        await scraper.scrape(date(2024, 5, 3), "SP")
        await scraper.aclose()
        await scraper.aclose()

    asyncio.run(run())

    assert len(created) == 1
    assert created[0]._client.is_closed  # noqa: SLF001  # type: ignore[reportPrivateUsage]
