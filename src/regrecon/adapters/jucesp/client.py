"""Polite scraper for the JUCESP public company search."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from regrecon.adapters.http_resilience import ResilientClient
from regrecon.domain.errors import SourceUnavailableError, UnsupportedRegionError
from regrecon.domain.model import SourceKind

from .translator import parse_result_page

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from datetime import date

    from regrecon.config.http_resilience import ResilienceConfig
    from regrecon.config.jucesp import JucespConfig
    from regrecon.domain.model import CompanyRecord

log = getLogger(__name__)


class JucespScraper:
    """Scrape newly constituted companies for one date.

    Each live invocation waits ``politeness_delay_seconds`` before its request, as
    agreed with the upstream site; the client's rate limiter additionally spaces out
    consecutive requests.
    """

    def __init__(
        self,
        *,
        config: JucespConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._sleep = sleep
        self._client: ResilientClient | None = None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def region(self) -> str:
        return self._config.region

    async def scrape(self, registration_date: date, region: str) -> list[CompanyRecord]:
        if region != self._config.region:
            raise UnsupportedRegionError(SourceKind.JUCESP, region)

        log.info(
            "Scraping JUCESP for %s after a %.1fs politeness delay",
            registration_date.isoformat(),
            self._config.politeness_delay_seconds,
        )
        await self._sleep(self._config.politeness_delay_seconds)

        params = {"dataConstituicao": registration_date.strftime("%d/%m/%Y"), "uf": region}
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        response = await self._client.get(self._config.search_path, params=params)
        if response.is_error:
            raise SourceUnavailableError(
                SourceKind.JUCESP, f"search page answered HTTP {response.status_code}"
            )

        records = parse_result_page(response.text, region=region)
        log.info("JUCESP listed %s companies for %s", len(records), registration_date.isoformat())
        return records
