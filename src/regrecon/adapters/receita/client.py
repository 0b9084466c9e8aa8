"""Authoritative registry query implementations."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from regrecon.adapters.http_resilience import ResilientClient
from regrecon.domain.errors import SourceUnavailableError
from regrecon.domain.model import SourceKind

from .schema import ReceitaQueryResponse
from .translator import translate_companies

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date

    from regrecon.config.http_resilience import ResilienceConfig
    from regrecon.config.receita import ReceitaConfig
    from regrecon.domain.model import CompanyRecord
    from regrecon.domain.ports import RegistryMirror

log = getLogger(__name__)


class MirrorRegistryQuery:
    """Read the locally mirrored registry index.

    The mirror trails the registry by up to ~90 days; an empty answer for a recent
    date is expected and simply lets lower-priority sources take over.
    """

    def __init__(self, mirror: RegistryMirror, *, limit: int) -> None:
        self._mirror = mirror
        self._limit = limit

    async def query(self, registration_date: date, region: str) -> list[CompanyRecord]:
        sync = await asyncio.to_thread(self._mirror.latest_sync)
        if sync is None:
            log.warning("Federal registry mirror has never been synced")
        else:
            log.debug(
                "Querying mirror dataset %s (synced %s)",
                sync.dataset_version,
                sync.synced_at.isoformat(),
            )
        return await asyncio.to_thread(
            self._mirror.query_companies,
            registration_date,
            region,
            limit=self._limit,
        )


class ReceitaHttpQuery:
    """Delegate the query to a remote registry query service."""

    def __init__(
        self,
        *,
        config: ReceitaConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        if config.query_url is None:
            raise ValueError("ReceitaHttpQuery requires config.query_url")
        self._config = config
        self._query_url = config.query_url
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _active_client(self) -> ResilientClient:
        # one client per adapter so the rate limiter and HTTP cache span queries
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client

    async def query(self, registration_date: date, region: str) -> list[CompanyRecord]:
        params = {"date": registration_date.isoformat(), "estado": region}
        response = await self._active_client().get(self._query_url, params=params)
        if response.is_error:
            raise SourceUnavailableError(
                SourceKind.RECEITA, f"query service answered HTTP {response.status_code}"
            )

        payload = ReceitaQueryResponse.model_validate(response.json())
        if not payload.success:
            raise SourceUnavailableError(SourceKind.RECEITA, payload.error or "query failed")
        if payload.dataset_version:
            log.debug(
                "Federal registry dataset %s (last sync %s)",
                payload.dataset_version,
                payload.last_sync,
            )
        return translate_companies(payload.companies)
