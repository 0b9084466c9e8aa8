"""Federal registry (authoritative source) adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from regrecon.adapters.source import CachedSource
from regrecon.domain.model import SourceKind

from .client import MirrorRegistryQuery, ReceitaHttpQuery
from .schema import ReceitaCompanyPayload, ReceitaQueryResponse
from .translator import parse_registry_row, translate_company

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence
    from datetime import timedelta

    from regrecon.config.receita import ReceitaConfig
    from regrecon.domain.model import CompanyRecord, ReconciliationQuery
    from regrecon.domain.ports import CacheStore, RegistryMirror, RegistryQuery


def build_receita_source(
    *,
    config: ReceitaConfig,
    cache: CacheStore,
    ttl: timedelta,
    mirror: RegistryMirror | None = None,
    registry: RegistryQuery | None = None,
) -> CachedSource:
    """Wire the authoritative adapter: explicit registry, remote service, or local mirror."""

    closers: tuple[Callable[[], Awaitable[None]], ...] = ()
    if registry is None:
        if config.query_url is not None:
            http_query = ReceitaHttpQuery(config=config)
            closers = (http_query.aclose,)
            registry = http_query
        elif mirror is not None:
            registry = MirrorRegistryQuery(mirror, limit=config.mirror_limit)
        else:
            raise ValueError("Federal registry needs a query URL or a local mirror")

    active_registry = registry

    async def retrieve(query: ReconciliationQuery) -> Sequence[CompanyRecord]:
        return await active_registry.query(query.registration_date, query.region)

    return CachedSource(
        kind=SourceKind.RECEITA,
        retrieve=retrieve,
        cache=cache,
        ttl=ttl,
        timeout_seconds=config.timeout_seconds,
        closers=closers,
    )


__all__ = [
    "MirrorRegistryQuery",
    "ReceitaCompanyPayload",
    "ReceitaHttpQuery",
    "ReceitaQueryResponse",
    "build_receita_source",
    "parse_registry_row",
    "translate_company",
]
