"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
import csv
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from regrecon.adapters.identity import StaticTokenIdentityProvider
from regrecon.adapters.jucesp import build_jucesp_source
from regrecon.adapters.receita import build_receita_source, parse_registry_row
from regrecon.adapters.sqlalchemy import (
    SqlAlchemyAuditStore,
    SqlAlchemyCacheStore,
    SqlAlchemyRegistryMirror,
    is_started,
    startup,
)
from regrecon.config import (
    get_identity_config,
    get_jucesp_config,
    get_receita_config,
    get_reconciliation_config,
)
from regrecon.domain.compliance import ComplianceLogger
from regrecon.domain.mirror import ImportSummary, load_mirror
from regrecon.domain.reconciliation import ReconciliationEngine
from regrecon.service import ReconcileRequest, RegistryService

if TYPE_CHECKING:
    from datetime import date

    from regrecon.config import JucespConfig, ReceitaConfig, ReconciliationConfig
    from regrecon.domain.ports import (
        AuditStore,
        CacheStore,
        IdentityProvider,
        RegistryMirror,
        RegistryQuery,
        RegistryScraper,
    )
    from regrecon.service import RegistryResponse

log = getLogger(__name__)


def _ensure_storage() -> None:
    if not is_started():
        startup()


def build_service(
    *,
    cache: CacheStore | None = None,
    audit_store: AuditStore | None = None,
    mirror: RegistryMirror | None = None,
    identity: IdentityProvider | None = None,
    registry: RegistryQuery | None = None,
    scraper: RegistryScraper | None = None,
    receita_config: ReceitaConfig | None = None,
    jucesp_config: JucespConfig | None = None,
    reconciliation_config: ReconciliationConfig | None = None,
) -> RegistryService:
    """Wire the registry service from configuration, filling in SQL-backed stores."""

    if cache is None or audit_store is None or mirror is None:
        _ensure_storage()
    effective_cache = cache or SqlAlchemyCacheStore()
    effective_audit = audit_store or SqlAlchemyAuditStore()
    effective_mirror = mirror or SqlAlchemyRegistryMirror()
    effective_identity = identity or StaticTokenIdentityProvider(get_identity_config().tokens)
    settings = reconciliation_config or get_reconciliation_config()

    authoritative = build_receita_source(
        config=receita_config or get_receita_config(),
        cache=effective_cache,
        ttl=settings.cache_ttl,
        mirror=effective_mirror,
        registry=registry,
    )
    preliminary = build_jucesp_source(
        config=jucesp_config or get_jucesp_config(),
        cache=effective_cache,
        ttl=settings.cache_ttl,
        scraper=scraper,
    )
    engine = ReconciliationEngine(authoritative=authoritative, fallbacks=(preliminary,))
    return RegistryService(
        identity=effective_identity,
        engine=engine,
        compliance=ComplianceLogger(effective_audit, settings.legal_basis),
        preliminary=preliminary,
        on_close=(authoritative.aclose, preliminary.aclose),
    )


def reconcile_registrations(
    *,
    registration_date: str,
    region: str,
    token: str | None,
    service: RegistryService | None = None,
) -> RegistryResponse:
    """Run one reconciliation synchronously, as the command line does.

    A service passed in stays open; its owner closes it.
    """

    request = ReconcileRequest(date=registration_date, region=region, credentials=token)
    if service is not None:
        return asyncio.run(service.handle(request))
    return asyncio.run(_handle_once(build_service(), request))


async def _handle_once(service: RegistryService, request: ReconcileRequest) -> RegistryResponse:
    try:
        return await service.handle(request)
    finally:
        await service.aclose()


def import_registry_mirror(
    path: Path | str,
    *,
    dataset_version: str | None = None,
    mirror: RegistryMirror | None = None,
    delimiter: str = ",",
    today: date | None = None,
) -> ImportSummary:
    """Load a federal registry CSV dump into the local mirror."""

    source = Path(path)
    if mirror is None:
        _ensure_storage()
    effective_mirror = mirror or SqlAlchemyRegistryMirror()
    version = dataset_version or source.stem
    log.info("Importing federal registry dump %s as dataset %s", source, version)

    with source.open(encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle, delimiter=delimiter)
        return load_mirror(
            reader,
            parse=parse_registry_row,
            mirror=effective_mirror,
            dataset_version=version,
            today=today,
        )
