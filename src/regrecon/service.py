"""Caller boundary: typed requests, one handler per request kind.

Each handler runs the same sequence: identity check, input validation, source
work, summary, and exactly one compliance entry. Only ``RequestError``s become
failures; everything source-side has already been absorbed into fewer records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from logging import getLogger
from typing import TYPE_CHECKING, Any

from regrecon.domain.errors import InvalidInputError, RequestError, StorageError, UnauthorizedError
from regrecon.domain.model import (
    BRAZILIAN_REGIONS,
    AuditAction,
    ReconciliationQuery,
    SourceTag,
    normalize_region,
)
from regrecon.domain.reconciliation import classify, deduplicate_companies, summarize

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Sequence

    from regrecon.domain.compliance import ComplianceLogger
    from regrecon.domain.model import SourceOutcome, ValidatedCompany
    from regrecon.domain.ports import Actor, IdentityProvider, SourceAdapter
    from regrecon.domain.reconciliation import ReconciliationEngine, ResultSummary

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileRequest:
    date: str | None
    region: str | None
    credentials: str | None = None


@dataclass(frozen=True, slots=True)
class AuthoritativeLookupRequest:
    date: str | None
    region: str | None
    credentials: str | None = None


@dataclass(frozen=True, slots=True)
class PreliminaryLookupRequest:
    date: str | None
    region: str | None
    credentials: str | None = None


type RegistryRequest = ReconcileRequest | AuthoritativeLookupRequest | PreliminaryLookupRequest


@dataclass(frozen=True, slots=True)
class Success:
    payload: dict[str, Any] = field(default_factory=dict[str, Any])
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True

    def to_payload(self) -> dict[str, Any]:
        return {"success": True, **self.payload}


@dataclass(frozen=True, slots=True)
class Failure:
    error: str
    status_code: int = 400

    @property
    def ok(self) -> bool:
        return False

    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "error": self.error}


type RegistryResponse = Success | Failure


def parse_query(date_value: str | None, region_value: str | None) -> ReconciliationQuery:
    """Validate raw caller input into a query; raises ``InvalidInputError``."""

    if not date_value:
        raise InvalidInputError("Missing required parameter: date")
    if not region_value:
        raise InvalidInputError("Missing required parameter: region")
    try:
        registration_date = date.fromisoformat(date_value.strip())
    except ValueError as exc:
        raise InvalidInputError(f"Invalid date {date_value!r}, expected YYYY-MM-DD") from exc
    region = normalize_region(region_value)
    if region not in BRAZILIAN_REGIONS:
        raise InvalidInputError(f"Invalid region {region_value!r}")
    return ReconciliationQuery(registration_date=registration_date, region=region)


def _companies_payload(companies: Iterable[ValidatedCompany]) -> list[dict[str, Any]]:
    return [company.to_payload() for company in companies]


class RegistryService:
    """Dispatch registry requests to their handlers."""

    def __init__(
        self,
        *,
        identity: IdentityProvider,
        engine: ReconciliationEngine,
        compliance: ComplianceLogger,
        preliminary: SourceAdapter | None = None,
        on_close: Sequence[Callable[[], Awaitable[None]]] = (),
    ) -> None:
        self._identity = identity
        self._engine = engine
        self._compliance = compliance
        self._authoritative = engine.authoritative
        self._preliminary = preliminary
        self._on_close = tuple(on_close)

    async def aclose(self) -> None:
        for close in self._on_close:
            await close()

    async def handle(self, request: RegistryRequest) -> RegistryResponse:
        try:
            match request:
                case ReconcileRequest():
                    return await self._reconcile(request)
                case AuthoritativeLookupRequest():
                    return await self._lookup(
                        request,
                        self._authoritative,
                        SourceTag.AUTHORITATIVE,
                        AuditAction.AUTHORITATIVE_QUERY,
                    )
                case PreliminaryLookupRequest():
                    if self._preliminary is None:
                        message = "No preliminary source is configured"
                        raise InvalidInputError(message)  # noqa: TRY301
                    return await self._lookup(
                        request,
                        self._preliminary,
                        SourceTag.PRELIMINARY,
                        AuditAction.PRELIMINARY_SCRAPE,
                    )
                case _:
                    message = f"Unsupported request {type(request).__name__}"
                    raise InvalidInputError(message)  # noqa: TRY301
        except RequestError as exc:
            log.info("Rejected %s: %s", type(request).__name__, exc)
            return Failure(error=str(exc), status_code=exc.status_code)

    def _authenticate(self, credentials: str | None) -> Actor:
        actor = self._identity.identify(credentials)
        if actor is None:
            raise UnauthorizedError
        return actor

    async def _reconcile(self, request: ReconcileRequest) -> RegistryResponse:
        actor = self._authenticate(request.credentials)
        query = parse_query(request.date, request.region)

        result = await self._engine.reconcile(query)
        summary = summarize(result.companies)
        if result.degraded_sources:
            log.warning(
                "Reconciliation for %s/%s ran without: %s",
                query.registration_date.isoformat(),
                query.region,
                ", ".join(result.degraded_sources),
            )
        await self._record(actor, query, summary, AuditAction.CROSS_VALIDATION)

        return Success(
            payload={
                "companies": _companies_payload(result.companies),
                "stats": summary.stats_payload(),
                "sourcesUsed": [str(tag) for tag in summary.sources_used],
            }
        )

    async def _lookup(
        self,
        request: AuthoritativeLookupRequest | PreliminaryLookupRequest,
        adapter: SourceAdapter,
        tag: SourceTag,
        action: AuditAction,
    ) -> RegistryResponse:
        actor = self._authenticate(request.credentials)
        query = parse_query(request.date, request.region)

        outcome: SourceOutcome = await adapter.fetch(query)
        companies = deduplicate_companies(classify(record, tag) for record in outcome.records)
        summary = summarize(companies)
        await self._record(actor, query, summary, action)

        return Success(
            payload={
                "source": str(outcome.source),
                "status": str(outcome.status),
                "companies": _companies_payload(companies),
            }
        )

    async def _record(
        self,
        actor: Actor,
        query: ReconciliationQuery,
        summary: ResultSummary,
        action: AuditAction,
    ) -> None:
        try:
            await self._compliance.record(actor, query, summary, action=action)
        except StorageError:
            log.exception("Compliance log write failed for %s by %s", action, actor.id)
