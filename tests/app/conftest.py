from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from regrecon.adapters.identity import StaticTokenIdentityProvider
from regrecon.adapters.memory import InMemoryAuditStore
from regrecon.domain.compliance import ComplianceLogger
from regrecon.domain.model import FetchStatus, SourceKind, SourceOutcome
from regrecon.domain.reconciliation import ReconciliationEngine
from regrecon.service import RegistryService

if TYPE_CHECKING:
    from collections.abc import Callable

    from regrecon.domain.model import CompanyRecord, ReconciliationQuery

TOKEN = "s3cret"


@dataclass
class ScriptedAdapter:
    kind: SourceKind
    records: tuple[CompanyRecord, ...] = ()
    status: FetchStatus = FetchStatus.LIVE
    calls: list[ReconciliationQuery] = field(default_factory=list["ReconciliationQuery"])

    async def fetch(self, query: ReconciliationQuery) -> SourceOutcome:
        self.calls.append(query)
        return SourceOutcome(source=self.kind, status=self.status, records=self.records)


@dataclass
class ServiceHarness:
    service: RegistryService
    authoritative: ScriptedAdapter
    preliminary: ScriptedAdapter
    audit: InMemoryAuditStore
    closed: list[str] = field(default_factory=list[str])


@pytest.fixture
def token() -> str:
    return TOKEN


@pytest.fixture
def make_harness() -> Callable[..., ServiceHarness]:
    def factory(
        *,
        authoritative: tuple[CompanyRecord, ...] = (),
        preliminary: tuple[CompanyRecord, ...] = (),
        audit: InMemoryAuditStore | None = None,
    ) -> ServiceHarness:
        authoritative_adapter = ScriptedAdapter(SourceKind.RECEITA, authoritative)
        preliminary_adapter = ScriptedAdapter(SourceKind.JUCESP, preliminary)
        audit_store = audit or InMemoryAuditStore()
        closed: list[str] = []

        async def close_sources() -> None:
            closed.append("sources")

        service = RegistryService(
            identity=StaticTokenIdentityProvider({TOKEN: "analyst"}),
            engine=ReconciliationEngine(
                authoritative=authoritative_adapter,
                fallbacks=(preliminary_adapter,),
            ),
            compliance=ComplianceLogger(audit_store, "LGPD Art. 7"),
            preliminary=preliminary_adapter,
            on_close=(close_sources,),
        )
        return ServiceHarness(
            service, authoritative_adapter, preliminary_adapter, audit_store, closed
        )

    return factory
