"""Compliance audit trail for registry queries."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from regrecon.domain.errors import StorageError
from regrecon.domain.model import AuditAction, AuditLogEntry

if TYPE_CHECKING:
    from regrecon.domain.model import ReconciliationQuery
    from regrecon.domain.ports import Actor, AuditStore
    from regrecon.domain.reconciliation import ResultSummary

log = getLogger(__name__)


@dataclass(slots=True)
class ComplianceLogger:
    """Build one audit entry per top-level query and hand it to the store."""

    store: AuditStore
    legal_basis: str

    async def record(
        self,
        actor: Actor,
        query: ReconciliationQuery,
        summary: ResultSummary,
        *,
        action: AuditAction = AuditAction.CROSS_VALIDATION,
    ) -> AuditLogEntry:
        entry = AuditLogEntry(
            actor=actor.id,
            action=action,
            parameters=query.as_parameters(),
            result_count=summary.total,
            sources_used=frozenset(summary.sources_used),
            legal_basis=self.legal_basis,
        )
        try:
            await asyncio.to_thread(self.store.append, entry)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(f"Could not append audit entry: {exc}") from exc
        log.debug("Recorded %s audit entry for %s", action, actor.id)
        return entry
