from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from regrecon.adapters.memory import InMemoryAuditStore
from regrecon.domain.compliance import ComplianceLogger
from regrecon.domain.errors import StorageError
from regrecon.domain.model import AuditAction, SourceTag
from regrecon.domain.ports import Actor
from regrecon.domain.reconciliation import classify, summarize

if TYPE_CHECKING:
    from collections.abc import Callable

    from regrecon.domain.model import AuditLogEntry, CompanyRecord, ReconciliationQuery


class BrokenAuditStore:
    def append(self, entry: AuditLogEntry) -> None:
        raise OSError("disk full")


def test_record_appends_one_entry(
    make_record: Callable[..., CompanyRecord],
    sp_query: ReconciliationQuery,
) -> None:
    store = InMemoryAuditStore()
    logger = ComplianceLogger(store, "LGPD Art. 7")
    summary = summarize(
        [
            classify(make_record("111"), SourceTag.AUTHORITATIVE),
            classify(make_record("222"), SourceTag.AUTHORITATIVE),
        ]
    )

    entry = asyncio.run(logger.record(Actor("analyst"), sp_query, summary))

    assert store.entries == (entry,)
    assert entry.actor == "analyst"
    assert entry.action is AuditAction.CROSS_VALIDATION
    assert entry.parameters == {"date": "2024-05-02", "region": "SP"}
    assert entry.result_count == 2
    assert entry.sources_used == frozenset({SourceTag.AUTHORITATIVE})
    assert entry.legal_basis == "LGPD Art. 7"


def test_record_uses_the_given_action(sp_query: ReconciliationQuery) -> None:
    store = InMemoryAuditStore()
    logger = ComplianceLogger(store, "LGPD Art. 7")

    entry = asyncio.run(
        logger.record(
            Actor("analyst"),
            sp_query,
            summarize([]),
            action=AuditAction.PRELIMINARY_SCRAPE,
        )
    )

    assert entry.action is AuditAction.PRELIMINARY_SCRAPE
    assert entry.result_count == 0
    assert entry.sources_used == frozenset()


def test_store_failures_become_storage_errors(sp_query: ReconciliationQuery) -> None:
    logger = ComplianceLogger(BrokenAuditStore(), "LGPD Art. 7")

    with pytest.raises(StorageError, match="disk full"):
        asyncio.run(logger.record(Actor("analyst"), sp_query, summarize([])))
