from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from regrecon.domain.model import (
    Confidence,
    FetchStatus,
    SourceKind,
    SourceOutcome,
    SourceTag,
)
from regrecon.domain.reconciliation import ReconciliationEngine, summarize

if TYPE_CHECKING:
    from collections.abc import Callable

    from regrecon.domain.model import CompanyRecord, ReconciliationQuery


@dataclass
class FakeAdapter:
    kind: SourceKind
    records: tuple[CompanyRecord, ...] = ()
    status: FetchStatus = FetchStatus.LIVE
    calls: list[ReconciliationQuery] = field(default_factory=list["ReconciliationQuery"])

    async def fetch(self, query: ReconciliationQuery) -> SourceOutcome:
        self.calls.append(query)
        records = self.records if self.status in {FetchStatus.LIVE, FetchStatus.CACHED} else ()
        return SourceOutcome(source=self.kind, status=self.status, records=records)


def test_authoritative_records_suppress_the_preliminary_source(
    make_record: Callable[..., CompanyRecord],
    sp_query: ReconciliationQuery,
) -> None:
    authoritative = FakeAdapter(SourceKind.RECEITA, (make_record("111"), make_record("222")))
    preliminary = FakeAdapter(SourceKind.JUCESP, (make_record("333"),))
    engine = ReconciliationEngine(authoritative=authoritative, fallbacks=(preliminary,))

    result = asyncio.run(engine.reconcile(sp_query))

    assert [company.tax_id for company in result.companies] == ["111", "222"]
    assert all(company.source is SourceTag.AUTHORITATIVE for company in result.companies)
    assert all(company.confidence is Confidence.HIGH for company in result.companies)
    assert len(authoritative.calls) == 1
    assert preliminary.calls == []
    outcome = result.outcome_for(SourceKind.JUCESP)
    assert outcome is not None
    assert outcome.status is FetchStatus.SKIPPED

    summary = summarize(result.companies)
    assert summary.stats_payload() == {
        "total": 2,
        "highConfidence": 2,
        "mediumConfidence": 0,
        "lowConfidence": 0,
    }
    assert summary.sources_used == (SourceTag.AUTHORITATIVE,)


def test_empty_authoritative_falls_back_to_preliminary(
    make_record: Callable[..., CompanyRecord],
    sp_query: ReconciliationQuery,
) -> None:
    authoritative = FakeAdapter(SourceKind.RECEITA)
    preliminary = FakeAdapter(SourceKind.JUCESP, (make_record("333"),))
    engine = ReconciliationEngine(authoritative=authoritative, fallbacks=(preliminary,))

    result = asyncio.run(engine.reconcile(sp_query))

    assert len(result.companies) == 1
    company = result.companies[0]
    assert company.tax_id == "333"
    assert company.source is SourceTag.PRELIMINARY
    assert company.confidence is Confidence.MEDIUM
    assert len(preliminary.calls) == 1

    summary = summarize(result.companies)
    assert summary.medium_confidence == 1
    assert summary.sources_used == (SourceTag.PRELIMINARY,)


def test_unavailable_sources_degrade_to_an_empty_result(
    sp_query: ReconciliationQuery,
) -> None:
    authoritative = FakeAdapter(SourceKind.RECEITA, status=FetchStatus.UNAVAILABLE)
    preliminary = FakeAdapter(SourceKind.JUCESP, status=FetchStatus.UNAVAILABLE)
    engine = ReconciliationEngine(authoritative=authoritative, fallbacks=(preliminary,))

    result = asyncio.run(engine.reconcile(sp_query))

    assert result.companies == ()
    assert result.degraded_sources == (SourceKind.RECEITA, SourceKind.JUCESP)
    assert len(preliminary.calls) == 1


def test_unsupported_region_is_not_degraded(sp_query: ReconciliationQuery) -> None:
    authoritative = FakeAdapter(SourceKind.RECEITA)
    preliminary = FakeAdapter(SourceKind.JUCESP, status=FetchStatus.UNSUPPORTED_REGION)
    engine = ReconciliationEngine(authoritative=authoritative, fallbacks=(preliminary,))

    result = asyncio.run(engine.reconcile(sp_query))

    assert result.companies == ()
    assert result.degraded_sources == ()


def test_fallback_tiers_stop_at_the_first_non_empty_source(
    make_record: Callable[..., CompanyRecord],
    sp_query: ReconciliationQuery,
) -> None:
    authoritative = FakeAdapter(SourceKind.RECEITA)
    first = FakeAdapter(SourceKind.JUCESP)
    second = FakeAdapter(SourceKind.JUCESP, (make_record("444"),))
    third = FakeAdapter(SourceKind.JUCESP, (make_record("555"),))
    engine = ReconciliationEngine(authoritative=authoritative, fallbacks=(first, second, third))

    result = asyncio.run(engine.reconcile(sp_query))

    assert [company.tax_id for company in result.companies] == ["444"]
    assert (len(first.calls), len(second.calls), len(third.calls)) == (1, 1, 0)
    assert [outcome.status for outcome in result.outcomes] == [
        FetchStatus.LIVE,
        FetchStatus.LIVE,
        FetchStatus.LIVE,
        FetchStatus.SKIPPED,
    ]


def test_cached_outcomes_produce_the_same_companies(
    make_record: Callable[..., CompanyRecord],
    sp_query: ReconciliationQuery,
) -> None:
    records = (make_record("111"), make_record("222"))
    live = ReconciliationEngine(authoritative=FakeAdapter(SourceKind.RECEITA, records))
    cached = ReconciliationEngine(
        authoritative=FakeAdapter(SourceKind.RECEITA, records, status=FetchStatus.CACHED)
    )

    assert asyncio.run(live.reconcile(sp_query)).companies == (
        asyncio.run(cached.reconcile(sp_query)).companies
    )


def test_duplicates_within_one_source_are_collapsed(
    make_record: Callable[..., CompanyRecord],
    sp_query: ReconciliationQuery,
) -> None:
    authoritative = FakeAdapter(
        SourceKind.RECEITA,
        (make_record("111"), make_record("11.1"), make_record("222")),
    )
    engine = ReconciliationEngine(authoritative=authoritative)

    result = asyncio.run(engine.reconcile(sp_query))

    assert [company.tax_id for company in result.companies] == ["111", "222"]
