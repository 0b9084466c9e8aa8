"""Priority-fallback reconciliation across registry sources.

The authoritative source is always consulted first. Lower-priority sources are
consulted in order, and only while nothing has been emitted yet, so a source is
never queried when a higher-priority one already answered. Records later found
in the authoritative set are upgraded to cross-validated, then the list is
collapsed to one entry per tax id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from regrecon.domain.model import FetchStatus, SourceOutcome, SourceTag

from .confidence import CONFIDENCE_BY_SOURCE, VALIDATION_NOTES, classify
from .deduplicate import deduplicate_companies

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from regrecon.domain.model import (
        ReconciliationQuery,
        SourceKind,
        TaxId,
        ValidatedCompany,
    )
    from regrecon.domain.ports import SourceAdapter

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    query: ReconciliationQuery
    companies: tuple[ValidatedCompany, ...]
    outcomes: tuple[SourceOutcome, ...]

    @property
    def degraded_sources(self) -> tuple[SourceKind, ...]:
        return tuple(
            outcome.source for outcome in self.outcomes if outcome.status is FetchStatus.UNAVAILABLE
        )

    def outcome_for(self, source: SourceKind) -> SourceOutcome | None:
        for outcome in self.outcomes:
            if outcome.source is source:
                return outcome
        return None


def cross_validate(
    companies: Iterable[ValidatedCompany],
    authoritative_ids: set[TaxId],
) -> list[ValidatedCompany]:
    """Upgrade lower-priority entries whose tax id the authoritative source also lists."""

    upgraded: list[ValidatedCompany] = []
    for company in companies:
        if company.source is not SourceTag.AUTHORITATIVE and company.tax_id in authoritative_ids:
            company = company.relabel(  # noqa: PLW2901
                SourceTag.CROSS_VALIDATED,
                CONFIDENCE_BY_SOURCE[SourceTag.CROSS_VALIDATED],
                VALIDATION_NOTES[SourceTag.CROSS_VALIDATED],
            )
        upgraded.append(company)
    return upgraded


@dataclass(slots=True)
class ReconciliationEngine:
    """Run one reconciliation over an authoritative source and its fallbacks."""

    authoritative: SourceAdapter
    fallbacks: Sequence[SourceAdapter] = field(default_factory=tuple["SourceAdapter", ...])

    async def reconcile(self, query: ReconciliationQuery) -> ReconciliationResult:
        log.info(
            "Reconciling registrations for %s in %s",
            query.registration_date.isoformat(),
            query.region,
        )

        authoritative = await self.authoritative.fetch(query)
        outcomes: list[SourceOutcome] = [authoritative]
        emitted = [classify(record, SourceTag.AUTHORITATIVE) for record in authoritative.records]

        for adapter in self.fallbacks:
            if emitted:
                outcomes.append(
                    SourceOutcome.skipped(adapter.kind, "higher-priority source returned records")
                )
                continue
            outcome = await adapter.fetch(query)
            outcomes.append(outcome)
            emitted.extend(classify(record, SourceTag.PRELIMINARY) for record in outcome.records)

        authoritative_ids = {record.tax_id for record in authoritative.records}
        if authoritative_ids and emitted:
            emitted = cross_validate(emitted, authoritative_ids)

        companies = deduplicate_companies(emitted)
        for outcome in outcomes:
            log.info(
                "Source %s: status=%s, records=%s",
                outcome.source,
                outcome.status,
                len(outcome.records),
            )
        log.info("Reconciliation finished with %s companies", len(companies))

        return ReconciliationResult(
            query=query,
            companies=tuple(companies),
            outcomes=tuple(outcomes),
        )
