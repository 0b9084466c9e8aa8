"""Collapse validated companies sharing a tax id.

The survivor is the entry with the highest precedence (see ``confidence``), and
it takes the slot where the tax id first appeared so output order stays the
order of first appearance.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .confidence import outranks

if TYPE_CHECKING:
    from collections.abc import Iterable

    from regrecon.domain.model import TaxId, ValidatedCompany

log = getLogger(__name__)


def deduplicate_companies(companies: Iterable[ValidatedCompany]) -> list[ValidatedCompany]:
    survivors: list[ValidatedCompany] = []
    slot_by_tax_id: dict[TaxId, int] = {}

    for company in companies:
        slot = slot_by_tax_id.get(company.tax_id)
        if slot is None:
            slot_by_tax_id[company.tax_id] = len(survivors)
            survivors.append(company)
            continue
        incumbent = survivors[slot]
        if outranks(company, incumbent):
            log.debug(
                "Replacing %s entry for %s with %s entry",
                incumbent.source,
                company.tax_id,
                company.source,
            )
            survivors[slot] = company

    return survivors
