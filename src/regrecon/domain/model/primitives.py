"""Domain primitives: scalar aliases + small value objects."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Final

type TaxId = str
type RegionCode = str

_NON_DIGITS = re.compile(r"\D+")

BRAZILIAN_REGIONS: Final[frozenset[str]] = frozenset(
    {
        "AC", "AL", "AM", "AP", "BA", "CE", "DF", "ES", "GO", "MA", "MG", "MS", "MT", "PA",
        "PB", "PE", "PI", "PR", "RJ", "RN", "RO", "RR", "RS", "SC", "SE", "SP", "TO",
    }
)  # fmt: skip


def normalize_tax_id(value: str | None) -> TaxId:
    """Strip formatting punctuation, keeping digits only (``12.345.678/0001-90``)."""

    if value is None:
        return ""
    return _NON_DIGITS.sub("", value)


def normalize_region(value: str | None) -> RegionCode:
    if value is None:
        return ""
    return value.strip().upper()


@dataclass(frozen=True, slots=True)
class ReconciliationQuery:
    """Validated query parameters shared by every source."""

    registration_date: date
    region: RegionCode

    def as_parameters(self) -> dict[str, str]:
        return {"date": self.registration_date.isoformat(), "region": self.region}
