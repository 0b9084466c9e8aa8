"""Company records as returned by sources and as emitted after reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from .enums import Confidence, SourceTag
from .primitives import RegionCode, TaxId, normalize_tax_id


@dataclass(frozen=True, slots=True)
class CompanyRecord:
    """A normalized registration entry. ``tax_id`` is the matching key."""

    tax_id: TaxId
    legal_name: str
    registration_date: date
    region: RegionCode
    trade_name: str | None = None

    def __post_init__(self) -> None:
        normalized = normalize_tax_id(self.tax_id)
        if normalized != self.tax_id:
            object.__setattr__(self, "tax_id", normalized)
        if not normalized:
            raise ValueError("CompanyRecord requires a tax id with digits")

    def to_payload(self) -> dict[str, Any]:
        return {
            "taxId": self.tax_id,
            "legalName": self.legal_name,
            "tradeName": self.trade_name,
            "registrationDate": self.registration_date.isoformat(),
            "region": self.region,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> CompanyRecord:
        return cls(
            tax_id=str(payload["taxId"]),
            legal_name=str(payload["legalName"]),
            trade_name=payload.get("tradeName"),
            registration_date=date.fromisoformat(str(payload["registrationDate"])),
            region=str(payload["region"]),
        )


@dataclass(frozen=True, slots=True)
class ValidatedCompany:
    """A company record annotated with provenance and derived confidence."""

    record: CompanyRecord
    source: SourceTag
    confidence: Confidence
    validation_note: str

    @property
    def tax_id(self) -> TaxId:
        return self.record.tax_id

    def relabel(self, source: SourceTag, confidence: Confidence, note: str) -> ValidatedCompany:
        return replace(self, source=source, confidence=confidence, validation_note=note)

    def to_payload(self) -> dict[str, Any]:
        payload = self.record.to_payload()
        payload.update(
            {
                "source": self.source.value,
                "confidence": self.confidence.value,
                "validationNote": self.validation_note,
            }
        )
        return payload
