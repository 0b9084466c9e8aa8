"""Translate federal registry payloads into company records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from regrecon.domain.model import CompanyRecord, normalize_tax_id

from .schema import ReceitaCompanyPayload

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

log = getLogger(__name__)


def translate_company(payload: ReceitaCompanyPayload) -> CompanyRecord:
    tax_id = normalize_tax_id(payload.cnpj)
    if not tax_id:
        raise ValueError(f"Invalid registry row: CNPJ {payload.cnpj!r} has no digits")
    return CompanyRecord(
        tax_id=tax_id,
        legal_name=payload.razao_social.strip(),
        trade_name=payload.nome_fantasia,
        registration_date=payload.data_abertura,
        region=payload.uf,
    )


def parse_registry_row(row: Mapping[str, object]) -> CompanyRecord:
    """Parse one dump row; raises ``ValueError`` for unusable rows."""

    try:
        payload = ReceitaCompanyPayload.model_validate(dict(row))
    except ValidationError as exc:
        raise ValueError(f"Invalid registry row: {exc.error_count()} validation error(s)") from exc
    return translate_company(payload)


def translate_companies(payloads: Iterable[ReceitaCompanyPayload]) -> list[CompanyRecord]:
    records: list[CompanyRecord] = []
    for payload in payloads:
        try:
            records.append(translate_company(payload))
        except ValueError as exc:
            log.warning("Dropping federal registry record: %s", exc)
    return records
