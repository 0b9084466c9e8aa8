"""Translate the JUCESP result page into company records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from pydantic import ValidationError

from regrecon.domain.errors import SourceUnavailableError
from regrecon.domain.model import CompanyRecord, SourceKind, normalize_tax_id

from .schema import RESULT_COLUMNS, JucespCompanyPayload

if TYPE_CHECKING:
    from bs4 import Tag

log = getLogger(__name__)

RESULT_TABLE_ID = "resultado-busca"


def parse_result_page(html: str, *, region: str) -> list[CompanyRecord]:
    """Extract the result grid. A page without the grid is a parse failure."""

    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table", id=RESULT_TABLE_ID)
    if table is None:
        raise SourceUnavailableError(SourceKind.JUCESP, "result table not found in page")

    records: list[CompanyRecord] = []
    for row in table.find_all("tr"):
        cells = row.find_all("td")
        if not cells:
            continue  # header
        record = _parse_row(cells, region=region)
        if record is not None:
            records.append(record)
    return records


def _parse_row(cells: list[Tag], *, region: str) -> CompanyRecord | None:
    texts = (cell.get_text(" ", strip=True) for cell in cells)
    values = dict(zip(RESULT_COLUMNS, texts, strict=False))
    try:
        payload = JucespCompanyPayload.model_validate(values)
    except ValidationError as exc:
        log.warning("Dropping JUCESP row: %s validation error(s)", exc.error_count())
        return None
    tax_id = normalize_tax_id(payload.cnpj)
    if not tax_id:
        log.warning("Dropping JUCESP row without CNPJ: %s", payload.razao_social)
        return None
    return CompanyRecord(
        tax_id=tax_id,
        legal_name=payload.razao_social,
        trade_name=payload.nome_fantasia,
        registration_date=payload.data_constituicao,
        region=region,
    )
