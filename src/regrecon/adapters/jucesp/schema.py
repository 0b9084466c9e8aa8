"""Pydantic model for one row of the JUCESP search result table."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from regrecon.adapters.receita.schema import parse_registry_date

# column order of the result grid, left to right
RESULT_COLUMNS: tuple[str, ...] = (
    "cnpj",
    "razao_social",
    "nome_fantasia",
    "data_constituicao",
    "municipio",
    "situacao",
)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = " ".join(value.split())
        return stripped or None
    return value


class JucespCompanyPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cnpj: str
    razao_social: str = Field(min_length=1)
    nome_fantasia: str | None = None
    data_constituicao: date
    municipio: str | None = None
    situacao: str | None = None

    _normalize_optional = field_validator(
        "nome_fantasia", "municipio", "situacao", mode="before"
    )(_blank_to_none)
    _parse_date = field_validator("data_constituicao", mode="before")(parse_registry_date)
