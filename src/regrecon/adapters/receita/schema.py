"""Pydantic models describing federal registry payloads.

The same company model reads rows of the public CNPJ dumps (CSV) and the items
returned by the remote query service; both use the registry's Portuguese field
names.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%Y%m%d")


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def parse_registry_date(value: object) -> object:
    if not isinstance(value, str):
        return value
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    raise ValueError(f"Unrecognised registration date: {value!r}")


class ReceitaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ReceitaCompanyPayload(ReceitaBaseModel):
    cnpj: str
    razao_social: str = Field(min_length=1)
    nome_fantasia: str | None = None
    data_abertura: date
    uf: str = Field(validation_alias=AliasChoices("uf", "estado"))

    _normalize_optional = field_validator("nome_fantasia", mode="before")(_blank_to_none)
    _parse_date = field_validator("data_abertura", mode="before")(parse_registry_date)

    @field_validator("uf", mode="before")
    @classmethod
    def _upper_region(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class ReceitaQueryResponse(ReceitaBaseModel):
    success: bool = True
    companies: list[ReceitaCompanyPayload] = Field(default_factory=list[ReceitaCompanyPayload])
    last_sync: datetime | None = None
    dataset_version: str | None = None
    error: str | None = None
