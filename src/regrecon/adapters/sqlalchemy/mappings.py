"""SQLAlchemy table metadata for the cache, audit trail and registry mirror."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Dialect,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
)

from regrecon.domain.model import CompanyRecord, SourceTag

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class SourceTagSetType(TypeDecorator[frozenset[SourceTag]]):
    impl = String
    cache_ok = True

    def process_bind_param(
        self, value: frozenset[SourceTag] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(sorted(tag.value for tag in value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> frozenset[SourceTag]:
        _ = dialect
        if value is None:
            return frozenset()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return frozenset()
        items = cast(list[Any], loaded)
        return frozenset(SourceTag(item) for item in items if isinstance(item, str))


class RecordPayloadType(TypeDecorator[tuple[CompanyRecord, ...]]):
    """Ordered company records stored as a JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: tuple[CompanyRecord, ...] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps([record.to_payload() for record in value])

    def process_result_value(
        self, value: str | None, dialect: Dialect
    ) -> tuple[CompanyRecord, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return ()
        items = cast(list[dict[str, Any]], loaded)
        return tuple(CompanyRecord.from_payload(item) for item in items)


class JSONMappingType(TypeDecorator[dict[str, str]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: dict[str, str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(dict(value), sort_keys=True)

    def process_result_value(self, value: str | None, dialect: Dialect) -> dict[str, str]:
        _ = dialect
        if value is None:
            return {}
        loaded = json.loads(value)
        return cast(dict[str, str], loaded) if isinstance(loaded, dict) else {}


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

source_cache_table = Table(
    "source_cache",
    metadata,
    Column("key", String(128), primary_key=True),
    Column("source", String(32), nullable=True),
    Column("payload", RecordPayloadType(), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
)

compliance_log_table = Table(
    "compliance_log",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("actor", String(255), nullable=False),
    Column("action", String(64), nullable=False),
    Column("parameters", JSONMappingType(), nullable=False),
    Column("result_count", Integer, nullable=False),
    Column("sources_used", SourceTagSetType(), nullable=False),
    Column("legal_basis", String(255), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
)

registry_company_table = Table(
    "registry_company",
    metadata,
    Column("tax_id", String(14), primary_key=True),
    Column("legal_name", String(255), nullable=False),
    Column("trade_name", String(255), nullable=True),
    Column("registration_date", Date, nullable=False),
    Column("region", String(2), nullable=False),
    Index("ix_registry_company_date_region", "registration_date", "region"),
)

registry_sync_table = Table(
    "registry_sync",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("dataset_version", String(64), nullable=False),
    Column("synced_at", UTCDateTime(), nullable=False),
    Column("record_count", Integer, nullable=False, default=0),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
