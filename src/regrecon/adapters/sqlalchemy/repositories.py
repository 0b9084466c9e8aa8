"""Store implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects import postgresql, sqlite

from regrecon.domain.errors import StorageError
from regrecon.domain.model import CacheEntry, CompanyRecord, MirrorSync

from .mappings import (
    compliance_log_table,
    registry_company_table,
    registry_sync_table,
    source_cache_table,
)
from .unit_of_work import unit_of_work

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import date

    from sqlalchemy.orm import Session, sessionmaker

    from regrecon.domain.model import AuditLogEntry

# dialects with INSERT ... ON CONFLICT; others replace the row with delete and insert
_UPSERT_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class SqlAlchemyCacheStore:
    """Cache entries keyed by source and query; a put replaces the whole row."""

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._clock = clock or (lambda: datetime.now(UTC))

    def get(self, key: str) -> CacheEntry | None:
        stmt = select(source_cache_table).where(source_cache_table.c.key == key)
        try:
            with unit_of_work(self._session_factory) as session:
                row = session.execute(stmt).mappings().one_or_none()
        except (KeyError, TypeError, ValueError) as exc:
            # rows written by an older payload schema, or corrupted in place
            raise StorageError(f"Undecodable cache entry {key!r}: {exc!r}") from exc
        if row is None:
            return None
        return CacheEntry(
            key=row["key"],
            payload=row["payload"],
            created_at=row["created_at"],
            source=row["source"],
        )

    def put(self, key: str, payload: Sequence[CompanyRecord], *, source: str) -> None:
        table = source_cache_table
        values = {
            "key": key,
            "source": source,
            "payload": tuple(payload),
            "created_at": self._clock(),
        }
        with unit_of_work(self._session_factory) as session:
            dialect_insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if dialect_insert is not None:
                stmt = dialect_insert(table).values(**values)
                session.execute(
                    stmt.on_conflict_do_update(
                        index_elements=[table.c.key],
                        set_={
                            "source": stmt.excluded.source,
                            "payload": stmt.excluded.payload,
                            "created_at": stmt.excluded.created_at,
                        },
                    )
                )
            else:
                session.execute(delete(table).where(table.c.key == key))
                session.execute(insert(table).values(**values))


class SqlAlchemyAuditStore:
    """Append-only compliance log."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory

    def append(self, entry: AuditLogEntry) -> None:
        with unit_of_work(self._session_factory) as session:
            session.execute(
                insert(compliance_log_table).values(
                    actor=entry.actor,
                    action=entry.action.value,
                    parameters=dict(entry.parameters),
                    result_count=entry.result_count,
                    sources_used=entry.sources_used,
                    legal_basis=entry.legal_basis,
                    created_at=entry.created_at,
                )
            )


class SqlAlchemyRegistryMirror:
    """Local copy of the federal registry, filled by mirror imports."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self._session_factory = session_factory

    def upsert_companies(self, records: Sequence[CompanyRecord]) -> int:
        by_tax_id = {record.tax_id: record for record in records}
        if not by_tax_id:
            return 0
        table = registry_company_table
        with unit_of_work(self._session_factory) as session:
            session.execute(delete(table).where(table.c.tax_id.in_(list(by_tax_id))))
            session.execute(
                insert(table),
                [
                    {
                        "tax_id": record.tax_id,
                        "legal_name": record.legal_name,
                        "trade_name": record.trade_name,
                        "registration_date": record.registration_date,
                        "region": record.region,
                    }
                    for record in by_tax_id.values()
                ],
            )
        return len(by_tax_id)

    def query_companies(
        self, registration_date: date, region: str, *, limit: int
    ) -> list[CompanyRecord]:
        table = registry_company_table
        stmt = (
            select(table)
            .where(table.c.registration_date == registration_date)
            .where(table.c.region == region)
            .order_by(table.c.tax_id)
            .limit(limit)
        )
        with unit_of_work(self._session_factory) as session:
            rows = session.execute(stmt).mappings().all()
        return [
            CompanyRecord(
                tax_id=row["tax_id"],
                legal_name=row["legal_name"],
                trade_name=row["trade_name"],
                registration_date=row["registration_date"],
                region=row["region"],
            )
            for row in rows
        ]

    def count(self) -> int:
        with unit_of_work(self._session_factory) as session:
            return session.execute(
                select(func.count()).select_from(registry_company_table)
            ).scalar_one()

    def mark_synced(self, sync: MirrorSync) -> None:
        with unit_of_work(self._session_factory) as session:
            session.execute(
                insert(registry_sync_table).values(
                    dataset_version=sync.dataset_version,
                    synced_at=sync.synced_at,
                    record_count=sync.record_count,
                )
            )

    def latest_sync(self) -> MirrorSync | None:
        table = registry_sync_table
        stmt = select(table).order_by(table.c.synced_at.desc(), table.c.id.desc()).limit(1)
        with unit_of_work(self._session_factory) as session:
            row = session.execute(stmt).mappings().one_or_none()
        if row is None:
            return None
        return MirrorSync(
            dataset_version=row["dataset_version"],
            synced_at=row["synced_at"],
            record_count=row["record_count"],
        )


if TYPE_CHECKING:
    from regrecon.domain.ports import AuditStore, CacheStore, RegistryMirror

    _cache_check: CacheStore = SqlAlchemyCacheStore()
    _audit_check: AuditStore = SqlAlchemyAuditStore()
    _mirror_check: RegistryMirror = SqlAlchemyRegistryMirror()
