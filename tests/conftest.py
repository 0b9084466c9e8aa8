from __future__ import annotations

import os
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from regrecon.adapters.sqlalchemy import create_all_tables, shutdown, startup
from regrecon.domain.model import CompanyRecord, ReconciliationQuery

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    # stores run in worker threads, so every connection must share one in-memory database
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def started_storage(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()


@pytest.fixture
def make_record() -> Callable[..., CompanyRecord]:
    def factory(
        tax_id: str,
        legal_name: str | None = None,
        *,
        registration_date: date = date(2024, 5, 2),
        region: str = "SP",
        trade_name: str | None = None,
    ) -> CompanyRecord:
        return CompanyRecord(
            tax_id=tax_id,
            legal_name=legal_name or f"Company {tax_id}",
            registration_date=registration_date,
            region=region,
            trade_name=trade_name,
        )

    return factory


@pytest.fixture
def sp_query() -> ReconciliationQuery:
    return ReconciliationQuery(registration_date=date(2024, 5, 2), region="SP")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 5, 3, 12, 0, tzinfo=UTC)
