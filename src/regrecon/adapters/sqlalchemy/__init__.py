"""SQLAlchemy adapter package for regrecon."""

from __future__ import annotations

from .mappings import (
    compliance_log_table,
    create_all_tables,
    metadata,
    registry_company_table,
    registry_sync_table,
    source_cache_table,
)
from .repositories import SqlAlchemyAuditStore, SqlAlchemyCacheStore, SqlAlchemyRegistryMirror
from .unit_of_work import (
    StartupError,
    configured_engine,
    is_started,
    session_factory,
    shutdown,
    startup,
    unit_of_work,
)

__all__ = [
    "SqlAlchemyAuditStore",
    "SqlAlchemyCacheStore",
    "SqlAlchemyRegistryMirror",
    "StartupError",
    "compliance_log_table",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "registry_company_table",
    "registry_sync_table",
    "session_factory",
    "shutdown",
    "source_cache_table",
    "startup",
    "unit_of_work",
]
