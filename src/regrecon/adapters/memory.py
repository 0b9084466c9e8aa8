"""Process-local stores, used when no database is configured and in tests."""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from regrecon.domain.model import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from regrecon.domain.model import AuditLogEntry, CompanyRecord


class InMemoryCacheStore:
    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock or (lambda: datetime.now(UTC))

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, payload: Sequence[CompanyRecord], *, source: str) -> None:
        self._entries[key] = CacheEntry(
            key=key,
            payload=tuple(payload),
            created_at=self._clock(),
            source=source,
        )


class InMemoryAuditStore:
    def __init__(self) -> None:
        self._entries: list[AuditLogEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: AuditLogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> tuple[AuditLogEntry, ...]:
        return tuple(self._entries)


if TYPE_CHECKING:
    from regrecon.domain.ports import AuditStore, CacheStore

    _cache_check: CacheStore = InMemoryCacheStore()
    _audit_check: AuditStore = InMemoryAuditStore()
