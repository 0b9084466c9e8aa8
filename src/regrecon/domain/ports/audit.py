"""Port for the append-only compliance audit sink."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from regrecon.domain.model import AuditLogEntry


@runtime_checkable
class AuditStore(Protocol):
    def append(self, entry: AuditLogEntry) -> None: ...


__all__ = ["AuditStore"]
