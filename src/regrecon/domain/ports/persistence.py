"""Ports for the mirrored authoritative index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from regrecon.domain.model import CompanyRecord, MirrorSync


@runtime_checkable
class RegistryMirror(Protocol):
    """Write side of the local copy of the authoritative registry."""

    def upsert_companies(self, records: Sequence[CompanyRecord]) -> int: ...

    def mark_synced(self, sync: MirrorSync) -> None: ...

    def latest_sync(self) -> MirrorSync | None: ...

    def query_companies(
        self, registration_date: date, region: str, *, limit: int
    ) -> list[CompanyRecord]: ...


__all__ = ["RegistryMirror"]
