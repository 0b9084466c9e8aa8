"""Port for the shared source-response cache."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from regrecon.domain.model import CacheEntry, CompanyRecord


@runtime_checkable
class CacheStore(Protocol):
    """Key to timestamped payload lookup.

    The store never judges freshness; readers compare ``created_at`` against their
    TTL. ``put`` overwrites, last writer wins.
    """

    def get(self, key: str) -> CacheEntry | None: ...

    def put(self, key: str, payload: Sequence[CompanyRecord], *, source: str) -> None: ...


__all__ = ["CacheStore"]
