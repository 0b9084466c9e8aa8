"""Cached source payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime, timedelta

    from .company import CompanyRecord


@dataclass(frozen=True, slots=True)
class CacheEntry:
    key: str
    payload: tuple[CompanyRecord, ...]
    created_at: datetime
    source: str | None = None

    def is_fresh(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.created_at < ttl
