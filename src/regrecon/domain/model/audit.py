"""Compliance audit records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .enums import AuditAction, SourceTag


@dataclass(frozen=True, slots=True)
class AuditLogEntry:
    """One append-only record of a registry query made on behalf of an actor."""

    actor: str
    action: AuditAction
    parameters: Mapping[str, str]
    result_count: int
    sources_used: frozenset[SourceTag]
    legal_basis: str
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
