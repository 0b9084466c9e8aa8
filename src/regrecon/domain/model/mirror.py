"""Metadata of the locally mirrored authoritative index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class MirrorSync:
    dataset_version: str
    synced_at: datetime
    record_count: int = 0
