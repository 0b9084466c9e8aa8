"""Port for resolving caller identities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class Actor:
    id: str


@runtime_checkable
class IdentityProvider(Protocol):
    def identify(self, credentials: str | None) -> Actor | None: ...


__all__ = ["Actor", "IdentityProvider"]
