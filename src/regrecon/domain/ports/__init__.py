"""Ports implemented by adapters."""

from __future__ import annotations

from .audit import AuditStore
from .caching import CacheStore
from .fetching import RecordRetriever, RegistryQuery, RegistryScraper, SourceAdapter
from .identity import Actor, IdentityProvider
from .persistence import RegistryMirror

__all__ = [
    "Actor",
    "AuditStore",
    "CacheStore",
    "IdentityProvider",
    "RecordRetriever",
    "RegistryMirror",
    "RegistryQuery",
    "RegistryScraper",
    "SourceAdapter",
]
