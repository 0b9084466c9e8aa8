"""Reconciliation defaults."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Final

from .env import optional_env_float
from .errors import ConfigurationError

DEFAULT_CACHE_TTL_HOURS: Final[float] = 24.0
LEGAL_BASIS: Final[str] = "LGPD Art. 7 - processing of publicly available registry data"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    cache_ttl: timedelta = timedelta(hours=DEFAULT_CACHE_TTL_HOURS)
    legal_basis: str = LEGAL_BASIS


def get_reconciliation_config() -> ReconciliationConfig:
    hours = optional_env_float("REGRECON_CACHE_TTL_HOURS", DEFAULT_CACHE_TTL_HOURS)
    if hours <= 0:
        raise ConfigurationError("REGRECON_CACHE_TTL_HOURS must be positive")
    return ReconciliationConfig(cache_ttl=timedelta(hours=hours))
