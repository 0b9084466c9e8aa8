"""Federal registry (Receita Federal) configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .env import optional_env_float
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

RECEITA_TIMEOUT_SECONDS = 20.0
RECEITA_MIRROR_LIMIT = 100
# short-lived; entry freshness is owned by the reconciliation cache
RECEITA_HTTP_CACHE_TTL_SECONDS = 300.0


def _should_cache_payload(payload: object) -> bool:
    # only keep successful query envelopes in the HTTP cache
    return isinstance(payload, dict) and payload.get("success", True) is not False


def _default_resilience(base_url: str | None = None) -> ResilienceConfig:
    return ResilienceConfig(
        name="receita",
        base_url=base_url,
        timeout_seconds=RECEITA_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=2),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        cache=CacheConfig(
            default_ttl_seconds=RECEITA_HTTP_CACHE_TTL_SECONDS,
            should_cache=_should_cache_payload,
        ),
    )


@dataclass(frozen=True, slots=True)
class ReceitaConfig:
    """Authoritative source settings.

    Without ``query_url`` the adapter reads the locally mirrored index; with it,
    queries are delegated to the remote query service.
    """

    query_url: str | None = None
    timeout_seconds: float = RECEITA_TIMEOUT_SECONDS
    mirror_limit: int = RECEITA_MIRROR_LIMIT
    resilience: ResilienceConfig = field(default_factory=_default_resilience)


def get_receita_config() -> ReceitaConfig:
    query_url = os.getenv("RECEITA_QUERY_URL") or None
    timeout = optional_env_float("RECEITA_TIMEOUT_SECONDS", RECEITA_TIMEOUT_SECONDS)
    return ReceitaConfig(
        query_url=query_url,
        timeout_seconds=timeout,
        resilience=_default_resilience(query_url),
    )
