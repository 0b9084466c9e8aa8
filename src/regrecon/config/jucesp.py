"""Sao Paulo board of trade (JUCESP) scraper configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .env import optional_env_float
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

JUCESP_BASE_URL = "https://www.jucesponline.sp.gov.br"
JUCESP_SEARCH_PATH = "/ResultadoBusca.aspx"
JUCESP_REGION = "SP"
JUCESP_USER_AGENT = "regrecon-bot/0.1 (+https://github.com/regrecon/regrecon#bot-policy)"
JUCESP_TIMEOUT_SECONDS = 30.0
MIN_POLITENESS_DELAY_SECONDS = 5.0


def _default_resilience(
    base_url: str = JUCESP_BASE_URL,
    user_agent: str = JUCESP_USER_AGENT,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="jucesp",
        base_url=base_url,
        timeout_seconds=JUCESP_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=1),
        ratelimit=RateLimit(max_calls=1, per_seconds=MIN_POLITENESS_DELAY_SECONDS),
        cache=None,
        default_headers={"User-Agent": user_agent},
    )


@dataclass(frozen=True, slots=True)
class JucespConfig:
    region: str = JUCESP_REGION
    search_path: str = JUCESP_SEARCH_PATH
    politeness_delay_seconds: float = MIN_POLITENESS_DELAY_SECONDS
    timeout_seconds: float = JUCESP_TIMEOUT_SECONDS
    resilience: ResilienceConfig = field(default_factory=_default_resilience)


def get_jucesp_config() -> JucespConfig:
    base_url = os.getenv("JUCESP_BASE_URL") or JUCESP_BASE_URL
    user_agent = os.getenv("JUCESP_USER_AGENT") or JUCESP_USER_AGENT
    delay = optional_env_float("JUCESP_DELAY_SECONDS", MIN_POLITENESS_DELAY_SECONDS)
    if delay < MIN_POLITENESS_DELAY_SECONDS:
        raise ConfigurationError(
            f"JUCESP_DELAY_SECONDS must be at least {MIN_POLITENESS_DELAY_SECONDS:g}"
        )
    resilience = _default_resilience(base_url, user_agent)
    return JucespConfig(
        politeness_delay_seconds=delay,
        # the scrape waits before its first request, so the budget covers both
        timeout_seconds=delay + resilience.timeout_seconds,
        resilience=resilience,
    )
