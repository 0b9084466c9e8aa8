"""Caller identity configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import require_env_var
from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class IdentityConfig:
    """Maps API tokens to the actor names recorded in the audit trail."""

    tokens: dict[str, str] = field(default_factory=dict[str, str])


def parse_token_map(raw: str) -> dict[str, str]:
    tokens: dict[str, str] = {}
    for item in raw.split(","):
        entry = item.strip()
        if not entry:
            continue
        token, sep, actor = entry.partition(":")
        if not sep or not token.strip() or not actor.strip():
            raise ConfigurationError(f"Invalid token mapping entry: {entry!r}")
        tokens[token.strip()] = actor.strip()
    return tokens


def get_identity_config() -> IdentityConfig:
    return IdentityConfig(tokens=parse_token_map(require_env_var("REGRECON_API_TOKENS")))
