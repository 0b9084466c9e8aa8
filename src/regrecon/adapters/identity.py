"""Token-table identity provider."""

from __future__ import annotations

import hmac
from typing import TYPE_CHECKING

from regrecon.domain.ports import Actor

if TYPE_CHECKING:
    from collections.abc import Mapping


class StaticTokenIdentityProvider:
    """Resolve bearer tokens against a fixed token-to-actor map."""

    def __init__(self, tokens: Mapping[str, str]) -> None:
        self._tokens = dict(tokens)

    def identify(self, credentials: str | None) -> Actor | None:
        if not credentials:
            return None
        token = credentials.removeprefix("Bearer ").strip()
        if not token:
            return None
        for known, actor in self._tokens.items():
            if hmac.compare_digest(known.encode(), token.encode()):
                return Actor(id=actor)
        return None


if TYPE_CHECKING:
    from regrecon.domain.ports import IdentityProvider

    _identity_check: IdentityProvider = StaticTokenIdentityProvider({})
