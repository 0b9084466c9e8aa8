from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from regrecon.adapters.sqlalchemy import (
    SqlAlchemyCacheStore,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_stores_require_startup() -> None:
    shutdown()

    with pytest.raises(StartupError, match="not initialised"):
        SqlAlchemyCacheStore().get("receita:2024-05-02:SP")


def test_startup_refuses_to_reconfigure_silently(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    try:
        assert is_started()
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError, match="already initialised"):
            startup(engine=sqlite_engine)
    finally:
        shutdown()

    assert not is_started()


def test_started_stores_share_the_configured_engine(started_storage: Engine) -> None:
    store = SqlAlchemyCacheStore()

    store.put("receita:2024-05-02:SP", [], source="receita")

    entry = store.get("receita:2024-05-02:SP")
    assert entry is not None
    assert entry.payload == ()
