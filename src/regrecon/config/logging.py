"""Shared logging helpers for regrecon."""

from __future__ import annotations

import logging
import os


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level (or ``REGRECON_LOG_LEVEL`` when set) and a terse format suitable
    for CLI and server output. Pass ``force=True`` to reconfigure during tests or
    specialised entry points.
    """

    if level is None:
        name = os.getenv("REGRECON_LOG_LEVEL", "INFO").strip().upper()
        resolved = logging.getLevelNamesMapping().get(name, logging.INFO)
    else:
        resolved = level

    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
