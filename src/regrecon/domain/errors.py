"""Error taxonomy for registry reconciliation.

Only ``RequestError`` subclasses ever reach a caller. Source and storage errors
are absorbed where they happen and show up, at most, as fewer records or a
missing source tag.
"""

from __future__ import annotations


class RegreconError(Exception):
    """Base class for domain errors."""


class RequestError(RegreconError):
    """A caller-visible failure: the query itself could not be run."""

    status_code: int = 400


class UnauthorizedError(RequestError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InvalidInputError(RequestError):
    status_code = 400


class SourceError(RegreconError):
    """Raised inside a source adapter, recovered locally."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class SourceUnavailableError(SourceError):
    """Network, upstream status or parse failure of one source."""


class UnsupportedRegionError(SourceError):
    """The source does not cover the requested region."""

    def __init__(self, source: str, region: str) -> None:
        super().__init__(source, f"region {region} is not supported")
        self.region = region


class StorageError(RegreconError):
    """Cache or audit store write failure."""
