"""Exceptions raised by the Prescriber interaction service."""

from typing import Optional


class PrescriberError(Exception):
    """Base exception for all Prescriber errors."""
    pass


# Reference store errors

class StoreError(PrescriberError):
    """Base exception for reference store failures."""

    def __init__(self, category: str, message: str):
        super().__init__(f"{category}: {message}")
        self.category = category


class StoreUnavailableError(StoreError):
    """The reference store pool is not connected."""

    def __init__(self, category: str = "connection"):
        super().__init__(category, "reference store is not connected")


class StoreQueryError(StoreError):
    """
    A query against the reference store failed.

    Carries the driver-provided SQLSTATE so the failure can be diagnosed
    without exposing the raw driver exception to end users.
    """

    def __init__(self, category: str, sqlstate: Optional[str] = None, detail: str = ""):
        message = f"query failed (sqlstate={sqlstate or 'unknown'})"
        if detail:
            message += f": {detail}"
        super().__init__(category, message)
        self.sqlstate = sqlstate


class StoreTimeoutError(StoreError):
    """A query (or the whole fan-out) exceeded its time budget."""

    def __init__(self, category: str, timeout: float):
        super().__init__(category, f"timed out after {timeout:.1f}s")
        self.timeout = timeout


# Caller precondition errors

class PreconditionError(PrescriberError):
    """Base exception for invalid engine inputs."""
    pass


class EmptyCandidateSetError(PreconditionError):
    """Drug-to-drug matching was asked to run without any prescribed drugs."""

    def __init__(self):
        super().__init__("candidate set is empty; drug-to-drug matching needs at least one drug")


class InvalidIdentifierError(PreconditionError):
    """A key bound into a query list was not an integer."""

    def __init__(self, field: str, value: object):
        super().__init__(f"{field} must be an integer, got {value!r}")
        self.field = field
        self.value = value
