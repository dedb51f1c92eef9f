"""Reference store access."""

from prescriber.db.reference_store import (
    PostgresReferenceStore,
    ReferenceStore,
    close_reference_store,
    get_reference_store,
)

__all__ = [
    "PostgresReferenceStore",
    "ReferenceStore",
    "close_reference_store",
    "get_reference_store",
]
