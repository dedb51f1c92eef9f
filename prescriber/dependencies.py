"""
FastAPI dependency injection utilities.
"""

from prescriber.core.auth import verify_api_key
from prescriber.db.reference_store import close_reference_store, get_reference_store
from prescriber.services.catalog import get_reference_catalog, reset_reference_catalog
from prescriber.services.interaction_engine import (
    get_interaction_engine,
    reset_interaction_engine,
)


async def close_services() -> None:
    """Drop the cached services and close the reference store on shutdown."""
    reset_interaction_engine()
    reset_reference_catalog()
    await close_reference_store()


# Re-export for convenience
__all__ = [
    "verify_api_key",
    "get_reference_store",
    "get_interaction_engine",
    "get_reference_catalog",
    "close_services",
]
