"""
Reference catalog lookups: drug search and allergen group search.
"""

from typing import Optional

from prescriber.config import get_settings
from prescriber.core.logging import get_logger
from prescriber.db import queries
from prescriber.db.reference_store import ReferenceStore, get_reference_store
from prescriber.schemas.interactions import Allergy, Drug
from prescriber.services.assembler import allergy_from_row, clean_text, drug_from_row

logger = get_logger(__name__)


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ReferenceCatalog:
    """Looks up drugs and allergen groups by name."""

    def __init__(self, store: ReferenceStore, page_size: int = 20):
        self._store = store
        self.page_size = page_size

    async def query_drugs(self, pattern: str, page: Optional[int] = None) -> list[Drug]:
        """
        Find drugs whose label name contains ``pattern``.

        Args:
            pattern: Substring of the label name.
            page: Zero-based page of ``page_size`` results; None for all.

        Returns:
            Matching drugs ordered by label name.
        """
        like = f"%{escape_like(pattern)}%"
        if page is None:
            rows = await self._store.fetch("drug_search", queries.DRUG_SEARCH, like)
        else:
            rows = await self._store.fetch(
                "drug_search",
                queries.DRUG_SEARCH_PAGE,
                like,
                page * self.page_size,
                self.page_size
            )
        drugs = []
        for row in rows:
            # A blank label cannot be shown or searched for again
            if not clean_text(row["label_name"]):
                logger.warning("Skipping drug with blank label name", extra={"drug_id": row["drug_id"]})
                continue
            drugs.append(drug_from_row(row))
        logger.debug(f"Drug search '{pattern}' returned {len(drugs)} drugs", extra={"page": page})
        return drugs

    async def query_allergies(self, prefix: str) -> list[Allergy]:
        """Find allergen groups whose description starts with ``prefix``."""
        rows = await self._store.fetch(
            "allergy_search",
            queries.ALLERGY_SEARCH,
            f"{escape_like(prefix)}%"
        )
        return [allergy_from_row(row) for row in rows]


# Singleton instance
_catalog_instance: Optional[ReferenceCatalog] = None


async def get_reference_catalog() -> ReferenceCatalog:
    """Get or create the ReferenceCatalog bound to the global reference store."""
    global _catalog_instance
    if _catalog_instance is None:
        store = await get_reference_store()
        _catalog_instance = ReferenceCatalog(store, get_settings().PAGE_SIZE)
    return _catalog_instance


def reset_reference_catalog() -> None:
    """Drop the cached catalog."""
    global _catalog_instance
    _catalog_instance = None
