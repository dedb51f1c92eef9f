"""
Interaction discovery engine.

Looks up food, allergy and drug-to-drug interactions for a drug being
prescribed, running the three reference store queries concurrently and
merging the drug-to-drug rows against the patient's prescribed drugs.
"""

import asyncio
import time
from typing import Any, Optional

from prescriber.config import get_settings
from prescriber.core.exceptions import StoreError, StoreTimeoutError
from prescriber.core.logging import get_logger
from prescriber.core.metrics import INTERACTIONS_FOUND, QUERY_FAILURES, QUERY_LATENCY
from prescriber.db import queries
from prescriber.db.reference_store import ReferenceStore, get_reference_store
from prescriber.schemas.interactions import (
    Drug,
    DrugToAllergyInteraction,
    DrugToDrugInteraction,
    DrugToFoodInteraction,
    InteractionKind,
    Patient,
)
from prescriber.services.assembler import (
    build_allergy_interaction,
    build_drug_interaction,
    build_food_interaction,
)
from prescriber.services.candidates import CandidateSet, allergy_codes
from prescriber.services.merge import merge_join

logger = get_logger(__name__)

FOOD = "food_interactions"
ALLERGY = "allergy_interactions"
DRUG = "drug_interactions"


class InteractionEngine:
    """
    Finds every interaction a drug would have with a patient.

    ``find_interactions`` is fail-fast: the first branch to fail cancels
    the others and its error is raised. Callers get the complete list or
    one error, never a partial list.
    """

    def __init__(
        self,
        store: ReferenceStore,
        interaction_timeout: Optional[float] = None
    ):
        self._store = store
        self._interaction_timeout = interaction_timeout

    async def _fetch(self, category: str, query: str, *args: Any) -> list:
        """Run one store query, recording latency and failures."""
        start = time.perf_counter()
        try:
            rows = await self._store.fetch(category, query, *args)
        except StoreError:
            QUERY_FAILURES.labels(category=category).inc()
            raise
        finally:
            QUERY_LATENCY.labels(category=category).observe(time.perf_counter() - start)
        return list(rows)

    async def query_food_interactions(self, drug: Drug) -> list[DrugToFoodInteraction]:
        """
        Find foods that interact with a drug.

        Args:
            drug: Drug being prescribed.

        Returns:
            One interaction per distinct food result.
        """
        rows = await self._fetch(FOOD, queries.FOOD_INTERACTIONS, drug.gcn_seqno)
        return [build_food_interaction(drug, row) for row in rows]

    async def query_allergy_interactions(
        self,
        drug: Drug,
        patient: Patient
    ) -> list[DrugToAllergyInteraction]:
        """
        Find the patient's allergies that a drug would trigger.

        Args:
            drug: Drug being prescribed.
            patient: Patient whose allergies are checked.

        Returns:
            One interaction per triggered allergen group. Empty, without
            querying, when the patient has no recorded allergies.
        """
        codes = allergy_codes(patient)
        if not codes:
            return []

        rows = await self._fetch(ALLERGY, queries.ALLERGY_INTERACTIONS, drug.ingredient_id, codes)
        return [build_allergy_interaction(drug, row) for row in rows]

    async def query_drug_interactions(
        self,
        drug: Drug,
        patient: Patient
    ) -> list[DrugToDrugInteraction]:
        """
        Find interactions between a drug and those the patient already takes.

        Args:
            drug: Drug being prescribed.
            patient: Patient whose prescribed drugs are checked.

        Returns:
            Interactions in ascending order of the other drug's id. Empty,
            without querying, when nothing is prescribed yet.
        """
        candidates = CandidateSet.from_patient(patient)
        if candidates.is_empty:
            return []

        logger.debug(
            "Querying drug-to-drug interactions",
            extra={
                "drug_id": drug.id,
                "ingredient_ids": candidates.ingredient_csv,
                "candidate_ids": candidates.drug_id_csv
            }
        )

        rows = await self._fetch(
            DRUG,
            queries.DRUG_INTERACTIONS,
            drug.ingredient_id,
            list(candidates.ingredient_ids),
            list(candidates.drug_ids)
        )
        keyed = ((row["target_id"], row["effect_text"]) for row in rows)
        return [
            build_drug_interaction(drug, other, effect_text)
            for other, effect_text in merge_join(candidates.drugs, keyed)
        ]

    async def find_interactions(self, drug: Drug, patient: Patient) -> list:
        """
        Find food, allergy and drug-to-drug interactions concurrently.

        Args:
            drug: Drug being prescribed.
            patient: Patient being prescribed to.

        Returns:
            Food, then allergy, then drug-to-drug interactions.

        Raises:
            StoreError: The first branch failure, or a timeout of the whole
                lookup. Remaining branches are cancelled.
        """
        tasks = [
            asyncio.create_task(self.query_food_interactions(drug), name=FOOD),
            asyncio.create_task(self.query_allergy_interactions(drug, patient), name=ALLERGY),
            asyncio.create_task(self.query_drug_interactions(drug, patient), name=DRUG),
        ]

        try:
            done, pending = await asyncio.wait(
                tasks,
                timeout=self._interaction_timeout,
                return_when=asyncio.FIRST_EXCEPTION
            )
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        # Branch order decides which error wins when several failed together
        failures = [task for task in tasks if task in done and task.exception() is not None]
        if failures:
            error = failures[0].exception()
            logger.error(
                f"Interaction lookup failed in {failures[0].get_name()}",
                extra={
                    "drug_id": drug.id,
                    "cancelled": [task.get_name() for task in pending]
                }
            )
            raise error

        if pending:
            timeout = self._interaction_timeout or 0.0
            logger.error(
                "Interaction lookup timed out",
                extra={"drug_id": drug.id, "pending": [task.get_name() for task in pending]}
            )
            raise StoreTimeoutError("interactions", timeout)

        interactions: list = []
        for task in tasks:
            interactions.extend(task.result())

        for interaction in interactions:
            INTERACTIONS_FOUND.labels(kind=InteractionKind(interaction.kind).value).inc()

        logger.info(
            f"Found {len(interactions)} interactions for drug {drug.id}",
            extra={
                "food": len(tasks[0].result()),
                "allergy": len(tasks[1].result()),
                "drug": len(tasks[2].result())
            }
        )
        return interactions


# Singleton instance
_engine_instance: Optional[InteractionEngine] = None


async def get_interaction_engine() -> InteractionEngine:
    """Get or create the InteractionEngine bound to the global reference store."""
    global _engine_instance
    if _engine_instance is None:
        settings = get_settings()
        store = await get_reference_store()
        _engine_instance = InteractionEngine(store, settings.INTERACTION_TIMEOUT)
    return _engine_instance


def reset_interaction_engine() -> None:
    """Drop the cached engine, e.g. after the store is closed."""
    global _engine_instance
    _engine_instance = None
