"""Pydantic schemas for request/response validation."""

from prescriber.schemas.common import ErrorResponse, HealthResponse
from prescriber.schemas.interactions import (
    Allergy,
    AllergySearchResponse,
    Drug,
    DrugInteraction,
    DrugSearchResponse,
    DrugToAllergyInteraction,
    DrugToDrugInteraction,
    DrugToFoodInteraction,
    InteractionKind,
    InteractionRequest,
    InteractionResponse,
    Patient,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Reference values
    "Allergy",
    "Drug",
    "Patient",
    # Interactions
    "DrugInteraction",
    "DrugToAllergyInteraction",
    "DrugToDrugInteraction",
    "DrugToFoodInteraction",
    "InteractionKind",
    "InteractionRequest",
    "InteractionResponse",
    # Catalog
    "AllergySearchResponse",
    "DrugSearchResponse",
]
