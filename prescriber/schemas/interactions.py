"""
Prescriber Schemas - Reference Data and Interaction Models

Pydantic models for drugs, allergies, patients and the three kinds of
interaction the engine reports.
"""

import bisect
from enum import Enum
from typing import Annotated, Iterable, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


# ============================================================================
# ENUMS
# ============================================================================

class InteractionKind(str, Enum):
    """Kinds of interaction the engine looks up."""
    DRUG_DRUG = "drug_drug"
    DRUG_FOOD = "drug_food"
    DRUG_ALLERGY = "drug_allergy"


# ============================================================================
# REFERENCE VALUES
# ============================================================================

class Drug(BaseModel):
    """
    A drug from the reference dataset.

    Drugs are ordered, compared and hashed by ``id`` alone. The merge-join
    relies on that ordering.
    """
    id: int = Field(..., description="Unique drug identifier (DIN)")
    name: str = Field(..., min_length=1, description="Label name")
    ingredient_id: int = Field(..., description="Ingredient-class identifier (HICL_SEQNO)")
    gcn_seqno: int = Field(..., description="Ingredient sequence identifier (GCN_SEQNO)")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": 2229519,
                "name": "CARDIOQUIN 275MG TABLET",
                "ingredient_id": 1634,
                "gcn_seqno": 3996
            }
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Drug):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: "Drug") -> bool:
        if not isinstance(other, Drug):
            return NotImplemented
        return self.id < other.id

    def __le__(self, other: "Drug") -> bool:
        if not isinstance(other, Drug):
            return NotImplemented
        return self.id <= other.id

    def __gt__(self, other: "Drug") -> bool:
        if not isinstance(other, Drug):
            return NotImplemented
        return self.id > other.id

    def __ge__(self, other: "Drug") -> bool:
        if not isinstance(other, Drug):
            return NotImplemented
        return self.id >= other.id

    def __hash__(self) -> int:
        return hash(self.id)


class Allergy(BaseModel):
    """An allergen group from the reference dataset."""
    id: int = Field(..., description="Allergen group code (DAM_ALRGN_GRP)")
    name: str = Field(..., description="Allergen group description")

    class Config:
        frozen = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Allergy):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def first_by_id(drugs: Iterable[Drug]) -> list[Drug]:
    """Drop repeated drug ids, keeping the first drug seen for each."""
    unique: dict[int, Drug] = {}
    for drug in drugs:
        unique.setdefault(drug.id, drug)
    return list(unique.values())


class Patient(BaseModel):
    """
    A patient being prescribed to.

    ``drugs`` is kept sorted ascending by drug id with duplicates collapsed,
    however the caller supplied it.
    """
    drugs: list[Drug] = Field(default_factory=list, description="Currently prescribed drugs")
    allergies: list[Allergy] = Field(default_factory=list, description="Known allergies")

    @field_validator("drugs")
    @classmethod
    def sort_and_dedupe_drugs(cls, drugs: list[Drug]) -> list[Drug]:
        return sorted(first_by_id(drugs))

    def prescribe(self, drug: Drug) -> None:
        """Add a drug to the prescribed set, keeping it sorted and unique."""
        index = bisect.bisect_left(self.drugs, drug)
        if index < len(self.drugs) and self.drugs[index].id == drug.id:
            return
        self.drugs.insert(index, drug)


# ============================================================================
# INTERACTIONS
# ============================================================================

class DrugToDrugInteraction(BaseModel):
    """The drug being prescribed interacts with one the patient already takes."""
    kind: Literal["drug_drug"] = "drug_drug"
    drug: Drug
    other_drug: Drug
    description: str

    class Config:
        frozen = True


class DrugToFoodInteraction(BaseModel):
    """The drug being prescribed interacts with a food."""
    kind: Literal["drug_food"] = "drug_food"
    drug: Drug
    food: str
    description: str

    class Config:
        frozen = True


class DrugToAllergyInteraction(BaseModel):
    """The drug being prescribed triggers one of the patient's allergies."""
    kind: Literal["drug_allergy"] = "drug_allergy"
    allergy: Allergy
    drug: Drug
    description: str

    class Config:
        frozen = True


DrugInteraction = Annotated[
    Union[DrugToDrugInteraction, DrugToFoodInteraction, DrugToAllergyInteraction],
    Field(discriminator="kind"),
]


# ============================================================================
# REQUEST / RESPONSE
# ============================================================================

class InteractionRequest(BaseModel):
    """Request to check a drug against a patient."""
    drug: Drug = Field(..., description="Drug being prescribed")
    patient: Patient = Field(default_factory=Patient, description="Patient being prescribed to")


class InteractionResponse(BaseModel):
    """All interactions found for a drug and patient."""
    drug_id: int
    interactions: list[DrugInteraction] = Field(default_factory=list)
    total: int = 0
    counts_by_kind: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_interactions(cls, drug: Drug, interactions: list) -> "InteractionResponse":
        counts = {kind.value: 0 for kind in InteractionKind}
        for interaction in interactions:
            counts[InteractionKind(interaction.kind).value] += 1
        return cls(
            drug_id=drug.id,
            interactions=interactions,
            total=len(interactions),
            counts_by_kind=counts
        )


class DrugSearchResponse(BaseModel):
    """Drugs matching a name pattern."""
    pattern: str
    page: Optional[int] = None
    page_size: Optional[int] = None
    drugs: list[Drug] = Field(default_factory=list)


class AllergySearchResponse(BaseModel):
    """Allergen groups matching a name prefix."""
    prefix: str
    allergies: list[Allergy] = Field(default_factory=list)
