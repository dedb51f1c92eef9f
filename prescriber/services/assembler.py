"""
Turns reference store rows into typed interaction records.

Text columns in the dataset are fixed-width and padded; everything is
trimmed here before it reaches a model.
"""

from typing import Any, Mapping, Optional

from prescriber.schemas.interactions import (
    Allergy,
    Drug,
    DrugToAllergyInteraction,
    DrugToDrugInteraction,
    DrugToFoodInteraction,
)


def clean_text(value: Optional[str]) -> str:
    """Trim a fixed-width text column; NULL becomes an empty string."""
    return value.strip() if value else ""


def drug_from_row(row: Mapping[str, Any]) -> Drug:
    """Build a Drug from a catalog search row."""
    return Drug(
        id=row["drug_id"],
        name=clean_text(row["label_name"]),
        ingredient_id=row["ingredient_id"],
        gcn_seqno=row["gcn_seqno"],
    )


def allergy_from_row(row: Mapping[str, Any]) -> Allergy:
    """Build an Allergy from an allergen group row."""
    return Allergy(
        id=row["allergen_group"],
        name=clean_text(row["allergen_description"]),
    )


def build_drug_interaction(drug: Drug, other: Drug, effect_text: str) -> DrugToDrugInteraction:
    effect = clean_text(effect_text)
    return DrugToDrugInteraction(
        drug=drug,
        other_drug=other,
        description=f"{drug.name} {effect} {other.name}",
    )


def build_food_interaction(drug: Drug, row: Mapping[str, Any]) -> DrugToFoodInteraction:
    food = clean_text(row["food_result"])
    return DrugToFoodInteraction(drug=drug, food=food, description=food)


def build_allergy_interaction(drug: Drug, row: Mapping[str, Any]) -> DrugToAllergyInteraction:
    allergy = allergy_from_row(row)
    return DrugToAllergyInteraction(
        allergy=allergy,
        drug=drug,
        description=f"{drug.name} contains allergen group {allergy.name}",
    )
