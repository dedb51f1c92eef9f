"""
Candidate assembly for drug-to-drug interaction lookup.
"""

from dataclasses import dataclass
from typing import Iterable

from prescriber.core.exceptions import InvalidIdentifierError
from prescriber.schemas.interactions import Drug, Patient, first_by_id


def _require_int(field: str, value: object) -> int:
    # bool is an int subclass but never a valid key
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidIdentifierError(field, value)
    return value


@dataclass(frozen=True)
class CandidateSet:
    """
    Drugs a patient currently takes, sorted ascending by drug id, together
    with the two key lists the drug-to-drug query joins on.
    """

    drugs: tuple[Drug, ...]
    ingredient_ids: tuple[int, ...]
    drug_ids: tuple[int, ...]

    @classmethod
    def from_drugs(cls, drugs: Iterable[Drug]) -> "CandidateSet":
        ordered = tuple(sorted(first_by_id(drugs)))
        return cls(
            drugs=ordered,
            ingredient_ids=tuple(_require_int("ingredient_id", d.ingredient_id) for d in ordered),
            drug_ids=tuple(_require_int("drug_id", d.id) for d in ordered),
        )

    @classmethod
    def from_patient(cls, patient: Patient) -> "CandidateSet":
        return cls.from_drugs(patient.drugs)

    @property
    def is_empty(self) -> bool:
        return not self.drugs

    @property
    def ingredient_csv(self) -> str:
        """Ingredient-class identifiers as a comma-joined string."""
        return ",".join(str(i) for i in self.ingredient_ids)

    @property
    def drug_id_csv(self) -> str:
        """Drug identifiers as a comma-joined string."""
        return ",".join(str(i) for i in self.drug_ids)

    def __len__(self) -> int:
        return len(self.drugs)


def allergy_codes(patient: Patient) -> list[int]:
    """Allergen group codes for a patient, validated and de-duplicated."""
    codes = {_require_int("allergy_id", allergy.id) for allergy in patient.allergies}
    return sorted(codes)
