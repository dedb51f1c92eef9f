"""Services for the Prescriber interaction service."""

from prescriber.services.candidates import CandidateSet
from prescriber.services.catalog import ReferenceCatalog
from prescriber.services.interaction_engine import InteractionEngine
from prescriber.services.merge import merge_join

__all__ = [
    "CandidateSet",
    "ReferenceCatalog",
    "InteractionEngine",
    "merge_join",
]
