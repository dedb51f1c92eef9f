"""Core modules for the Prescriber interaction service."""

from prescriber.core.auth import verify_api_key
from prescriber.core.exceptions import (
    EmptyCandidateSetError,
    InvalidIdentifierError,
    PreconditionError,
    PrescriberError,
    StoreError,
    StoreQueryError,
    StoreTimeoutError,
    StoreUnavailableError,
)
from prescriber.core.logging import get_logger, setup_logging
from prescriber.core.rate_limit import limiter, get_remote_address

__all__ = [
    "verify_api_key",
    "EmptyCandidateSetError",
    "InvalidIdentifierError",
    "PreconditionError",
    "PrescriberError",
    "StoreError",
    "StoreQueryError",
    "StoreTimeoutError",
    "StoreUnavailableError",
    "get_logger",
    "setup_logging",
    "limiter",
    "get_remote_address",
]
