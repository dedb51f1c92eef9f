"""
Interaction discovery endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.requests import Request

from prescriber.core.auth import verify_api_key
from prescriber.core.exceptions import PreconditionError, StoreError, StoreTimeoutError
from prescriber.core.logging import get_logger
from prescriber.core.rate_limit import get_rate_limit_string, limiter
from prescriber.dependencies import get_interaction_engine
from prescriber.schemas.interactions import InteractionRequest, InteractionResponse
from prescriber.services.interaction_engine import InteractionEngine

router = APIRouter()
logger = get_logger(__name__)


def _to_http_error(exc: Exception) -> HTTPException:
    """Map engine errors to responses that name the failing query but not the driver error."""
    if isinstance(exc, StoreTimeoutError):
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=f"Interaction lookup timed out ({exc.category})"
        )
    if isinstance(exc, StoreError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Reference store query failed ({exc.category})"
        )
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=str(exc)
    )


@router.post(
    "/interactions",
    response_model=InteractionResponse,
    dependencies=[Depends(verify_api_key)]
)
@limiter.limit(get_rate_limit_string)
async def find_interactions(
    request: Request,
    body: InteractionRequest,
    engine: InteractionEngine = Depends(get_interaction_engine)
):
    """
    Check a drug against a patient's food, allergy and drug interactions.

    The three lookups run concurrently; any failure fails the request.
    """
    try:
        interactions = await engine.find_interactions(body.drug, body.patient)
    except (StoreError, PreconditionError) as e:
        raise _to_http_error(e) from e

    return InteractionResponse.from_interactions(body.drug, interactions)


@router.post(
    "/interactions/food",
    response_model=InteractionResponse,
    dependencies=[Depends(verify_api_key)]
)
@limiter.limit(get_rate_limit_string)
async def find_food_interactions(
    request: Request,
    body: InteractionRequest,
    engine: InteractionEngine = Depends(get_interaction_engine)
):
    """Foods that interact with the drug. The patient is ignored."""
    try:
        interactions = await engine.query_food_interactions(body.drug)
    except StoreError as e:
        raise _to_http_error(e) from e

    return InteractionResponse.from_interactions(body.drug, interactions)


@router.post(
    "/interactions/allergy",
    response_model=InteractionResponse,
    dependencies=[Depends(verify_api_key)]
)
@limiter.limit(get_rate_limit_string)
async def find_allergy_interactions(
    request: Request,
    body: InteractionRequest,
    engine: InteractionEngine = Depends(get_interaction_engine)
):
    """The patient's allergies the drug would trigger."""
    try:
        interactions = await engine.query_allergy_interactions(body.drug, body.patient)
    except (StoreError, PreconditionError) as e:
        raise _to_http_error(e) from e

    return InteractionResponse.from_interactions(body.drug, interactions)


@router.post(
    "/interactions/drug",
    response_model=InteractionResponse,
    dependencies=[Depends(verify_api_key)]
)
@limiter.limit(get_rate_limit_string)
async def find_drug_interactions(
    request: Request,
    body: InteractionRequest,
    engine: InteractionEngine = Depends(get_interaction_engine)
):
    """Interactions with the drugs the patient already takes."""
    try:
        interactions = await engine.query_drug_interactions(body.drug, body.patient)
    except (StoreError, PreconditionError) as e:
        raise _to_http_error(e) from e

    return InteractionResponse.from_interactions(body.drug, interactions)
