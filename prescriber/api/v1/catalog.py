"""
Reference catalog endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from starlette.requests import Request

from prescriber.core.auth import verify_api_key
from prescriber.core.exceptions import StoreError
from prescriber.core.rate_limit import get_rate_limit_string, limiter
from prescriber.dependencies import get_reference_catalog
from prescriber.schemas.interactions import AllergySearchResponse, DrugSearchResponse
from prescriber.services.catalog import ReferenceCatalog

router = APIRouter()


@router.get(
    "/drugs",
    response_model=DrugSearchResponse,
    dependencies=[Depends(verify_api_key)]
)
@limiter.limit(get_rate_limit_string)
async def search_drugs(
    request: Request,
    pattern: str = Query(..., min_length=1, max_length=100, description="Substring of the label name"),
    page: Optional[int] = Query(None, ge=0, description="Zero-based page; omit for all results"),
    catalog: ReferenceCatalog = Depends(get_reference_catalog)
):
    """Search drugs by label name."""
    try:
        drugs = await catalog.query_drugs(pattern, page)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Reference store query failed ({e.category})"
        ) from e

    return DrugSearchResponse(
        pattern=pattern,
        page=page,
        page_size=catalog.page_size if page is not None else None,
        drugs=drugs
    )


@router.get(
    "/allergies",
    response_model=AllergySearchResponse,
    dependencies=[Depends(verify_api_key)]
)
@limiter.limit(get_rate_limit_string)
async def search_allergies(
    request: Request,
    prefix: str = Query(..., min_length=1, max_length=100, description="Start of the allergen group name"),
    catalog: ReferenceCatalog = Depends(get_reference_catalog)
):
    """Search allergen groups by name prefix."""
    try:
        allergies = await catalog.query_allergies(prefix)
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Reference store query failed ({e.category})"
        ) from e

    return AllergySearchResponse(prefix=prefix, allergies=allergies)
