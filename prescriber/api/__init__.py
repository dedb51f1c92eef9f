"""API routes for the Prescriber interaction service."""

from fastapi import APIRouter

from prescriber.api.v1 import catalog, health, interactions

# Create main API router
api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(interactions.router, tags=["interactions"])
api_router.include_router(catalog.router, tags=["catalog"])

__all__ = ["api_router"]
