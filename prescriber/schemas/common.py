"""
Common schemas used across multiple endpoints.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "error": "StoreQueryError",
                "message": "drug_interactions: query failed (sqlstate=42P01)",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


class HealthResponse(BaseModel):
    """Health check response."""

    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    status: str = Field(..., description="healthy, or degraded when the reference store is down")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    reference_store: dict[str, Any] = Field(
        default_factory=dict,
        description="Reference store connection and pool status"
    )
    uptime_seconds: float = Field(default=0, description="Service uptime")

    class Config:
        json_schema_extra = {
            "example": {
                "service": "Prescriber Interaction Service",
                "version": "1.0.0",
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00Z",
                "reference_store": {
                    "connected": True,
                    "size": 3,
                    "free_size": 3,
                    "min_size": 3,
                    "max_size": 10
                },
                "uptime_seconds": 3600.5
            }
        }
