"""API v1 routes."""

from prescriber.api.v1 import catalog, health, interactions

__all__ = ["catalog", "health", "interactions"]
