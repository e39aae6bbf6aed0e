"""APIRouter registration for the sample order service."""

from __future__ import annotations

from fastapi import APIRouter

from sample_order.routes.health import router as health_router
from sample_order.routes.samples import router as samples_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(samples_router, tags=["Samples"])

__all__ = ["api_router"]
