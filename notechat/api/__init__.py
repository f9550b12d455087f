"""
API routes module.

FastAPI routers for all HTTP endpoints. The WebSocket chat router is
mounted separately (no /api/v1 prefix) by the application factory.
"""

from fastapi import APIRouter

from .routers import (
    cancel_router,
    health_router,
    notes_router,
    threads_router,
)

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(threads_router)
api_router.include_router(notes_router)
api_router.include_router(cancel_router)

__all__ = ["api_router"]
