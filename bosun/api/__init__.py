"""HTTP API for Bosun."""

from fastapi import APIRouter

from bosun.api.v1 import router as v1_router

# Main API router
router = APIRouter()
router.include_router(v1_router)

__all__ = ["router"]
