"""Health check endpoints."""

from fastapi import APIRouter

from skillrouter.api.deps import get_router

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Basic health check."""
    return {"status": "ok", "skills": len(get_router().skills)}
