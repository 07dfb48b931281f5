"""Health check endpoint — never touches the index store."""

from fastapi import APIRouter

from ontosearch.config import get_settings
from ontosearch.infrastructure.dependencies import get_query_factory

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the application health status and whether the universe cache is warm."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "universe_cached": get_query_factory().universe.is_populated,
    }
