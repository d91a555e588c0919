"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, Depends

from backend.settings import Settings, get_settings

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    """
    Simple liveness endpoint for the editor.

    Returns:
        dict: Status indicator plus whether the GitHub store is configured
    """
    return {
        "status": "ok",
        "store_configured": settings.is_github_configured,
    }
