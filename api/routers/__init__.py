"""
Router package for the exercise catalog editor.

This package contains all API routers organized by domain:
- health: Health check endpoint
- exercises: Catalog read endpoint and the editor's save endpoint
"""

from api.routers.exercises import router as exercises_router
from api.routers.health import router as health_router

__all__ = [
    "exercises_router",
    "health_router",
]
