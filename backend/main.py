"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from pathlib import Path
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Editor UI (index.html and assets), served at the site root
PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="Exercise Catalog Editor",
        description="Edits the global exercise catalog and commits it to GitHub",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _include_routers(app)
    # Mounted last so API routes take precedence over static files
    _mount_static(app)
    _log_store_config(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for exercise catalog editor")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
    ]
    trusted_origins.extend(settings.cors_allowed_origins_list)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import exercises_router, health_router

    # Health router (no prefix - /health at root)
    app.include_router(health_router)
    # Catalog read + editor save
    app.include_router(exercises_router)


def _mount_static(app: FastAPI) -> None:
    """Serve the editor UI from public/ (index.html at /)."""
    if PUBLIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")
    else:
        logger.warning("Static directory %s not found; editor UI disabled", PUBLIC_DIR)


def _log_store_config(settings: Settings) -> None:
    """Log where the catalog is read from and committed to."""
    if settings.is_github_configured:
        logger.info(
            "Catalog store: %s/%s:%s@%s",
            settings.github_owner,
            settings.github_repo,
            settings.file_path,
            settings.commit_branch,
        )
    else:
        logger.warning(
            "GitHub store not configured (GITHUB_TOKEN/GITHUB_OWNER/GITHUB_REPO/FILE_PATH); "
            "catalog endpoints will return 503"
        )


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
