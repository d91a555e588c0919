"""
FastAPI Dependency Providers for the exercise catalog editor.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings are cached per-process (lru_cache)
- The document store and use cases are created per-request; nothing about the
  catalog itself is cached between requests

Usage in routers:
    from api.deps import get_save_exercise_use_case
    from application.use_cases import SaveExerciseUseCase

    @router.post("/save-exercise")
    async def save(use_case: SaveExerciseUseCase = Depends(get_save_exercise_use_case)):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_document_store] = lambda: FakeExerciseDocumentStore()
"""

from fastapi import Depends, HTTPException

# Protocol types (interfaces)
from application.ports import ExerciseDocumentStore
from application.use_cases import GetCatalogUseCase, SaveExerciseUseCase

# Concrete implementations
from infrastructure import GitHubContentsStore

from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Document Store Provider
# =============================================================================


def get_document_store(
    settings: Settings = Depends(get_settings),
) -> ExerciseDocumentStore:
    """
    Get ExerciseDocumentStore implementation.

    Returns a GitHubContentsStore built from settings.
    Raises HTTPException 503 if GitHub access is not configured.

    Returns:
        ExerciseDocumentStore: Store for the catalog document
    """
    if not settings.is_github_configured:
        raise HTTPException(
            status_code=503,
            detail=(
                "Catalog store not available. Set GITHUB_TOKEN, GITHUB_OWNER, "
                "GITHUB_REPO and FILE_PATH."
            ),
        )
    return GitHubContentsStore(
        token=settings.github_token,
        owner=settings.github_owner,
        repo=settings.github_repo,
        api_url=settings.github_api_url,
        timeout=settings.github_timeout_seconds,
    )


# =============================================================================
# Use Case Providers
# =============================================================================


def get_catalog_use_case(
    store: ExerciseDocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> GetCatalogUseCase:
    """Get the read use case bound to the configured file and branch."""
    return GetCatalogUseCase(
        store=store,
        path=settings.file_path,
        branch=settings.commit_branch,
    )


def get_save_exercise_use_case(
    store: ExerciseDocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> SaveExerciseUseCase:
    """Get the save use case bound to the configured file and branch."""
    return SaveExerciseUseCase(
        store=store,
        path=settings.file_path,
        branch=settings.commit_branch,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Store
    "get_document_store",
    # Use cases
    "get_catalog_use_case",
    "get_save_exercise_use_case",
]
