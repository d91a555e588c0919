"""
API package for the exercise catalog editor.

This package contains:
- deps.py: FastAPI dependency providers for DI
- forms.py: Bracket-notation form decoding
- pages.py: HTML fragments for the save endpoint
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_document_store,
    get_catalog_use_case,
    get_save_exercise_use_case,
)

__all__ = [
    # Settings
    "get_settings",
    # Store
    "get_document_store",
    # Use cases
    "get_catalog_use_case",
    "get_save_exercise_use_case",
]
