"""
Domain layer for the exercise catalog editor.

This package contains the catalog entities and the pure logic that validates
submissions and merges them into the catalog. It is independent of
infrastructure concerns (GitHub, HTTP, configuration).
"""

from domain.models import (
    CatalogEntry,
    ExecutionType,
    Exercise,
    ExerciseCatalog,
    ExerciseGroup,
    SubVariation,
    TreeNode,
    Variation,
)

__all__ = [
    "CatalogEntry",
    "ExecutionType",
    "Exercise",
    "ExerciseCatalog",
    "ExerciseGroup",
    "SubVariation",
    "TreeNode",
    "Variation",
]
