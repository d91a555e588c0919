"""
Domain models for the exercise catalog.

These models represent the persisted document:
- ExerciseCatalog: The aggregate root, an ordered list of groups
- ExerciseGroup: A named bucket of exercises
- Exercise: Top-level entry, owning variations
- Variation / SubVariation / ExecutionType: The three nested tree levels

Usage:
    >>> from domain.models import ExerciseCatalog

    >>> catalog = ExerciseCatalog.from_wire(json.loads(text))
    >>> text = catalog.to_json()
"""

from domain.models.catalog import ExerciseCatalog, ExerciseGroup, collation_key
from domain.models.exercise import (
    CatalogEntry,
    ExecutionType,
    Exercise,
    SubVariation,
    TreeNode,
    Variation,
)

__all__ = [
    # Aggregate
    "ExerciseCatalog",
    "ExerciseGroup",
    # Tree levels
    "CatalogEntry",
    "TreeNode",
    "Exercise",
    "Variation",
    "SubVariation",
    "ExecutionType",
    # Ordering
    "collation_key",
]
