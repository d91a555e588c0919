"""
Domain services for the exercise catalog.

- exercise_normalizer: Validates and normalizes a submitted exercise tree
- catalog_merge: Applies a create/update intent to the catalog
"""

from domain.services.catalog_merge import (
    CatalogIntent,
    CreateExercise,
    UpdateExercise,
    apply_intent,
)
from domain.services.exercise_normalizer import (
    ID_PATTERN,
    TreeLevel,
    VARIATION_LEVEL,
    SUB_VARIATION_LEVEL,
    EXECUTION_TYPE_LEVEL,
    normalize_exercise,
    normalize_nodes,
)

__all__ = [
    "CatalogIntent",
    "CreateExercise",
    "UpdateExercise",
    "apply_intent",
    "ID_PATTERN",
    "TreeLevel",
    "VARIATION_LEVEL",
    "SUB_VARIATION_LEVEL",
    "EXECUTION_TYPE_LEVEL",
    "normalize_exercise",
    "normalize_nodes",
]
