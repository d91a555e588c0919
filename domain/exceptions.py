"""
Domain exceptions for catalog validation and merging.

These are always caused by the submitted data (or by the submission no longer
matching the catalog) and are mapped to HTTP responses at the router boundary.
"""

from enum import Enum
from typing import Optional


class ValidationErrorKind(str, Enum):
    """Which validation rule rejected the submission."""

    MISSING_FIELD = "missing_field"
    EMPTY_NAME = "empty_name"
    INVALID_ID = "invalid_id"
    DUPLICATE_ID = "duplicate_id"


class ExerciseValidationError(Exception):
    """Raised when a submitted exercise tree breaks a validation rule.

    Only the first failing rule is reported; the whole submission is rejected.
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        level: Optional[str] = None,
        entry_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.level = level
        self.entry_id = entry_id


class ExerciseNotFoundError(Exception):
    """Raised when an update references an exercise id absent from the catalog."""

    def __init__(self, exercise_id: str):
        super().__init__(f"Original exercise '{exercise_id}' was not found in the catalog")
        self.exercise_id = exercise_id
