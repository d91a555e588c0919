"""
Merge of a normalized exercise into the catalog document.

Two intents are supported:
- CreateExercise: append to the named group (created if missing)
- UpdateExercise: replace an existing top-level exercise in place

After either intent the catalog is re-sorted, so final positions are decided
by name rather than insertion order. The input catalog is never mutated.
"""

import logging
from dataclasses import dataclass
from typing import Union

from domain.exceptions import (
    ExerciseNotFoundError,
    ExerciseValidationError,
    ValidationErrorKind,
)
from domain.models.catalog import ExerciseCatalog, ExerciseGroup
from domain.models.exercise import Exercise

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateExercise:
    """Add a new exercise to ``group_name``."""

    group_name: str
    exercise: Exercise


@dataclass(frozen=True)
class UpdateExercise:
    """Replace the exercise currently stored under ``original_id``."""

    original_id: str
    group_name: str
    exercise: Exercise


CatalogIntent = Union[CreateExercise, UpdateExercise]


def apply_intent(catalog: ExerciseCatalog, intent: CatalogIntent) -> ExerciseCatalog:
    """
    Compute the next catalog state for an intent.

    Args:
        catalog: Current catalog (left untouched)
        intent: CreateExercise or UpdateExercise

    Returns:
        New, canonically sorted catalog

    Raises:
        ExerciseValidationError: DUPLICATE_ID if the exercise id is taken
        ExerciseNotFoundError: If an update's original exercise is missing
    """
    updated = catalog.model_copy(deep=True)

    if isinstance(intent, CreateExercise):
        _create(updated, intent)
    elif isinstance(intent, UpdateExercise):
        _update(updated, intent)
    else:
        raise TypeError(f"Unsupported catalog intent: {type(intent).__name__}")

    updated.sort()
    return updated


def _duplicate(exercise_id: str) -> ExerciseValidationError:
    return ExerciseValidationError(
        ValidationErrorKind.DUPLICATE_ID,
        f"Base exercise id '{exercise_id}' already exists.",
        level="Base exercise",
        entry_id=exercise_id,
    )


def _create(catalog: ExerciseCatalog, intent: CreateExercise) -> None:
    exercise = intent.exercise
    if exercise.id in catalog.all_ids():
        raise _duplicate(exercise.id)

    group = catalog.find_group(intent.group_name)
    if group is None:
        group = ExerciseGroup(group=intent.group_name.strip(), items=[])
        catalog.groups.append(group)
        logger.info("Created group '%s'", group.group)

    group.items.append(exercise)


def _update(catalog: ExerciseCatalog, intent: UpdateExercise) -> None:
    located = catalog.locate_exercise(intent.original_id)
    if located is None:
        raise ExerciseNotFoundError(intent.original_id)

    exercise = intent.exercise
    if exercise.id != intent.original_id and exercise.id in catalog.all_ids(
        exclude_exercise_id=intent.original_id
    ):
        raise _duplicate(exercise.id)

    group, index = located
    if not group.matches(intent.group_name):
        # Moving between groups is not supported; the entry stays where it is
        logger.warning(
            "Exercise '%s' submitted for group '%s' but lives in '%s'; keeping current group",
            intent.original_id,
            intent.group_name,
            group.group,
        )
    group.items[index] = exercise
