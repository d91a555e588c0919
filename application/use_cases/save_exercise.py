"""
SaveExercise Use Case.

Orchestrates one edit submitted from the editor form, handling both
create (new exercise) and update (existing exercise) operations.

Workflow:
1. Check required fields
2. Re-read the live catalog and its sha from the store
3. Reject with a conflict if the sha differs from the one the form was loaded with
4. Validate/normalize the submitted tree against every id already in use
5. Merge into the catalog and re-sort
6. Commit, conditioned on the sha read in step 2

Nothing is written unless every step before the commit succeeds.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from application.exceptions import DocumentConflictError
from application.ports import ExerciseDocumentStore
from domain.exceptions import ExerciseValidationError, ValidationErrorKind
from domain.models import Exercise
from domain.services import (
    CreateExercise,
    UpdateExercise,
    apply_intent,
    normalize_exercise,
)

logger = logging.getLogger(__name__)


@dataclass
class ExerciseSubmission:
    """Editor form contents, decoded but not yet validated."""

    group: str = ""
    base_id: str = ""
    base_name: str = ""
    file_sha: str = ""
    edit_mode: bool = False
    original_base_id: Optional[str] = None
    variations: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_form(cls, form: Dict[str, Any]) -> "ExerciseSubmission":
        """Build from the nested form mapping (see api.forms.parse_nested_form)."""
        variations = form.get("variations") or []
        if isinstance(variations, dict):
            variations = list(variations.values())
        return cls(
            group=str(form.get("group") or ""),
            base_id=str(form.get("baseId") or ""),
            base_name=str(form.get("baseName") or ""),
            file_sha=str(form.get("fileSha") or ""),
            edit_mode=str(form.get("editMode") or "").strip() == "true",
            original_base_id=(str(form.get("originalBaseId") or "").strip() or None),
            variations=variations,
        )

    def missing_fields(self) -> List[str]:
        missing = [
            name
            for name, value in (
                ("group", self.group),
                ("baseId", self.base_id),
                ("baseName", self.base_name),
                ("fileSha", self.file_sha),
            )
            if not value.strip()
        ]
        if self.edit_mode and not self.original_base_id:
            missing.append("originalBaseId")
        return missing


@dataclass
class SaveExerciseResult:
    """Result of a successful SaveExercise execution."""

    exercise: Exercise
    group_name: str
    is_update: bool
    file_path: str
    commit_message: str
    new_sha: str


class SaveExerciseUseCase:
    """
    Use case for saving one exercise into the catalog document.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = SaveExerciseUseCase(store=store, path="data/exercises.json", branch="main")
        >>> result = await use_case.execute(submission)
        >>> print(result.commit_message)
    """

    def __init__(
        self,
        store: ExerciseDocumentStore,
        path: str,
        branch: str,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            store: Versioned document store holding the catalog
            path: Catalog file path in the store
            branch: Branch to read from and commit to
        """
        self._store = store
        self._path = path
        self._branch = branch

    async def execute(self, submission: ExerciseSubmission) -> SaveExerciseResult:
        """
        Execute the save workflow.

        Args:
            submission: Decoded form contents

        Returns:
            SaveExerciseResult describing the committed change

        Raises:
            ExerciseValidationError: Submission breaks a validation rule
            ExerciseNotFoundError: Update target no longer exists
            DocumentConflictError: Catalog changed since the form was loaded
            DocumentStoreError: Any other store failure
        """
        missing = submission.missing_fields()
        if missing:
            raise ExerciseValidationError(
                ValidationErrorKind.MISSING_FIELD,
                f"Incomplete data, missing: {', '.join(missing)}.",
            )

        # Step 1: Fresh read right before modifying
        snapshot = await self._store.fetch(self._path, self._branch)

        # Step 2: Optimistic concurrency check against the sha the form saw
        if snapshot.sha != submission.file_sha:
            logger.warning(
                "Conflict on %s: form loaded sha %s, store has %s",
                self._path,
                submission.file_sha[:7],
                snapshot.sha[:7],
            )
            raise DocumentConflictError(
                "The exercise catalog changed since this page was loaded.",
                expected_sha=submission.file_sha,
                current_sha=snapshot.sha,
            )

        # Step 3: Validate and normalize against every id already in use
        is_update = submission.edit_mode
        seen_ids = snapshot.catalog.all_ids(
            exclude_exercise_id=submission.original_base_id if is_update else None
        )
        exercise = normalize_exercise(
            submission.base_id,
            submission.base_name,
            submission.variations,
            seen_ids,
        )

        # Step 4: Merge
        group_name = submission.group.strip()
        if is_update:
            intent = UpdateExercise(
                original_id=submission.original_base_id,
                group_name=group_name,
                exercise=exercise,
            )
            commit_message = f"feat: Update global exercise '{exercise.name}' via editor"
        else:
            intent = CreateExercise(group_name=group_name, exercise=exercise)
            commit_message = f"feat: Add global exercise '{exercise.name}' via editor"

        catalog = apply_intent(snapshot.catalog, intent)
        logger.info(
            "Catalog updated (%s %s): %d groups, %d exercises",
            "update" if is_update else "create",
            exercise.id,
            len(catalog.groups),
            catalog.exercise_count,
        )

        # Step 5: Commit over the sha just read
        new_sha = await self._store.commit(
            self._path,
            self._branch,
            catalog,
            expected_sha=snapshot.sha,
            message=commit_message,
        )

        return SaveExerciseResult(
            exercise=exercise,
            group_name=group_name,
            is_update=is_update,
            file_path=self._path,
            commit_message=commit_message,
            new_sha=new_sha,
        )
