"""
Exercises router for the catalog editor.

This router provides endpoints for:
- Loading the current catalog and its version token (JSON, used by the editor page)
- Saving one exercise submitted from the editor form (HTML responses)
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from api.deps import get_catalog_use_case, get_save_exercise_use_case
from api.forms import parse_nested_form
from api.pages import (
    conflict_page,
    server_error_page,
    success_page,
    validation_error_page,
)
from application.exceptions import DocumentConflictError
from application.use_cases import (
    ExerciseSubmission,
    GetCatalogUseCase,
    SaveExerciseUseCase,
)
from domain.exceptions import ExerciseValidationError

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Exercises"],
)


# =============================================================================
# Response Models
# =============================================================================


class CatalogResponse(BaseModel):
    """Current catalog plus the sha the editor must send back when saving."""
    exercises: List[Dict[str, Any]] = Field(..., description="Groups with their exercises")
    sha: str = Field(..., description="Version token of the catalog file")


class CatalogErrorResponse(BaseModel):
    """Error payload for a failed catalog load."""
    error: str
    details: str


# =============================================================================
# Read Endpoint
# =============================================================================


@router.get(
    "/api/exercises",
    response_model=CatalogResponse,
    responses={500: {"model": CatalogErrorResponse}},
)
async def get_exercises(
    use_case: GetCatalogUseCase = Depends(get_catalog_use_case),
):
    """
    Get the current exercise catalog and its version token.

    Always reads the live file; the returned sha is the precondition for
    the next save.
    """
    try:
        return await use_case.execute_as_payload()
    except Exception as e:
        logger.exception("Failed to load exercise catalog")
        return JSONResponse(
            status_code=500,
            content={"error": "Could not load the exercise list.", "details": str(e)},
        )


# =============================================================================
# Save Endpoint
# =============================================================================


@router.post("/save-exercise", response_class=HTMLResponse)
async def save_exercise(
    request: Request,
    use_case: SaveExerciseUseCase = Depends(get_save_exercise_use_case),
) -> HTMLResponse:
    """
    Save an exercise submitted from the editor form.

    Form fields: editMode, originalBaseId, fileSha, group, baseId, baseName,
    and nested variations[i][subVariations][j][executionTypes][k][...].

    Responses:
    - 200: committed
    - 400: first failing validation rule
    - 409: the catalog changed since the form was loaded
    - 500: any other failure, with the underlying message
    """
    try:
        form = await request.form()
        submission = ExerciseSubmission.from_form(parse_nested_form(form.multi_items()))
    except Exception as e:
        logger.exception("Could not decode the submitted exercise form")
        return HTMLResponse(server_error_page(str(e)), status_code=500)

    logger.info(
        "Save requested: %s '%s' in group '%s'",
        "update" if submission.edit_mode else "create",
        submission.base_id,
        submission.group,
    )

    try:
        result = await use_case.execute(submission)
    except ExerciseValidationError as e:
        logger.warning(f"Exercise validation failed: {e.message}")
        return HTMLResponse(validation_error_page(e.message), status_code=400)
    except DocumentConflictError:
        return HTMLResponse(conflict_page(), status_code=409)
    except Exception as e:
        logger.exception(f"Saving exercise '{submission.base_id}' failed")
        return HTMLResponse(server_error_page(str(e)), status_code=500)

    logger.info(f"Exercise '{result.exercise.id}' committed (sha {result.new_sha[:7]})")
    return HTMLResponse(
        success_page(
            exercise_name=result.exercise.name,
            group_name=result.group_name,
            file_path=result.file_path,
            is_update=result.is_update,
        )
    )
