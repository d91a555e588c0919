"""
Application Use Cases for the exercise catalog editor.

This package contains application-level use cases that orchestrate domain logic
and coordinate with the document store port. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain services and the store port
- Dependencies are injected via constructors for testability
- Use cases return domain models, not API responses

Usage:
    from application.use_cases import (
        ExerciseSubmission,
        GetCatalogUseCase,
        SaveExerciseUseCase,
    )

    # Load the editor data
    payload = await GetCatalogUseCase(store, path, branch).execute_as_payload()

    # Save a submitted form
    use_case = SaveExerciseUseCase(store=store, path=path, branch=branch)
    result = await use_case.execute(ExerciseSubmission.from_form(form))
"""

from application.use_cases.get_catalog import GetCatalogUseCase
from application.use_cases.save_exercise import (
    ExerciseSubmission,
    SaveExerciseResult,
    SaveExerciseUseCase,
)

__all__ = [
    # GetCatalog
    "GetCatalogUseCase",
    # SaveExercise
    "ExerciseSubmission",
    "SaveExerciseResult",
    "SaveExerciseUseCase",
]
