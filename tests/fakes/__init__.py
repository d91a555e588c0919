"""
Fake implementations of the application ports for testing.

This package provides in-memory implementations for fast, isolated tests
without external dependencies (GitHub).

Usage:
    from tests.fakes import FakeExerciseDocumentStore

    store = FakeExerciseDocumentStore({"data/exercises.json": []})
    use_case = SaveExerciseUseCase(store=store, path="data/exercises.json", branch="main")
"""

from tests.fakes.document_store import FakeExerciseDocumentStore, blob_sha

__all__ = [
    "FakeExerciseDocumentStore",
    "blob_sha",
]
