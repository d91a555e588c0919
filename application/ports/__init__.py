"""
Ports (abstract interfaces) for the exercise catalog editor.

This package defines the interfaces that decouple the save workflow from
infrastructure. Implementations are provided in infrastructure/.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the application needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ExerciseDocumentStore

    class SaveExerciseUseCase:
        def __init__(self, store: ExerciseDocumentStore, ...):
            self._store = store
"""

from application.ports.document_store import DocumentSnapshot, ExerciseDocumentStore

__all__ = [
    "DocumentSnapshot",
    "ExerciseDocumentStore",
]
