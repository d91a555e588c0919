"""
GetCatalog Use Case.

Reads the live catalog for the editor page. No caching: every call goes to
the store, so the returned sha is the one a later save must present.
"""

import logging
from typing import Any, Dict

from application.ports import DocumentSnapshot, ExerciseDocumentStore

logger = logging.getLogger(__name__)


class GetCatalogUseCase:
    """Use case returning the current catalog and its version token."""

    def __init__(self, store: ExerciseDocumentStore, path: str, branch: str) -> None:
        self._store = store
        self._path = path
        self._branch = branch

    async def execute(self) -> DocumentSnapshot:
        return await self._store.fetch(self._path, self._branch)

    async def execute_as_payload(self) -> Dict[str, Any]:
        """Snapshot shaped for the editor: ``{"exercises": [...], "sha": "..."}``."""
        snapshot = await self.execute()
        return {"exercises": snapshot.catalog.to_wire(), "sha": snapshot.sha}
