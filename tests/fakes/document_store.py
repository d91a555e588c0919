"""
Fake ExerciseDocumentStore for testing.

This module provides an in-memory fake implementation of ExerciseDocumentStore
for unit testing without GitHub access. Version tokens are computed the way
git computes blob shas, so every distinct content has a distinct token.
"""
import hashlib
import json
from typing import Any, Dict, List, Optional

from application.exceptions import DocumentConflictError, DocumentNotFoundError
from application.ports import DocumentSnapshot
from domain.models import ExerciseCatalog


def blob_sha(text: str) -> str:
    """Compute the git blob sha of a text file."""
    data = text.encode("utf-8")
    return hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()


class FakeExerciseDocumentStore:
    """
    In-memory fake implementation of ExerciseDocumentStore for testing.

    Holds one catalog file per (path, branch). Records every commit so tests
    can assert on what would have been pushed.
    """

    def __init__(
        self,
        documents: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        branch: str = "main",
    ):
        """
        Initialize with optional stored documents.

        Args:
            documents: Mapping of file path to catalog JSON (list of groups)
            branch: Branch the documents live on
        """
        self._files: Dict[tuple, str] = {}
        for path, data in (documents or {}).items():
            self.put_raw(path, json.dumps(data, indent=2, ensure_ascii=False), branch)
        self.commits: List[Dict[str, Any]] = []
        self.fetch_count = 0
        self.fail_with: Optional[Exception] = None

    # -------------------------------------------------------------------------
    # Test helpers
    # -------------------------------------------------------------------------

    def put_raw(self, path: str, text: str, branch: str = "main") -> str:
        """Store raw file text, simulating a commit made by someone else."""
        self._files[(path, branch)] = text
        return blob_sha(text)

    def raw(self, path: str, branch: str = "main") -> Optional[str]:
        return self._files.get((path, branch))

    def data(self, path: str, branch: str = "main") -> Any:
        return json.loads(self._files[(path, branch)])

    def sha(self, path: str, branch: str = "main") -> str:
        return blob_sha(self._files[(path, branch)])

    # -------------------------------------------------------------------------
    # ExerciseDocumentStore
    # -------------------------------------------------------------------------

    async def fetch(self, path: str, branch: str) -> DocumentSnapshot:
        self.fetch_count += 1
        if self.fail_with is not None:
            raise self.fail_with
        text = self._files.get((path, branch))
        if text is None:
            raise DocumentNotFoundError(path, branch)
        catalog = ExerciseCatalog.from_wire(json.loads(text))
        return DocumentSnapshot(catalog=catalog, sha=blob_sha(text))

    async def commit(
        self,
        path: str,
        branch: str,
        catalog: ExerciseCatalog,
        expected_sha: str,
        message: str,
    ) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        text = self._files.get((path, branch))
        if text is None:
            raise DocumentNotFoundError(path, branch)
        current_sha = blob_sha(text)
        if current_sha != expected_sha:
            raise DocumentConflictError(
                f"'{path}' is at {current_sha} but expected {expected_sha}",
                expected_sha=expected_sha,
                current_sha=current_sha,
            )

        new_text = catalog.to_json()
        self._files[(path, branch)] = new_text
        new_sha = blob_sha(new_text)
        self.commits.append(
            {
                "path": path,
                "branch": branch,
                "message": message,
                "expected_sha": expected_sha,
                "sha": new_sha,
            }
        )
        return new_sha
