"""
Exercise Document Store Interface (Port).

This module defines the abstract interface for reading and conditionally
writing the catalog document. The document lives in a remote, versioned store
(a file in a GitHub repository); every read returns a version token and every
write must present the token it expects to replace.
"""
from dataclasses import dataclass
from typing import Protocol

from domain.models import ExerciseCatalog


@dataclass(frozen=True)
class DocumentSnapshot:
    """The catalog as read from the store, with its version token."""

    catalog: ExerciseCatalog
    sha: str


class ExerciseDocumentStore(Protocol):
    """
    Abstract interface for the versioned catalog document.

    Implementations never cache: each fetch reads the live document.
    Concurrency is optimistic; there is no locking.
    """

    async def fetch(self, path: str, branch: str) -> DocumentSnapshot:
        """
        Read the current catalog and its version token.

        Args:
            path: File path inside the repository
            branch: Branch to read from

        Returns:
            DocumentSnapshot with the decoded catalog and its sha

        Raises:
            DocumentNotFoundError: If path/branch does not exist
            DocumentDecodeError: If content is not a list of groups
            StoreUnauthorizedError: If the credential is rejected
            StoreTransportError: On network or unexpected store failures
        """
        ...

    async def commit(
        self,
        path: str,
        branch: str,
        catalog: ExerciseCatalog,
        expected_sha: str,
        message: str,
    ) -> str:
        """
        Write a new version, only if the stored version is still ``expected_sha``.

        Args:
            path: File path inside the repository
            branch: Branch to commit to
            catalog: Catalog to store (serialized with 2-space indentation)
            expected_sha: Version token the caller read
            message: Commit message for the new revision

        Returns:
            Version token of the new revision

        Raises:
            DocumentConflictError: If the stored version changed
            StoreUnauthorizedError: If the credential is rejected
            StoreTransportError: On network or unexpected store failures
        """
        ...
