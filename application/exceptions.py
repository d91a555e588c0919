"""
Application-layer exceptions.

These exceptions describe failures of the document store port and are raised
by infrastructure adapters, then mapped to HTTP responses by the routers.
"""

from typing import Optional


class DocumentStoreError(Exception):
    """Base exception for document store failures."""

    pass


class DocumentNotFoundError(DocumentStoreError):
    """Raised when the catalog file does not exist at the path/branch."""

    def __init__(self, path: str, branch: str):
        super().__init__(f"Catalog file '{path}' not found on branch '{branch}'")
        self.path = path
        self.branch = branch


class DocumentDecodeError(DocumentStoreError):
    """Raised when stored content is not a JSON list of exercise groups."""

    pass


class DocumentConflictError(DocumentStoreError):
    """Raised when the stored version no longer matches the expected one.

    Someone else committed since the caller read the document. The caller
    must reload and resubmit; the store is never overwritten.
    """

    def __init__(self, message: str, expected_sha: str, current_sha: Optional[str] = None):
        super().__init__(message)
        self.expected_sha = expected_sha
        self.current_sha = current_sha


class StoreUnauthorizedError(DocumentStoreError):
    """Raised when the store rejects the configured credential."""

    pass


class StoreTransportError(DocumentStoreError):
    """Raised on network failures, timeouts, or unexpected store responses."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
