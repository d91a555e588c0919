"""
GitHub implementation of ExerciseDocumentStore.

Reads and writes the catalog file through the GitHub REST "contents" API.
The blob sha GitHub reports for the file is the version token: a write sends
the sha it expects to replace, and GitHub refuses it (409) if the file moved
on in the meantime.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from application.exceptions import (
    DocumentConflictError,
    DocumentDecodeError,
    DocumentNotFoundError,
    StoreTransportError,
    StoreUnauthorizedError,
)
from application.ports.document_store import DocumentSnapshot
from domain.models import ExerciseCatalog

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"


def _short(sha: Optional[str]) -> str:
    return (sha or "")[:7]


class GitHubContentsStore:
    """
    GitHub contents API implementation of the ExerciseDocumentStore protocol.

    A new HTTP client is opened per call; nothing is cached between requests.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
    ):
        """
        Initialize the store.

        Args:
            token: GitHub token with contents read/write access
            owner: Repository owner (user or organization)
            repo: Repository name
            api_url: Base URL of the GitHub REST API
            timeout: Request timeout in seconds
        """
        self._token = token
        self._owner = owner
        self._repo = repo
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    @property
    def _repo_url(self) -> str:
        return f"{self._api_url}/repos/{self._owner}/{self._repo}"

    def _contents_url(self, path: str) -> str:
        return f"{self._repo_url}/contents/{quote(path.lstrip('/'))}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    async def fetch(self, path: str, branch: str) -> DocumentSnapshot:
        """
        Read the catalog file and its blob sha.

        Raises:
            DocumentNotFoundError: 404 for the path/branch
            DocumentDecodeError: Content is not a JSON list of groups
            StoreUnauthorizedError: 401/403
            StoreTransportError: Network failure or unexpected status
        """
        logger.info(f"GitHub: fetching {path}@{branch}")
        # Empty If-None-Match forces a fresh read instead of a cached 304
        headers = {**self._headers(), "If-None-Match": ""}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(
                    self._contents_url(path),
                    params={"ref": branch},
                    headers=headers,
                )
                self._raise_for_status(response, path, branch)
                data = self._json_body(response, path)
                if not isinstance(data, dict) or data.get("type", "file") != "file":
                    raise DocumentDecodeError(f"'{path}' is not a file")

                sha = data.get("sha")
                if not sha:
                    raise DocumentDecodeError(f"GitHub returned no sha for '{path}'")

                content = data.get("content") or ""
                if data.get("encoding") == "base64" and content:
                    raw = self._b64decode(content)
                else:
                    # Files over the inline size limit come back without content
                    raw = await self._fetch_blob(client, sha, path, branch)

        except httpx.TimeoutException as e:
            logger.error(f"GitHub timeout fetching {path}: {e}")
            raise StoreTransportError("GitHub request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"GitHub unavailable fetching {path}: {e}")
            raise StoreTransportError(f"GitHub request failed: {e}") from e

        catalog = self._decode_catalog(raw, path)
        logger.info(
            f"GitHub: fetched {path}@{branch} (sha {_short(sha)}, "
            f"{len(catalog.groups)} groups)"
        )
        return DocumentSnapshot(catalog=catalog, sha=sha)

    async def _fetch_blob(
        self,
        client: httpx.AsyncClient,
        sha: str,
        path: str,
        branch: str,
    ) -> bytes:
        logger.info(f"GitHub: content of {path} not inlined, fetching blob {_short(sha)}")
        response = await client.get(
            f"{self._repo_url}/git/blobs/{sha}",
            headers=self._headers(),
        )
        self._raise_for_status(response, path, branch)
        data = self._json_body(response, path)
        if not isinstance(data, dict):
            raise DocumentDecodeError(f"GitHub returned an unexpected blob payload for '{path}'")
        if data.get("encoding") != "base64":
            raise DocumentDecodeError(
                f"Unsupported blob encoding '{data.get('encoding')}' for '{path}'"
            )
        return self._b64decode(data.get("content") or "")

    @staticmethod
    def _json_body(response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DocumentDecodeError(f"GitHub returned a non-JSON body for '{path}': {e}") from e

    @staticmethod
    def _b64decode(content: str) -> bytes:
        try:
            return base64.b64decode(content)
        except (binascii.Error, ValueError) as e:
            raise DocumentDecodeError(f"Invalid base64 content: {e}") from e

    @staticmethod
    def _decode_catalog(raw: bytes, path: str) -> ExerciseCatalog:
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DocumentDecodeError(f"'{path}' is not valid UTF-8 JSON: {e}") from e

        if not isinstance(data, list):
            raise DocumentDecodeError(f"'{path}' must contain a JSON array of groups")

        try:
            return ExerciseCatalog.from_wire(data)
        except ValidationError as e:
            raise DocumentDecodeError(
                f"'{path}' does not match the exercise catalog shape: "
                f"{e.error_count()} error(s)"
            ) from e

    # -------------------------------------------------------------------------
    # Write
    # -------------------------------------------------------------------------

    async def commit(
        self,
        path: str,
        branch: str,
        catalog: ExerciseCatalog,
        expected_sha: str,
        message: str,
    ) -> str:
        """
        Create a commit replacing the file, conditioned on ``expected_sha``.

        Returns:
            Blob sha of the new file version

        Raises:
            DocumentConflictError: The file is no longer at ``expected_sha``
            DocumentNotFoundError: Repository or branch does not exist
            StoreUnauthorizedError: 401/403
            StoreTransportError: Network failure or unexpected status
        """
        content = base64.b64encode(catalog.to_json().encode("utf-8")).decode("ascii")
        payload = {
            "message": message,
            "content": content,
            "sha": expected_sha,
            "branch": branch,
        }

        logger.info(f"GitHub: committing {path}@{branch} over sha {_short(expected_sha)}")
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.put(
                    self._contents_url(path),
                    json=payload,
                    headers=self._headers(),
                )
                self._raise_for_status(response, path, branch, expected_sha=expected_sha)
                data = self._json_body(response, path)
        except httpx.TimeoutException as e:
            logger.error(f"GitHub timeout committing {path}: {e}")
            raise StoreTransportError("GitHub request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"GitHub unavailable committing {path}: {e}")
            raise StoreTransportError(f"GitHub request failed: {e}") from e

        if not isinstance(data, dict):
            raise DocumentDecodeError(f"GitHub returned an unexpected commit payload for '{path}'")
        new_sha = (data.get("content") or {}).get("sha", "")
        commit_sha = (data.get("commit") or {}).get("sha", "")
        logger.info(
            f"GitHub: committed {path}@{branch} (file sha {_short(new_sha)}, "
            f"commit {_short(commit_sha)})"
        )
        return new_sha

    # -------------------------------------------------------------------------
    # Status mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body: Any = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text

    def _raise_for_status(
        self,
        response: httpx.Response,
        path: str,
        branch: str,
        expected_sha: Optional[str] = None,
    ) -> None:
        status = response.status_code
        if 200 <= status < 300:
            return

        message = self._error_message(response)
        logger.error(f"GitHub error {status} for {path}@{branch}: {message}")

        if status in (401, 403):
            raise StoreUnauthorizedError(f"GitHub rejected the credential ({status}): {message}")
        if status == 404:
            raise DocumentNotFoundError(path, branch)
        if expected_sha is not None and (
            status == 409 or (status == 422 and "sha" in message.lower())
        ):
            raise DocumentConflictError(
                f"'{path}' changed on GitHub since it was read: {message}",
                expected_sha=expected_sha,
            )
        raise StoreTransportError(f"GitHub error {status}: {message}", status_code=status)
