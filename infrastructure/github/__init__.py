"""
GitHub-backed storage for the exercise catalog.

Usage:
    from infrastructure.github import GitHubContentsStore

    store = GitHubContentsStore(token=TOKEN, owner="acme", repo="fitness-data")
    snapshot = await store.fetch("data/exercises.json", "main")
"""

from infrastructure.github.contents_store import GitHubContentsStore

__all__ = ["GitHubContentsStore"]
