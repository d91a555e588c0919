"""
Infrastructure Layer for the exercise catalog editor.

This package contains concrete implementations of the application ports:
- github/: GitHub contents API implementation of ExerciseDocumentStore
"""

from infrastructure.github import GitHubContentsStore

__all__ = [
    "GitHubContentsStore",
]
