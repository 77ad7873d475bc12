"""Login adapter implementations.

This module contains concrete implementations of social login providers.
"""

from .github import GitHubLoginAdapter

__all__ = [
    "GitHubLoginAdapter",
]
