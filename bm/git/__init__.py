"""Git operations."""

from .remote import RepoSlug, parse_github_remote
from .repository import GitError, Repository

__all__ = [
    "GitError",
    "RepoSlug",
    "Repository",
    "parse_github_remote",
]
