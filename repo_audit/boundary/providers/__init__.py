"""Repository provider adapters (GitHub, GitLab)."""

from repo_audit.boundary.providers.base import RepositoryProvider, TreeEntry
from repo_audit.boundary.providers.factory import build_provider
from repo_audit.boundary.providers.github import GitHubProvider
from repo_audit.boundary.providers.gitlab import GitLabProvider

__all__ = [
    "GitHubProvider",
    "GitLabProvider",
    "RepositoryProvider",
    "TreeEntry",
    "build_provider",
]
