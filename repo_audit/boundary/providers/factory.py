"""
Provider factory.

Selects the provider adapter from an explicit discriminator; content is
never sniffed to guess the provider.

Dependencies: repo_audit.boundary.providers
System role: Provider construction for indexing runs
"""

import httpx

from repo_audit.boundary.providers.base import RepositoryProvider
from repo_audit.boundary.providers.github import GitHubProvider
from repo_audit.boundary.providers.gitlab import GitLabProvider
from repo_audit.configs.indexer import IndexerSettings
from repo_audit.core.exceptions import ValidationError
from repo_audit.models.indexing import ProviderName

PROVIDERS: dict[ProviderName, type[RepositoryProvider]] = {
    ProviderName.GITHUB: GitHubProvider,
    ProviderName.GITLAB: GitLabProvider,
}


def build_provider(
    provider: ProviderName | str,
    client: httpx.AsyncClient,
    repository: str,
    access_token: str,
    settings: IndexerSettings,
) -> RepositoryProvider:
    """
    Build the adapter for a provider name.

    Raises:
        ValidationError: If the provider is not supported
    """
    try:
        provider_cls = PROVIDERS[ProviderName(provider)]
    except ValueError as e:
        raise ValidationError(f"Unsupported provider: {provider}", field="provider") from e
    return provider_cls(client, repository, access_token, settings)
