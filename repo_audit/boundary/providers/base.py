"""
Repository provider interface.

Each provider variant implements the three operations the indexer needs:
resolve the default branch, list the recursive tree, fetch one file's
decoded content. Structural calls run under the shared retry policy and
surface failures as UpstreamFetchError; content fetches surface
PerFileFetchError so the indexer can skip the file.

Dependencies: httpx, repo_audit.boundary.http.retry, repo_audit.configs
System role: Provider abstraction for remote repository indexing
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

from repo_audit.boundary.http.retry import structural_retry
from repo_audit.configs.indexer import IndexerSettings
from repo_audit.core.exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)

# Raised when a 2xx structural body does not have the expected shape
MALFORMED_BODY_ERRORS = (KeyError, IndexError, TypeError, ValueError, AttributeError)


@dataclass(frozen=True)
class TreeEntry:
    """Single entry of a recursive repository tree."""

    path: str
    type: str
    size: int | None = None

    @property
    def is_file(self) -> bool:
        return self.type == "blob"


class RepositoryProvider(ABC):
    """Base class for provider-specific tree walking and content fetching."""

    name: ClassVar[str]

    def __init__(
        self,
        client: httpx.AsyncClient,
        repository: str,
        access_token: str,
        settings: IndexerSettings,
    ) -> None:
        """
        Initialize provider adapter.

        Args:
            client: Shared async HTTP client
            repository: Repository full name (owner/name or group/subgroup/name)
            access_token: OAuth bearer token
            settings: Indexer settings (timeouts, retry policy, base URLs)
        """
        self.client = client
        self.repository = repository
        self.access_token = access_token
        self.settings = settings

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    @abstractmethod
    async def resolve_default_branch(self) -> str:
        """Return the repository's default branch name."""

    @abstractmethod
    async def list_tree(self, branch: str) -> list[TreeEntry]:
        """Return every entry of the branch's tree, recursively."""

    @abstractmethod
    async def fetch_file_content(self, path: str, branch: str) -> str:
        """
        Fetch and decode one file.

        Raises:
            PerFileFetchError: If the file cannot be fetched or decoded
        """

    async def _get_structural(
        self,
        url: str,
        operation: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        GET a structural resource under the retry policy.

        Args:
            url: Absolute request URL
            operation: Human-readable label for logs and errors
            params: Query parameters

        Returns:
            httpx.Response: Successful response

        Raises:
            UpstreamFetchError: On non-2xx status or transport failure after retries
        """

        async def send() -> httpx.Response:
            response = await self.client.get(
                url,
                params=params,
                headers=self.headers,
                timeout=self.settings.request_timeout,
            )
            response.raise_for_status()
            return response

        retrying = structural_retry(
            max_attempts=self.settings.retry_attempts,
            base_delay=self.settings.retry_base_delay,
            operation=f"{self.name}:{operation}",
        )
        try:
            return await retrying(send)
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{__name__}:_get_structural - {operation} failed with HTTP {e.response.status_code}",
                extra={"provider": self.name, "repository": self.repository},
            )
            raise UpstreamFetchError(
                f"Failed to {operation}: HTTP {e.response.status_code}",
                provider=self.name,
                repository=self.repository,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"{__name__}:_get_structural - {operation} failed: {type(e).__name__}",
                extra={"provider": self.name, "repository": self.repository},
            )
            raise UpstreamFetchError(
                f"Failed to {operation}: {type(e).__name__}",
                provider=self.name,
                repository=self.repository,
            ) from e

    def _malformed_response(self, operation: str, exc: Exception) -> UpstreamFetchError:
        """Build the error for a successful structural response with an unusable body."""
        logger.error(
            f"{__name__}:_malformed_response - {operation} returned an unexpected body: "
            f"{type(exc).__name__}: {exc}",
            extra={"provider": self.name, "repository": self.repository},
        )
        return UpstreamFetchError(
            f"Failed to {operation}: unexpected response body",
            provider=self.name,
            repository=self.repository,
            details={"error_type": type(exc).__name__},
        )
