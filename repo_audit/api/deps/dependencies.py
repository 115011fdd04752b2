"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: httpx, repo_audit.configs, repo_audit.application, repo_audit.boundary
System role: DI container for service injection
"""

from functools import lru_cache

import httpx
from fastapi import Depends

from repo_audit.application.services import AnalysisService, ChatService, IndexingService
from repo_audit.boundary.llm.chat_completion_client import ChatCompletionClient
from repo_audit.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._http_client: httpx.AsyncClient | None = None
        self._chat_client: ChatCompletionClient | None = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get cached HTTP client shared by all outbound calls."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(follow_redirects=True)
        return self._http_client

    @property
    def chat_client(self) -> ChatCompletionClient:
        """Get cached chat-completion client."""
        if self._chat_client is None:
            self._chat_client = ChatCompletionClient.from_settings(
                self.http_client,
                get_settings().llm,
            )
        return self._chat_client

    async def aclose(self) -> None:
        """Close the HTTP client and clear all cached instances."""
        if self._http_client is not None:
            await self._http_client.aclose()
        self._http_client = None
        self._chat_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_chat_completion_client(
    cache: ServiceCache = Depends(get_service_cache),
) -> ChatCompletionClient:
    """Get the shared chat-completion client."""
    return cache.chat_client


def get_analysis_service(
    chat_client: ChatCompletionClient = Depends(get_chat_completion_client),
    settings: Settings = Depends(get_settings_dependency),
) -> AnalysisService:
    """
    Get analysis service instance.

    Args:
        chat_client: Chat-completion client (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        AnalysisService: Analysis service configured from settings
    """
    return AnalysisService.from_settings(chat_client, settings.analysis, settings.llm)


def get_chat_service(
    chat_client: ChatCompletionClient = Depends(get_chat_completion_client),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """Get repository chat service configured from settings."""
    return ChatService.from_settings(chat_client, settings.analysis, settings.llm)

def get_indexing_service(
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> IndexingService:
    """
    Get indexing service instance.

    Args:
        cache: Service cache holding the shared HTTP client
        settings: Application settings (injected via Depends)

    Returns:
        IndexingService: Indexing service configured from settings
    """
    return IndexingService(client=cache.http_client, settings=settings.indexer)
