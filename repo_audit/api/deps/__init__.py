"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_analysis_service,
    get_chat_completion_client,
    get_chat_service,
    get_indexing_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "ServiceCache",
    "get_analysis_service",
    "get_chat_completion_client",
    "get_chat_service",
    "get_indexing_service",
    "get_service_cache",
    "get_settings_dependency",
]
