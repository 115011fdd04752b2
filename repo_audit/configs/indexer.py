"""
Repository indexer configuration settings.

Batching, truncation, retry and provider endpoint settings for remote
repository indexing.

Dependencies: pydantic, pydantic_settings
System role: Indexer configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndexerSettings(BaseSettings):
    """Repository indexer configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INDEXER_",
        case_sensitive=False,
        extra="ignore",
    )

    batch_size: int = Field(default=5, ge=1, description="Concurrent file fetches per batch")
    batch_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Pause between batches to respect provider rate limits",
    )
    max_file_bytes: int = Field(default=500 * 1024, description="Content ceiling for regular files")
    max_config_file_bytes: int = Field(
        default=1024 * 1024,
        description="Content ceiling for config files (json, yaml, toml, ...)",
    )

    retry_attempts: int = Field(default=3, ge=1, description="Attempts for structural provider calls")
    retry_base_delay: float = Field(
        default=1.0,
        ge=0.0,
        description="First backoff delay in seconds, doubled on each retry",
    )
    request_timeout: float = Field(default=30.0, description="Provider request timeout in seconds")

    github_api_url: str = Field(default="https://api.github.com", description="GitHub REST base URL")
    gitlab_api_url: str = Field(
        default="https://gitlab.com/api/v4",
        description="GitLab REST base URL",
    )
