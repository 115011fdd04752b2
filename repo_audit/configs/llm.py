"""
Chat-completion backend configuration settings.

Manages the URL, model and sampling parameters of the streaming
chat-completion endpoint that performs the security analysis.

Dependencies: pydantic, pydantic_settings
System role: LLM backend configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Chat-completion backend configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    chat_completion_url: str = Field(
        default="http://localhost:1234/v1/chat/completions",
        description="OpenAI-compatible chat-completion URL",
    )
    model: str = Field(default="deepseek-coder", description="Model name sent to the backend")
    api_key: str | None = Field(default=None, description="Optional bearer token for the backend")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    max_tokens: int = Field(default=4000, description="Output token ceiling per chunk")
    request_timeout: float = Field(
        default=160.0,
        description="Timeout in seconds for the streamed completion request",
    )
