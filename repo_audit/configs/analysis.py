"""
Analysis configuration settings.

Chunk budget and prompt-build truncation ceiling for the chunked
security analysis.

Dependencies: pydantic, pydantic_settings
System role: Chunking configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Chunked analysis configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ANALYSIS_",
        case_sensitive=False,
        extra="ignore",
    )

    max_chunk_tokens: int = Field(default=4000, ge=1, description="Estimated token budget per chunk")
    max_prompt_file_chars: int = Field(
        default=100_000,
        ge=1,
        description="Per-file character ceiling applied when rendering the prompt",
    )
