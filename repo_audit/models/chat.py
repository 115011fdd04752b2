"""
Repository chat models and schemas.

Request schema for asking questions about the repository the caller is
browsing. The conversation lives with the caller and is resent in full on
every request.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from repo_audit.models.analysis import RepositoryContext


class ChatMessage(BaseModel):
    """Single message of the conversation."""

    model_config = ConfigDict(extra="ignore")

    role: Literal["system", "user", "assistant"] = Field(description="Message author role")
    content: str = Field(description="Message content")


class ChatRequest(BaseModel):
    """Request schema for a repository chat turn."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    messages: list[ChatMessage] = Field(min_length=1, description="Conversation so far, oldest first")
    context: RepositoryContext | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_context_key(cls, data: object) -> object:
        """Older dashboard builds send the context under ``repoContext``."""
        if isinstance(data, dict) and not data.get("context") and data.get("repoContext"):
            data = {**data, "context": data["repoContext"]}
        return data
