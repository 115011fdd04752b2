"""
Analysis domain models and schemas.

Request schemas for the chunked security analysis endpoint and the
derived per-request chunk state.

Dependencies: pydantic
System role: Analysis API contracts
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, model_validator

from repo_audit.models.files import FileRecord


class RepositoryInfo(BaseModel):
    """Repository identification sent by the dashboard."""

    model_config = ConfigDict(extra="ignore")

    full_name: str | None = Field(default=None, description="owner/name display identifier")


class RepositoryContext(BaseModel):
    """Repository content supplied by the caller for analysis."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    repository: RepositoryInfo | None = None
    provider: str = Field(default="github", description="Repository provider")
    files: list[FileRecord] = Field(default_factory=list)
    current_file: FileRecord | None = Field(default=None, alias="currentFile")
    current_path: str | None = Field(
        default=None,
        alias="currentPath",
        description="Directory the caller is browsing",
    )


class AnalyzeRequest(BaseModel):
    """Request schema for one chunk of a security analysis."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    context: RepositoryContext | None = None
    chunk_index: int = Field(default=0, alias="chunkIndex")

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_context_key(cls, data: object) -> object:
        """Older dashboard builds send the context under ``repoContext``."""
        if isinstance(data, dict) and not data.get("context") and data.get("repoContext"):
            data = {**data, "context": data["repoContext"]}
        return data


@dataclass(frozen=True)
class AnalysisRequestState:
    """Derived, per-request chunk position."""

    chunk_index: int
    total_chunks: int

    @property
    def is_first_chunk(self) -> bool:
        return self.chunk_index == 0

    @property
    def is_last_chunk(self) -> bool:
        return self.chunk_index == self.total_chunks - 1

    @property
    def has_more(self) -> bool:
        return self.chunk_index < self.total_chunks - 1
