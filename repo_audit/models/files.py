"""
Repository file domain models.

FileRecord and Chunk structures shared by the indexer, the chunk packer
and the analysis handler.

Dependencies: pydantic
System role: Repository content data structures
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileRecord(BaseModel):
    """Single repository file, optionally carrying its decoded content."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str = Field(description="File path, unique within a repository snapshot")
    content: str | None = Field(
        default=None,
        description="Decoded text content (absent for directories or skipped files)",
    )
    language: str | None = Field(default=None, description="Language hint for rendering")

    @field_validator("content", mode="before")
    @classmethod
    def join_content_lines(cls, value: object) -> object:
        """Accept content sent as a list of lines."""
        if isinstance(value, list):
            return "\n".join(str(line) for line in value)
        return value

    @property
    def has_content(self) -> bool:
        """Whether the file carries non-empty content."""
        return bool(self.content)


class Chunk(BaseModel):
    """
    Ordered, bounded-size group of files.

    Attributes:
        files: Files in original input order
        total_files: Number of content-bearing files across all chunks
        chunk_index: 0-based dense position of this chunk
    """

    model_config = ConfigDict(frozen=True)

    files: tuple[FileRecord, ...]
    total_files: int
    chunk_index: int
