"""
Indexing domain models and schemas.

Request schema for repository indexing and the events emitted while an
indexing run progresses.

Dependencies: pydantic
System role: Indexing API contracts
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class ProviderName(str, Enum):
    """Supported repository providers."""

    GITHUB = "github"
    GITLAB = "gitlab"


class IndexRequest(BaseModel):
    """Request schema for indexing a remote repository."""

    provider: ProviderName = Field(default=ProviderName.GITHUB, description="Repository provider")
    repository: str = Field(min_length=1, description="Repository full name (owner/name)")


@dataclass(frozen=True)
class IndexProgress:
    """Fraction of indexable files processed so far."""

    progress: float


@dataclass(frozen=True)
class IndexComplete:
    """
    Final event of an indexing run.

    Attributes:
        repository: Repository full name
        branch: Branch the tree was read from
        corpus: Read-only path to content mapping
        skipped_paths: Indexable paths whose fetch failed
    """

    repository: str
    branch: str
    corpus: Mapping[str, str]
    skipped_paths: tuple[str, ...] = ()


IndexEvent = IndexProgress | IndexComplete
