"""
Shared test fixtures and configuration for entire test suite.

Provides: file record factories, zero-delay indexer settings, SSE body builders
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import json
from collections.abc import Callable

import pytest

from repo_audit.configs.indexer import IndexerSettings
from repo_audit.models.files import FileRecord


@pytest.fixture
def make_file() -> Callable[..., FileRecord]:
    """
    Build FileRecords, optionally with content of an exact length.

    Returns:
        Callable: make_file(path, size=None, content=None, language=None)
    """

    def _make(
        path: str,
        size: int | None = None,
        content: str | None = None,
        language: str | None = None,
    ) -> FileRecord:
        if size is not None:
            content = "x" * size
        return FileRecord(path=path, content=content, language=language)

    return _make


@pytest.fixture
def indexer_settings() -> IndexerSettings:
    """Indexer settings with all waits disabled."""
    return IndexerSettings(
        batch_size=5,
        batch_delay_seconds=0,
        retry_attempts=3,
        retry_base_delay=0,
        github_api_url="https://api.github.test",
        gitlab_api_url="https://gitlab.test/api/v4",
    )


@pytest.fixture
def sse_body() -> Callable[..., bytes]:
    """
    Build a chat-completion SSE body from content fragments.

    Returns:
        Callable: sse_body(*fragments, done=True) -> bytes
    """

    def _build(*fragments: str, done: bool = True) -> bytes:
        lines = [
            f"data: {json.dumps({'choices': [{'delta': {'content': fragment}}]})}\n\n"
            for fragment in fragments
        ]
        if done:
            lines.append("data: [DONE]\n\n")
        return "".join(lines).encode()

    return _build
