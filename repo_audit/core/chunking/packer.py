"""
Greedy chunk packer.

Partitions an ordered file list into chunks bounded by an estimated token
budget. Files are never split, reordered or duplicated; a file larger than
the budget gets a chunk of its own.

Dependencies: repo_audit.core.chunking.estimator, repo_audit.models.files
System role: Bounded-size batching of repository content for the LLM
"""

import logging
from collections.abc import Iterable

from repo_audit.core.chunking.estimator import estimate_tokens
from repo_audit.models.files import Chunk, FileRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHUNK_TOKENS = 4000


def pack_files(
    files: Iterable[FileRecord],
    max_chunk_tokens: int = DEFAULT_MAX_CHUNK_TOKENS,
) -> list[Chunk]:
    """
    Pack files into order-preserving chunks.

    Files without content are dropped before packing, and ``total_files`` on
    every chunk counts only the content-bearing files, so concatenating
    ``chunk.files`` in index order reproduces that subsequence exactly.

    Args:
        files: Files in the order they should be analysed
        max_chunk_tokens: Estimated token budget per chunk

    Returns:
        list[Chunk]: Chunks with dense indices 0..N-1 (empty if nothing has content)

    Raises:
        ValueError: If max_chunk_tokens is not positive
    """
    if max_chunk_tokens <= 0:
        raise ValueError(f"max_chunk_tokens must be positive, got {max_chunk_tokens}")

    content_files = [f for f in files if f.has_content]

    groups: list[list[FileRecord]] = []
    current: list[FileRecord] = []
    current_tokens = 0

    for file in content_files:
        file_tokens = estimate_tokens(file.content)
        if current and current_tokens + file_tokens > max_chunk_tokens:
            groups.append(current)
            current = []
            current_tokens = 0
        current.append(file)
        current_tokens += file_tokens

    if current:
        groups.append(current)

    chunks = [
        Chunk(files=tuple(group), total_files=len(content_files), chunk_index=index)
        for index, group in enumerate(groups)
    ]

    logger.debug(
        f"{__name__}:pack_files - Packed {len(content_files)} files into {len(chunks)} chunks",
        extra={"max_chunk_tokens": max_chunk_tokens},
    )
    return chunks
