"""
Remote repository indexer.

Walks a provider's recursive tree, filters indexable paths and fetches
their content in fixed-size concurrent batches with a pause between
batches. Per-file failures are logged and skipped; structural failures
abort the run. Progress is reported as a monotonic fraction that ends at
exactly 1.0.

Each RepositoryIndexer instance owns the state of a single run; build a new
one per indexing request.

Dependencies: asyncio, repo_audit.boundary.providers, repo_audit.core.indexing
System role: Repository corpus construction
"""

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from types import MappingProxyType

from repo_audit.boundary.providers.base import RepositoryProvider
from repo_audit.configs.indexer import IndexerSettings
from repo_audit.core.exceptions import (
    IndexingCancelledError,
    NoIndexableFilesError,
    RepoAuditException,
)
from repo_audit.core.indexing.filters import is_indexable, size_ceiling, truncate_content
from repo_audit.core.indexing.languages import detect_language
from repo_audit.core.indexing.progress import ProgressWatermark
from repo_audit.models.files import FileRecord
from repo_audit.models.indexing import IndexComplete, IndexEvent, IndexProgress

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], Awaitable[None] | None]


class RepositoryIndexer:
    """
    Batched, rate-limited indexer for one repository snapshot.

    Coordinates branch resolution, tree listing, path filtering and batched
    content fetching through a RepositoryProvider.
    """

    def __init__(
        self,
        provider: RepositoryProvider,
        batch_size: int = 5,
        batch_delay_seconds: float = 0.5,
        max_file_bytes: int = 500 * 1024,
        max_config_file_bytes: int = 1024 * 1024,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """
        Initialize indexer.

        Args:
            provider: Provider adapter bound to the repository and token
            batch_size: Concurrent content fetches per batch
            batch_delay_seconds: Pause between consecutive batches
            max_file_bytes: Truncation ceiling for regular files
            max_config_file_bytes: Truncation ceiling for config files
            cancel_event: Optional signal checked before each batch
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.provider = provider
        self.batch_size = batch_size
        self.batch_delay_seconds = batch_delay_seconds
        self.max_file_bytes = max_file_bytes
        self.max_config_file_bytes = max_config_file_bytes
        self.cancel_event = cancel_event

    @classmethod
    def from_settings(
        cls,
        provider: RepositoryProvider,
        settings: IndexerSettings,
        cancel_event: asyncio.Event | None = None,
    ) -> "RepositoryIndexer":
        """Build an indexer configured from IndexerSettings."""
        return cls(
            provider=provider,
            batch_size=settings.batch_size,
            batch_delay_seconds=settings.batch_delay_seconds,
            max_file_bytes=settings.max_file_bytes,
            max_config_file_bytes=settings.max_config_file_bytes,
            cancel_event=cancel_event,
        )

    async def iter_events(self) -> AsyncIterator[IndexEvent]:
        """
        Run the indexing and yield progress events followed by one completion event.

        Yields:
            IndexProgress: Strictly increasing fractions, the last one exactly 1.0
            IndexComplete: Final event with the read-only corpus

        Raises:
            UpstreamFetchError: If branch, ref or tree resolution fails
            NoIndexableFilesError: If no path survives filtering
            IndexingCancelledError: If the cancel signal is set
        """
        repository = self.provider.repository
        logger.info(
            f"{__name__}:iter_events - START repository={repository} provider={self.provider.name}"
        )

        branch = await self.provider.resolve_default_branch()
        entries = await self.provider.list_tree(branch)
        paths = [entry.path for entry in entries if entry.is_file and is_indexable(entry.path)]
        if not paths:
            raise NoIndexableFilesError(repository, details={"branch": branch})

        logger.info(
            f"{__name__}:iter_events - {len(paths)} indexable files of {len(entries)} tree entries",
            extra={"repository": repository, "branch": branch},
        )

        watermark = ProgressWatermark(total=len(paths))
        corpus: dict[str, str] = {}
        skipped: list[str] = []

        for start in range(0, len(paths), self.batch_size):
            self._raise_if_cancelled(repository)
            if start:
                await asyncio.sleep(self.batch_delay_seconds)
                self._raise_if_cancelled(repository)

            batch = paths[start:start + self.batch_size]
            contents = await asyncio.gather(*(self._fetch_file(path, branch) for path in batch))

            for path, content in zip(batch, contents):
                if content is None:
                    skipped.append(path)
                else:
                    corpus[path] = content

            fraction = watermark.advance(len(batch))
            if fraction is not None:
                yield IndexProgress(progress=fraction)

        logger.info(
            f"{__name__}:iter_events - Indexed {len(corpus)} files, skipped {len(skipped)}",
            extra={"repository": repository, "branch": branch},
        )
        yield IndexComplete(
            repository=repository,
            branch=branch,
            corpus=MappingProxyType(corpus),
            skipped_paths=tuple(skipped),
        )

    async def index(self, on_progress: ProgressCallback | None = None) -> Mapping[str, str]:
        """
        Index the repository and return its corpus.

        Args:
            on_progress: Optional callback (sync or async) receiving each progress fraction

        Returns:
            Mapping[str, str]: Read-only path to content corpus
        """
        async for event in self.iter_events():
            if isinstance(event, IndexComplete):
                return event.corpus
            if on_progress is not None:
                outcome = on_progress(event.progress)
                if inspect.isawaitable(outcome):
                    await outcome
        raise RepoAuditException(
            f"Indexing of {self.provider.repository} ended without a completion event",
            details={"repository": self.provider.repository},
        )

    async def _fetch_file(self, path: str, branch: str) -> str | None:
        """
        Fetch and truncate one file; None when the fetch failed.

        Any provider failure is isolated to its file so the rest of the batch
        and the run carry on.
        """
        try:
            content = await self.provider.fetch_file_content(path, branch)
        except Exception as e:
            logger.warning(
                f"{__name__}:_fetch_file - Skipping {path}: {e}",
                extra={"path": path, "error_type": type(e).__name__},
            )
            return None

        ceiling = size_ceiling(path, self.max_file_bytes, self.max_config_file_bytes)
        truncated = truncate_content(content, ceiling)
        if truncated is not content:
            logger.info(
                f"{__name__}:_fetch_file - Truncated large file {path}",
                extra={"path": path, "ceiling_bytes": ceiling},
            )
        return truncated

    def _raise_if_cancelled(self, repository: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.info(f"{__name__}:iter_events - Cancelled repository={repository}")
            raise IndexingCancelledError(
                f"Indexing of {repository} was cancelled",
                details={"repository": repository},
            )


def corpus_to_file_records(corpus: Mapping[str, str]) -> list[FileRecord]:
    """Convert a corpus into FileRecords with language hints, preserving corpus order."""
    return [
        FileRecord(path=path, content=content, language=detect_language(path))
        for path, content in corpus.items()
    ]
