"""
Repository indexing service.

Builds a fresh indexer per request (provider adapter, settings, cancel
signal) and turns its events into server-sent events.

Dependencies: httpx, repo_audit.boundary.providers, repo_audit.core.indexing
System role: Indexing orchestration layer
"""

import asyncio
import logging
from collections.abc import AsyncIterator

import httpx

from repo_audit.boundary.providers.factory import build_provider
from repo_audit.configs.indexer import IndexerSettings
from repo_audit.core.exceptions import (
    IndexingCancelledError,
    NoIndexableFilesError,
    UpstreamFetchError,
)
from repo_audit.core.indexing.indexer import RepositoryIndexer, corpus_to_file_records
from repo_audit.models.indexing import IndexComplete, IndexProgress, ProviderName
from repo_audit.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


class IndexingService:
    """Indexing orchestration with per-run indexer state."""

    def __init__(self, client: httpx.AsyncClient, settings: IndexerSettings) -> None:
        """
        Initialize indexing service.

        Args:
            client: Shared async HTTP client for provider calls
            settings: Indexer settings
        """
        self.client = client
        self.settings = settings

    def create_indexer(
        self,
        provider: ProviderName,
        repository: str,
        access_token: str,
        cancel_event: asyncio.Event | None = None,
    ) -> RepositoryIndexer:
        """
        Build a new indexer for one run.

        Raises:
            ValidationError: If the provider or repository name is invalid
        """
        adapter = build_provider(provider, self.client, repository, access_token, self.settings)
        return RepositoryIndexer.from_settings(adapter, self.settings, cancel_event=cancel_event)

    async def stream_events(self, indexer: RepositoryIndexer) -> AsyncIterator[StreamEvent]:
        """
        Run an indexer and translate its events into stream events.

        Every failure ends the stream with one error event, so callers always
        see a well-formed terminal frame.

        Yields:
            StreamEvent: progress events, then complete or error
        """
        provider = indexer.provider
        try:
            async for event in indexer.iter_events():
                if isinstance(event, IndexProgress):
                    yield StreamEvent(
                        event=StreamEventType.PROGRESS,
                        data={"progress": event.progress},
                    )
                elif isinstance(event, IndexComplete):
                    files = corpus_to_file_records(event.corpus)
                    yield StreamEvent(
                        event=StreamEventType.COMPLETE,
                        data={
                            "repository": event.repository,
                            "provider": provider.name,
                            "branch": event.branch,
                            "file_count": len(files),
                            "skipped_paths": list(event.skipped_paths),
                            "files": [f.model_dump() for f in files],
                        },
                    )
        except NoIndexableFilesError as e:
            logger.warning(f"{__name__}:stream_events - {e}")
            yield _error_event("NO_INDEXABLE_FILES", e.message)
        except UpstreamFetchError as e:
            logger.error(f"{__name__}:stream_events - {e}")
            yield _error_event("UPSTREAM_FETCH_FAILED", e.message)
        except IndexingCancelledError as e:
            logger.info(f"{__name__}:stream_events - {e}")
            yield _error_event("CANCELLED", e.message)
        except Exception as e:
            logger.exception(f"{__name__}:stream_events - {type(e).__name__}: {e}")
            yield _error_event("INTERNAL_ERROR", f"Failed to index repository {provider.repository}")


def _error_event(code: str, message: str) -> StreamEvent:
    return StreamEvent(event=StreamEventType.ERROR, data={"code": code, "message": message})
