"""
Caller-side driver for chunked analysis.

Requests chunk 0, then each following chunk while the service reports
``X-Has-More: true``, always resending the same repository context, and
yields the decoded content fragments of every chunk in order.

Dependencies: httpx, repo_audit.boundary.llm.sse
System role: Pagination consumer of the analyze endpoint
"""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from repo_audit.api.routers.analyze import HAS_MORE_HEADER, TOTAL_CHUNKS_HEADER
from repo_audit.boundary.llm.sse import iter_sse_content
from repo_audit.core.exceptions import AnalysisRequestError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "/api/v1/analyze"


class AnalysisClient:
    """Streams a whole repository analysis chunk by chunk."""

    def __init__(self, client: httpx.AsyncClient, endpoint: str = DEFAULT_ENDPOINT) -> None:
        """
        Initialize analysis client.

        Args:
            client: HTTP client whose base URL points at the service
            endpoint: Path of the analyze endpoint
        """
        self.client = client
        self.endpoint = endpoint

    async def stream_analysis(self, context: dict[str, Any]) -> AsyncIterator[str]:
        """
        Stream the analysis of every chunk of a repository context.

        Args:
            context: Repository context payload (repository, files, currentFile)

        Yields:
            str: Content fragments across all chunks, in order

        Raises:
            AnalysisRequestError: If the service answers a chunk request with an error
        """
        chunk_index = 0
        while True:
            payload = {"context": context, "chunkIndex": chunk_index}
            async with self.client.stream("POST", self.endpoint, json=payload) as response:
                if response.is_error:
                    body = await response.aread()
                    raise AnalysisRequestError(
                        _error_message(body, response.status_code),
                        status_code=response.status_code,
                        details={"chunk_index": chunk_index},
                    )
                has_more = response.headers.get(HAS_MORE_HEADER, "false") == "true"
                logger.info(
                    f"{__name__}:stream_analysis - Chunk {chunk_index + 1} of "
                    f"{response.headers.get(TOTAL_CHUNKS_HEADER, '?')}"
                )
                async for fragment in iter_sse_content(response.aiter_bytes()):
                    yield fragment
            if not has_more:
                break
            chunk_index += 1


def _error_message(body: bytes, status_code: int) -> str:
    try:
        error = json.loads(body).get("error")
    except (ValueError, AttributeError):
        error = None
    return error or f"Analysis request failed with status {status_code}"
