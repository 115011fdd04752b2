"""
Repository indexing endpoint.

Routes:
- POST /repositories/index - Index a remote repository, streaming progress via SSE

SSE Format:
    event: progress
    data: {"progress": 0.4}

    event: complete
    data: {"repository": "...", "provider": "...", "branch": "...", "file_count": 3,
           "skipped_paths": [...], "files": [{"path": "...", "content": "...", "language": "..."}]}

    event: error
    data: {"code": "...", "message": "..."}

Dependencies: repo_audit.application.services.indexing_service
System role: Indexing HTTP API with progress streaming
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, StreamingResponse

from repo_audit.api.deps import get_indexing_service
from repo_audit.api.routers.router_utils import SSE_HEADERS, error_response
from repo_audit.application.services.indexing_service import IndexingService
from repo_audit.core.exceptions import ValidationError
from repo_audit.models.indexing import IndexRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/repositories", tags=["repositories"])

BEARER_PREFIX = "bearer "


def _bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise ValidationError("Missing bearer access token", field="Authorization")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise ValidationError("Missing bearer access token", field="Authorization")
    return token


@router.post("/index", response_model=None)
async def index_repository(
    request: Request,
    body: IndexRequest,
    authorization: str | None = Header(default=None),
    indexing_service: IndexingService = Depends(get_indexing_service),
) -> StreamingResponse | JSONResponse:
    """
    Index a repository and stream progress events.

    Args:
        request: Incoming request (used to detect client disconnects)
        body: Provider and repository full name
        authorization: ``Bearer <token>`` provider access token
        indexing_service: Injected IndexingService

    Returns:
        StreamingResponse: SSE stream of progress, complete or error events
        JSONResponse: 400 when the token, provider or repository name is invalid
    """
    cancel_event = asyncio.Event()
    try:
        token = _bearer_token(authorization)
        indexer = indexing_service.create_indexer(
            body.provider,
            body.repository,
            token,
            cancel_event=cancel_event,
        )
    except ValidationError as e:
        return error_response(400, e.message, e.details)

    logger.info(
        f"{__name__}:index_repository - START repository={body.repository} provider={body.provider.value}"
    )

    async def event_generator() -> AsyncGenerator[str, None]:
        """Generate SSE frames, stopping the indexer once the client is gone."""
        async for event in indexing_service.stream_events(indexer):
            yield event.to_sse()
            if await request.is_disconnected():
                logger.info(f"{__name__}:index_repository - Client disconnected, cancelling")
                cancel_event.set()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
