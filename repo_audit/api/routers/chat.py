"""
Repository chat endpoint.

Routes:
- POST /chat - Stream an answer about the repository the caller is browsing

The caller resends the whole conversation on every turn; the repository
context (provider, repository, browsing path, open file) becomes the system
message ahead of it.

Dependencies: repo_audit.application.services.chat_service
System role: Chat HTTP API with SSE relaying
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from repo_audit.api.deps import get_chat_service
from repo_audit.api.routers.router_utils import SSE_HEADERS, error_response
from repo_audit.application.services.chat_service import ChatService
from repo_audit.core.exceptions import BackendUnavailableError, ValidationError
from repo_audit.models.chat import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=None)
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse | JSONResponse:
    """
    Stream a chat answer using Server-Sent Events (SSE).

    Args:
        request: Conversation and repository context
        chat_service: Injected ChatService

    Returns:
        StreamingResponse: 200 text/event-stream relaying the backend bytes
        JSONResponse: 400 on validation errors, 502 when the backend is
            unavailable, 500 on unexpected failures
    """
    try:
        plan = chat_service.prepare(request)
        relay = await chat_service.open_stream(plan)
    except ValidationError as e:
        return error_response(400, e.message, e.details)
    except BackendUnavailableError as e:
        return error_response(502, e.message, e.details)
    except Exception as e:
        logger.exception(f"{__name__}:chat - {type(e).__name__}: {e}")
        return error_response(500, "Failed to process chat message")

    return StreamingResponse(relay, media_type="text/event-stream", headers=SSE_HEADERS)
