"""
Chunked security analysis endpoint.

Routes:
- POST /analyze - Stream the security analysis of one chunk of repository content

The caller drives pagination: it starts with chunkIndex 0 and keeps
requesting the next index while the X-Has-More response header is "true",
sending the same file list every time.

Dependencies: repo_audit.application.services.analysis_service
System role: Analysis HTTP API with SSE relaying
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from repo_audit.api.deps import get_analysis_service
from repo_audit.api.routers.router_utils import SSE_HEADERS, error_response
from repo_audit.application.services.analysis_service import AnalysisService
from repo_audit.core.exceptions import BackendUnavailableError, ValidationError
from repo_audit.models.analysis import AnalyzeRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])

TOTAL_CHUNKS_HEADER = "X-Total-Chunks"
CURRENT_CHUNK_HEADER = "X-Current-Chunk"
HAS_MORE_HEADER = "X-Has-More"
CHUNK_HEADERS = [TOTAL_CHUNKS_HEADER, CURRENT_CHUNK_HEADER, HAS_MORE_HEADER]


@router.post("/analyze", response_model=None)
async def analyze(
    request: AnalyzeRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> StreamingResponse | JSONResponse:
    """
    Stream the analysis of one chunk using Server-Sent Events (SSE).

    The backend's SSE bytes (``data: {"choices":[{"delta":{"content":...}}]}``)
    are relayed verbatim as they arrive.

    Args:
        request: Repository context and chunk index
        analysis_service: Injected AnalysisService

    Returns:
        StreamingResponse: 200 text/event-stream with chunk headers
        JSONResponse: 400 on validation errors, 502 when the backend is
            unavailable, 500 on unexpected failures
    """
    try:
        plan = analysis_service.prepare(request)
        relay = await analysis_service.open_stream(plan)
    except ValidationError as e:
        return error_response(400, e.message, e.details)
    except BackendUnavailableError as e:
        return error_response(502, e.message, e.details)
    except Exception as e:
        logger.exception(f"{__name__}:analyze - {type(e).__name__}: {e}")
        return error_response(500, "Failed to analyze repository")

    state = plan.state
    return StreamingResponse(
        relay,
        media_type="text/event-stream",
        headers={
            **SSE_HEADERS,
            TOTAL_CHUNKS_HEADER: str(state.total_chunks),
            CURRENT_CHUNK_HEADER: str(state.chunk_index),
            HAS_MORE_HEADER: "true" if state.has_more else "false",
        },
    )
