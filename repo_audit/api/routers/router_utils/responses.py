"""
Response helpers for streaming endpoints.

Dependencies: fastapi, repo_audit.models
System role: Shared HTTP response construction
"""

from fastapi.responses import JSONResponse

from repo_audit.models.common import ErrorResponse

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


def error_response(status_code: int, message: str, details: dict | None = None) -> JSONResponse:
    """Build the common JSON error body."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, details=details or None).model_dump(),
    )
