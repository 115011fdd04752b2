"""
FastAPI middleware for observability.

Correlation ID and request logging middleware. Both wrap the response body
iterator, because the analysis, chat and indexing endpoints keep sending
bytes long after the route handler has returned.

Dependencies: fastapi, starlette, repo_audit.observability.correlation
System role: Request/response observability injection
"""

import logging
import time
from collections.abc import AsyncIterator

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from repo_audit.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request when its headers go out and again when its body is done."""

    async def dispatch(self, request: Request, call_next):
        """
        Log the response status, then wrap the body to log its size and total duration.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response whose body logs completion once fully sent
        """
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - Exception",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": _elapsed_ms(start_time),
                    "error_type": type(e).__name__,
                },
            )
            raise

        logger.info(
            f"{method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "client_host": request.client.host if request.client else None,
                "time_to_headers_ms": _elapsed_ms(start_time),
            },
        )
        response.body_iterator = _log_body_completion(
            response.body_iterator,
            method=method,
            path=path,
            status_code=response.status_code,
            start_time=start_time,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID to the request for as long as its body is streaming."""

    async def dispatch(self, request: Request, call_next):
        """
        Set the correlation ID, echo it as a header and keep it bound until the body ends.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response with correlation ID header
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        except Exception:
            clear_correlation_id()
            raise
        response.headers[CORRELATION_HEADER] = correlation_id
        response.body_iterator = _bind_correlation_id(response.body_iterator, correlation_id)
        return response


async def _bind_correlation_id(body: AsyncIterator[bytes], correlation_id: str) -> AsyncIterator[bytes]:
    set_correlation_id(correlation_id)
    try:
        async for chunk in body:
            yield chunk
    finally:
        clear_correlation_id()


async def _log_body_completion(
    body: AsyncIterator[bytes],
    method: str,
    path: str,
    status_code: int,
    start_time: float,
) -> AsyncIterator[bytes]:
    sent = 0
    completed = False
    try:
        async for chunk in body:
            sent += len(chunk)
            yield chunk
        completed = True
    finally:
        logger.info(
            f"{method} {path} - {'completed' if completed else 'aborted'}",
            extra={
                "method": method,
                "path": path,
                "status_code": status_code,
                "bytes_sent": sent,
                "process_time_ms": _elapsed_ms(start_time),
            },
        )


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
