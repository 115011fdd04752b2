"""
Retry combinator for structural provider calls.

Bounded attempts with exponential backoff (delay doubling), retrying only
transient failures: transport errors, HTTP 429 and 5xx. Client errors such
as 401 or 404 fail on the first attempt.

Dependencies: tenacity, httpx
System role: Backoff policy for branch, ref and tree requests
"""

import logging
from collections.abc import Callable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_retryable(exc: BaseException) -> bool:
    """Whether an exception is a transient HTTP failure worth retrying."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


def _log_before_sleep(operation: str, max_attempts: int) -> Callable[[RetryCallState], None]:
    def log(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{__name__}:{operation} - Retry {retry_state.attempt_number}/{max_attempts} "
            f"after {type(exc).__name__}: {exc}"
        )

    return log


def structural_retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    operation: str = "request",
) -> AsyncRetrying:
    """
    Build a retrying controller for one structural call.

    Args:
        max_attempts: Total attempts including the first one
        base_delay: Delay before the second attempt, doubled afterwards
        operation: Label used in retry log lines

    Returns:
        AsyncRetrying: Call it with an async function to run it under the policy.
        The last exception is re-raised once attempts are exhausted.
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, exp_base=2),
        retry=retry_if_exception(is_retryable),
        before_sleep=_log_before_sleep(operation, max_attempts),
        reraise=True,
    )
