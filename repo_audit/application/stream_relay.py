"""
Byte-level streaming relay.

Copies an upstream byte stream to the outgoing HTTP response chunk by chunk,
without buffering the body. The relay always terminates the outgoing stream:
on exhaustion, on an upstream read error (logged and recorded, bytes already
sent stand), and on cancellation when the caller disconnects, in which case
the upstream response is closed as well.

Dependencies: asyncio, httpx
System role: Pass-through between the LLM backend and the caller
"""

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable

import httpx

from repo_audit.core.exceptions import StreamRelayError

logger = logging.getLogger(__name__)


class StreamRelay:
    """
    Single-use async iterator relaying bytes from a source stream.

    Attributes:
        bytes_relayed: Total bytes forwarded so far
        chunks_relayed: Number of non-empty chunks forwarded so far
        error: Upstream failure that ended the relay early, if any
        closed: Whether the upstream close hook has run
    """

    def __init__(
        self,
        source: AsyncIterable[bytes],
        on_close: Callable[[], Awaitable[None]] | None = None,
        label: str = "stream",
    ) -> None:
        """
        Initialize relay.

        Args:
            source: Upstream byte stream (e.g. httpx Response.aiter_bytes())
            on_close: Coroutine function releasing the upstream (e.g. Response.aclose)
            label: Name used in log lines
        """
        self.source = source
        self.on_close = on_close
        self.label = label
        self.bytes_relayed = 0
        self.chunks_relayed = 0
        self.error: StreamRelayError | None = None
        self.closed = False

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._relay()

    async def _relay(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self.source:
                if not chunk:
                    continue
                self.bytes_relayed += len(chunk)
                self.chunks_relayed += 1
                yield chunk
            logger.info(
                f"{__name__}:relay - {self.label} completed",
                extra={"bytes_relayed": self.bytes_relayed, "chunks_relayed": self.chunks_relayed},
            )
        except (httpx.HTTPError, OSError) as e:
            self.error = StreamRelayError(
                f"Upstream read failed for {self.label}: {type(e).__name__}: {e}",
                bytes_relayed=self.bytes_relayed,
            )
            logger.error(
                f"{__name__}:relay - {self.error}",
                extra={"error_type": type(e).__name__},
            )
        except asyncio.CancelledError:
            logger.info(
                f"{__name__}:relay - {self.label} cancelled by caller",
                extra={"bytes_relayed": self.bytes_relayed},
            )
            raise
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        """Release the upstream once; survives cancellation of the calling task."""
        if self.closed:
            return
        self.closed = True
        if self.on_close is not None:
            await asyncio.shield(self.on_close())


def relay_response(response: httpx.Response, label: str = "stream") -> StreamRelay:
    """Relay the body of an open streamed httpx response and close it afterwards."""
    return StreamRelay(response.aiter_bytes(), on_close=response.aclose, label=label)
