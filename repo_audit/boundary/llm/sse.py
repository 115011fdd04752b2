"""
Server-sent-event decoding for chat-completion streams.

Turns a raw byte stream of ``data: {json}`` lines into the text fragments
found at ``choices[0].delta.content``. Lines may be split across byte
chunks; malformed or partial JSON lines are skipped.

Dependencies: json, codecs
System role: Consumer-side decoding of relayed analysis streams
"""

import codecs
import json
import logging
from collections.abc import AsyncIterable, AsyncIterator

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"


async def iter_lines(byte_stream: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Reassemble UTF-8 text lines from arbitrarily split byte chunks."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""
    async for chunk in byte_stream:
        buffer += decoder.decode(chunk)
        *lines, buffer = buffer.split("\n")
        for line in lines:
            yield line
    buffer += decoder.decode(b"", final=True)
    if buffer:
        yield buffer


def delta_content(payload: str) -> str | None:
    """Extract ``choices[0].delta.content`` from one JSON payload, None if absent or malformed."""
    try:
        content = json.loads(payload)["choices"][0]["delta"].get("content")
    except (json.JSONDecodeError, KeyError, IndexError, TypeError, AttributeError):
        logger.debug(f"{__name__}:delta_content - Skipping malformed payload: {payload[:80]}")
        return None
    return content if isinstance(content, str) else None


async def iter_sse_content(byte_stream: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """
    Yield content fragments from a chat-completion SSE byte stream.

    Stops at the ``[DONE]`` sentinel or when the stream ends.

    Args:
        byte_stream: Raw response bytes in arrival order

    Yields:
        str: Non-empty ``choices[0].delta.content`` fragments in order
    """
    async for line in iter_lines(byte_stream):
        line = line.strip()
        if not line.startswith(DATA_PREFIX):
            continue
        payload = line[len(DATA_PREFIX):].strip()
        if payload == DONE_SENTINEL:
            break
        content = delta_content(payload)
        if content:
            yield content
