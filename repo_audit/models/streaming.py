"""
Streaming event schemas for server-sent events.

Defines event types and payloads emitted by the indexing stream.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-client event types for the indexing stream."""

    PROGRESS = "progress"
    COMPLETE = "complete"
    ERROR = "error"


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}

    def to_sse(self) -> str:
        """Format as an SSE frame: ``event: {type}\\ndata: {json}\\n\\n``."""
        return f"event: {self.event.value}\ndata: {json.dumps(self.data)}\n\n"
