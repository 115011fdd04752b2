"""Chat-completion backend adapter and SSE decoding."""

from repo_audit.boundary.llm.chat_completion_client import ChatCompletionClient
from repo_audit.boundary.llm.sse import iter_sse_content

__all__ = ["ChatCompletionClient", "iter_sse_content"]
