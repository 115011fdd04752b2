"""
Streaming chat-completion client.

Opens a streamed POST against an OpenAI-compatible chat-completion endpoint
and hands back the live response so its bytes can be relayed as they arrive.

Dependencies: httpx, repo_audit.configs.llm
System role: LLM backend adapter
"""

import logging
from typing import Any

import httpx

from repo_audit.configs.llm import LLMSettings
from repo_audit.core.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Client for a server-sent-event chat-completion backend."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        model: str,
        api_key: str | None = None,
        timeout: float = 160.0,
    ) -> None:
        """
        Initialize chat-completion client.

        Args:
            client: Shared async HTTP client
            url: Chat-completion endpoint URL
            model: Model name sent with every request
            api_key: Optional bearer token
            timeout: Request timeout in seconds
        """
        self.client = client
        self.url = url
        self.model = model
        self.timeout = timeout

        self.headers = {
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
        }
        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: LLMSettings) -> "ChatCompletionClient":
        """Build a client configured from LLMSettings."""
        return cls(
            client=client,
            url=settings.chat_completion_url,
            model=settings.model,
            api_key=settings.api_key,
            timeout=settings.request_timeout,
        )

    def build_payload(
        self,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> dict[str, Any]:
        return {
            "messages": messages,
            "model": self.model,
            "stream": True,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    async def open_stream(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 4000,
    ) -> httpx.Response:
        """
        Send a streamed completion request.

        The caller owns the returned response and must close it (aclose) once
        the body has been consumed or abandoned.

        Args:
            messages: Role-tagged chat messages
            temperature: Sampling temperature
            max_tokens: Output token ceiling

        Returns:
            httpx.Response: Open response whose body has not been read yet

        Raises:
            BackendUnavailableError: On connection failure, timeout or non-2xx status
        """
        request = self.client.build_request(
            "POST",
            self.url,
            json=self.build_payload(messages, temperature, max_tokens),
            headers=self.headers,
            timeout=self.timeout,
        )
        try:
            response = await self.client.send(request, stream=True)
        except httpx.TimeoutException as e:
            logger.error(f"{__name__}:open_stream - Backend timed out after {self.timeout}s")
            raise BackendUnavailableError("Chat-completion backend timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:open_stream - Backend request failed: {type(e).__name__}: {e}")
            raise BackendUnavailableError(
                f"Chat-completion backend unavailable: {type(e).__name__}"
            ) from e

        if response.is_error:
            status_code = response.status_code
            await response.aclose()
            logger.error(
                f"{__name__}:open_stream - Backend returned HTTP {status_code}",
                extra={"url": self.url},
            )
            raise BackendUnavailableError(
                f"Chat-completion backend returned HTTP {status_code}",
                status_code=status_code,
            )

        logger.info(f"{__name__}:open_stream - Stream opened", extra={"model": self.model})
        return response
