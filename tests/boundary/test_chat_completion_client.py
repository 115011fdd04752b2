"""
Test suite for ChatCompletionClient.

System role: Verification of the streaming LLM backend adapter
"""

import json

import httpx
import pytest

from repo_audit.boundary.llm.chat_completion_client import ChatCompletionClient
from repo_audit.configs.llm import LLMSettings
from repo_audit.core.exceptions import BackendUnavailableError

MESSAGES = [{"role": "system", "content": "sys"}, {"role": "user", "content": "usr"}]


def make_client(handler, api_key: str | None = None) -> ChatCompletionClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatCompletionClient(
        http_client,
        url="http://llm.test/v1/chat/completions",
        model="deepseek-coder",
        api_key=api_key,
    )


class TestChatCompletionClient:
    """Test suite for ChatCompletionClient.open_stream."""

    @pytest.mark.asyncio
    async def test_open_stream_should_post_streaming_payload(self, sse_body) -> None:
        # Arrange
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, content=sse_body("hi"))

        client = make_client(handler, api_key="secret")

        # Act
        response = await client.open_stream(MESSAGES, temperature=0.2, max_tokens=123)
        body = await response.aread()

        # Assert
        payload = json.loads(captured[0].content)
        assert payload == {
            "messages": MESSAGES,
            "model": "deepseek-coder",
            "stream": True,
            "temperature": 0.2,
            "max_tokens": 123,
        }
        assert captured[0].headers["Accept"] == "text/event-stream"
        assert captured[0].headers["Authorization"] == "Bearer secret"
        assert body == sse_body("hi")

    @pytest.mark.asyncio
    async def test_open_stream_should_omit_authorization_without_key(self, sse_body) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, content=sse_body())

        await make_client(handler).open_stream(MESSAGES)

        assert "Authorization" not in captured[0].headers

    @pytest.mark.asyncio
    async def test_open_stream_should_raise_on_error_status(self) -> None:
        client = make_client(lambda request: httpx.Response(503, text="overloaded"))

        with pytest.raises(BackendUnavailableError) as exc_info:
            await client.open_stream(MESSAGES)

        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_open_stream_should_raise_on_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(BackendUnavailableError, match="unavailable"):
            await make_client(handler).open_stream(MESSAGES)

    @pytest.mark.asyncio
    async def test_open_stream_should_raise_on_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(BackendUnavailableError, match="timed out"):
            await make_client(handler).open_stream(MESSAGES)

    def test_from_settings_should_apply_llm_settings(self) -> None:
        settings = LLMSettings(chat_completion_url="http://other.test/v1", model="m", api_key="k")

        client = ChatCompletionClient.from_settings(httpx.AsyncClient(), settings)

        assert client.url == "http://other.test/v1"
        assert client.model == "m"
        assert client.headers["Authorization"] == "Bearer k"
