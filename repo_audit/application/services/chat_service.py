"""
Repository chat service.

Builds the repository context prompt for a conversation about the
repository the caller is browsing and opens the streamed completion whose
bytes are relayed to the caller. Conversation history is kept by the
caller; nothing is stored here.

Dependencies: repo_audit.core.prompts, repo_audit.boundary.llm
System role: Chat orchestration layer
"""

import logging
from dataclasses import dataclass

from repo_audit.application.stream_relay import StreamRelay, relay_response
from repo_audit.boundary.llm.chat_completion_client import ChatCompletionClient
from repo_audit.configs.analysis import AnalysisSettings
from repo_audit.configs.llm import LLMSettings
from repo_audit.core.exceptions import ValidationError
from repo_audit.core.prompts.repository_chat_prompt import build_chat_messages, format_repository_context
from repo_audit.core.prompts.security_analysis_prompt import DEFAULT_MAX_FILE_CHARS
from repo_audit.models.chat import ChatRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatPlan:
    """Prepared chat turn."""

    repository: str
    messages: list[dict[str, str]]


class ChatService:
    """Repository chat orchestration."""

    def __init__(
        self,
        chat_client: ChatCompletionClient,
        max_prompt_file_chars: int = DEFAULT_MAX_FILE_CHARS,
        temperature: float = 0.7,
        max_tokens: int = 4000,
    ) -> None:
        """
        Initialize chat service.

        Args:
            chat_client: Streaming chat-completion client
            max_prompt_file_chars: Character ceiling for the open file's content
            temperature: Sampling temperature sent to the backend
            max_tokens: Output token ceiling sent to the backend
        """
        self.chat_client = chat_client
        self.max_prompt_file_chars = max_prompt_file_chars
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(
        cls,
        chat_client: ChatCompletionClient,
        analysis: AnalysisSettings,
        llm: LLMSettings,
    ) -> "ChatService":
        """Build a service configured from settings."""
        return cls(
            chat_client=chat_client,
            max_prompt_file_chars=analysis.max_prompt_file_chars,
            temperature=llm.temperature,
            max_tokens=llm.max_tokens,
        )

    def prepare(self, request: ChatRequest) -> ChatPlan:
        """
        Validate the request and build the chat messages.

        Raises:
            ValidationError: If repository information is missing or the
                conversation holds no user message
        """
        context = request.context
        if context is None or context.repository is None or not context.repository.full_name:
            logger.warning(f"{__name__}:prepare - Missing repository information in request")
            raise ValidationError(
                "Invalid request: Missing repository information",
                field="context.repository",
            )
        if not any(message.role == "user" for message in request.messages):
            logger.warning(f"{__name__}:prepare - Conversation holds no user message")
            raise ValidationError(
                "Invalid request: At least one user message is required",
                field="messages",
            )

        repository = context.repository.full_name
        repository_context = format_repository_context(context, self.max_prompt_file_chars)
        logger.info(
            f"{__name__}:prepare - Chat about {repository}",
            extra={
                "repository": repository,
                "message_count": len(request.messages),
                "context_chars": len(repository_context),
            },
        )
        return ChatPlan(
            repository=repository,
            messages=build_chat_messages(repository_context, request.messages),
        )

    async def open_stream(self, plan: ChatPlan) -> StreamRelay:
        """
        Open the backend completion stream for a prepared chat turn.

        Raises:
            BackendUnavailableError: If the backend cannot be reached or rejects the call
        """
        response = await self.chat_client.open_stream(
            plan.messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return relay_response(response, label=f"chat {plan.repository}")
