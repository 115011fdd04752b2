"""
Chunked security analysis service.

Validates an analysis request, packs the supplied files into chunks,
renders the selected chunk into first/continuation prompts and opens the
streamed completion whose bytes are relayed to the caller.

Packing is deterministic, so callers that send the same file list with
increasing chunk indices see stable chunk boundaries.

Dependencies: repo_audit.core.chunking, repo_audit.core.prompts, repo_audit.boundary.llm
System role: Analysis orchestration layer
"""

import logging
from dataclasses import dataclass

from repo_audit.application.stream_relay import StreamRelay, relay_response
from repo_audit.boundary.llm.chat_completion_client import ChatCompletionClient
from repo_audit.configs.analysis import AnalysisSettings
from repo_audit.configs.llm import LLMSettings
from repo_audit.core.chunking.packer import DEFAULT_MAX_CHUNK_TOKENS, pack_files
from repo_audit.core.exceptions import ValidationError
from repo_audit.core.prompts.security_analysis_prompt import (
    DEFAULT_MAX_FILE_CHARS,
    build_messages,
    render_files,
)
from repo_audit.models.analysis import AnalysisRequestState, AnalyzeRequest
from repo_audit.models.files import Chunk, FileRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisPlan:
    """Everything needed to run one chunk of an analysis."""

    repository: str
    state: AnalysisRequestState
    chunk: Chunk
    messages: list[dict[str, str]]


class AnalysisService:
    """
    Chunked analysis orchestration.

    Stateless between requests: every call re-derives chunks from the
    request's file list.
    """

    def __init__(
        self,
        chat_client: ChatCompletionClient,
        max_chunk_tokens: int = DEFAULT_MAX_CHUNK_TOKENS,
        max_prompt_file_chars: int = DEFAULT_MAX_FILE_CHARS,
        temperature: float = 0.7,
        max_tokens: int = 4000,
    ) -> None:
        """
        Initialize analysis service.

        Args:
            chat_client: Streaming chat-completion client
            max_chunk_tokens: Estimated token budget per chunk
            max_prompt_file_chars: Per-file truncation ceiling at prompt-build time
            temperature: Sampling temperature sent to the backend
            max_tokens: Output token ceiling sent to the backend
        """
        self.chat_client = chat_client
        self.max_chunk_tokens = max_chunk_tokens
        self.max_prompt_file_chars = max_prompt_file_chars
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(
        cls,
        chat_client: ChatCompletionClient,
        analysis: AnalysisSettings,
        llm: LLMSettings,
    ) -> "AnalysisService":
        """Build a service configured from settings."""
        return cls(
            chat_client=chat_client,
            max_chunk_tokens=analysis.max_chunk_tokens,
            max_prompt_file_chars=analysis.max_prompt_file_chars,
            temperature=llm.temperature,
            max_tokens=llm.max_tokens,
        )

    def prepare(self, request: AnalyzeRequest) -> AnalysisPlan:
        """
        Validate the request and build the prompt for the requested chunk.

        Args:
            request: Parsed analysis request

        Returns:
            AnalysisPlan: Chunk position, selected chunk and chat messages

        Raises:
            ValidationError: If repository information is missing or the
                chunk index is out of range
        """
        context = request.context
        if context is None or context.repository is None or not context.repository.full_name:
            logger.warning(f"{__name__}:prepare - Missing repository information in request")
            raise ValidationError(
                "Invalid request: Missing repository information",
                field="context.repository",
            )
        repository = context.repository.full_name

        files = merge_current_file(context.files, context.current_file)
        chunks = pack_files(files, self.max_chunk_tokens)

        if not 0 <= request.chunk_index < len(chunks):
            logger.warning(
                f"{__name__}:prepare - Invalid chunk index {request.chunk_index} of {len(chunks)}",
                extra={"repository": repository},
            )
            raise ValidationError(
                "Invalid chunk index",
                field="chunkIndex",
                details={"chunk_index": request.chunk_index, "total_chunks": len(chunks)},
            )

        state = AnalysisRequestState(chunk_index=request.chunk_index, total_chunks=len(chunks))
        chunk = chunks[request.chunk_index]
        contents = render_files(chunk.files, self.max_prompt_file_chars)

        logger.info(
            f"{__name__}:prepare - Analyzing {repository} part {state.chunk_index + 1} of {state.total_chunks}",
            extra={
                "repository": repository,
                "chunk_files": len(chunk.files),
                "total_files": chunk.total_files,
                "content_chars": len(contents),
            },
        )
        return AnalysisPlan(
            repository=repository,
            state=state,
            chunk=chunk,
            messages=build_messages(repository, state, contents),
        )

    async def open_stream(self, plan: AnalysisPlan) -> StreamRelay:
        """
        Open the backend completion stream for a prepared chunk.

        Returns:
            StreamRelay: Relay over the backend's SSE bytes

        Raises:
            BackendUnavailableError: If the backend cannot be reached or rejects the call
        """
        response = await self.chat_client.open_stream(
            plan.messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        label = f"analysis {plan.repository} chunk {plan.state.chunk_index}"
        return relay_response(response, label=label)


def merge_current_file(
    files: list[FileRecord],
    current_file: FileRecord | None,
) -> list[FileRecord]:
    """Append the currently opened file unless a file with the same path is already listed."""
    if current_file is None or not current_file.has_content:
        return list(files)
    if any(f.path == current_file.path for f in files):
        return list(files)
    return [*files, current_file]
