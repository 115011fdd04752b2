"""
Repository chat prompts.

Renders the repository the caller is browsing into a system message and
places it ahead of the conversation.

Dependencies: repo_audit.models, repo_audit.core.prompts.security_analysis_prompt
System role: Prompt construction for repository chat
"""

from collections.abc import Iterable

from repo_audit.core.prompts.security_analysis_prompt import DEFAULT_MAX_FILE_CHARS, truncate_for_prompt
from repo_audit.models.analysis import RepositoryContext
from repo_audit.models.chat import ChatMessage

CONTEXT_HEADING = "# Repository Analysis Context"

ROOT_PATH = "/"


def format_repository_context(
    context: RepositoryContext,
    max_chars: int = DEFAULT_MAX_FILE_CHARS,
) -> str:
    """
    Render provider, repository, browsing path and the open file.

    Args:
        context: Repository context sent by the caller
        max_chars: Character ceiling for the open file's content

    Returns:
        str: Markdown context block
    """
    full_name = context.repository.full_name if context.repository else None
    sections = [
        CONTEXT_HEADING,
        f"Provider: {context.provider}",
        f"Repository: {full_name}",
        f"Current Path: {context.current_path or ROOT_PATH}",
    ]

    current_file = context.current_file
    if current_file is not None:
        sections.extend(
            [
                f"\n## Current File: {current_file.path}",
                f"```{current_file.language or 'plaintext'}",
                truncate_for_prompt(current_file.content or "", max_chars),
                "```",
            ]
        )

    return "\n".join(sections)


def build_chat_messages(
    repository_context: str,
    conversation: Iterable[ChatMessage],
) -> list[dict[str, str]]:
    """
    Build the chat payload: the repository context as system message, then the conversation.

    System messages from the caller are dropped; the repository context is
    the only system instruction the backend receives.
    """
    messages = [{"role": "system", "content": repository_context}]
    messages.extend(
        {"role": message.role, "content": message.content}
        for message in conversation
        if message.role != "system"
    )
    return messages
