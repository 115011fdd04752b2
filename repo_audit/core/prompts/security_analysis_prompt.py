"""
Security analysis prompts.

System and user prompt templates for the chunked security review. The first
chunk opens the structured report; continuation chunks ask for new findings
consistent with earlier ones. Continuity across chunks relies on this
phrasing only: earlier chunks and earlier model output are never replayed.

Dependencies: repo_audit.models
System role: Prompt templates for chunked repository analysis
"""

from collections.abc import Iterable

from repo_audit.models.analysis import AnalysisRequestState
from repo_audit.models.files import FileRecord

DEFAULT_MAX_FILE_CHARS = 100_000

FILE_TRUNCATION_MARKER = "\n\n// ... content truncated ({size_kb:.1f}KB total) ...\n"

EMPTY_CONTENT_NOTICE = "No file contents available for analysis."

FIRST_CHUNK_SYSTEM_PROMPT = """You are a security expert analyzing code repositories.
For each issue or recommendation:
- Show the problematic code snippet
- Explain the security implications
- Provide a secure code example as solution
Use markdown formatting with proper syntax highlighting."""

CONTINUATION_SYSTEM_PROMPT = """You are a security expert continuing a security review of a code repository.
Earlier parts of the repository were already reviewed and reported on.
Report only new findings from the files provided now, keeping the same format
and staying consistent with earlier findings:
- Show the problematic code snippet
- Explain the security implications
- Provide a secure code example as solution
Do not restate the report introduction or repeat context already covered.
Use markdown formatting with proper syntax highlighting."""

FIRST_CHUNK_USER_PROMPT = """Analyze the security of {repository} repository (part {part} of {total_parts}) using this structure:

# Security Analysis Report

## 1. Security Vulnerabilities
For each vulnerability found:
- Show the vulnerable code snippet
- Explain the security risk
- Provide a secure code example

## 2. Code Quality Issues
For each quality issue:
- Show the problematic code
- Explain why it's a security concern
- Provide an improved code example

## 3. Best Practices
For each recommendation:
- Show current code that could be improved
- Explain the best practice
- Provide example implementation

## 4. Security Improvements
For each suggestion:
- Show relevant code sections
- Explain the improvement
- Provide secure code examples

Repository content to analyze:
{contents}"""

CONTINUATION_USER_PROMPT = """Continue the security analysis of {repository} repository with part {part} of {total_parts}.

Find new vulnerabilities, code quality issues, best-practice gaps and security improvements
in the files below. For each issue show the vulnerable snippet, explain the risk and provide
a secure fix. Keep the findings consistent with the previous parts and do not repeat them.

Repository content to analyze:
{contents}"""


def truncate_for_prompt(content: str, max_chars: int = DEFAULT_MAX_FILE_CHARS) -> str:
    """Cut content to its first max_chars characters, followed by a marker stating the original size in KB."""
    if len(content) <= max_chars:
        return content
    return content[:max_chars] + FILE_TRUNCATION_MARKER.format(size_kb=len(content) / 1024)


def render_file(file: FileRecord, max_chars: int = DEFAULT_MAX_FILE_CHARS) -> str:
    """Render one file as a fenced code block labeled with its path and language."""
    content = truncate_for_prompt(file.content or "", max_chars)
    return f"\nFile: {file.path}\n```{file.language or 'text'}\n{content}\n```\n\n"


def render_files(files: Iterable[FileRecord], max_chars: int = DEFAULT_MAX_FILE_CHARS) -> str:
    """Render content-bearing files; falls back to a notice when nothing has content."""
    contents = "".join(render_file(f, max_chars) for f in files if f.has_content)
    return contents if contents.strip() else EMPTY_CONTENT_NOTICE


def build_messages(
    repository: str,
    state: AnalysisRequestState,
    contents: str,
) -> list[dict[str, str]]:
    """
    Build the two-message chat payload for one chunk.

    Args:
        repository: Repository display name
        state: Chunk position for this request
        contents: Rendered file blocks of the chunk

    Returns:
        list[dict[str, str]]: System message followed by user message
    """
    values = {
        "repository": repository,
        "part": state.chunk_index + 1,
        "total_parts": state.total_chunks,
        "contents": contents,
    }
    if state.is_first_chunk:
        system_prompt = FIRST_CHUNK_SYSTEM_PROMPT
        user_prompt = FIRST_CHUNK_USER_PROMPT.format(**values)
    else:
        system_prompt = CONTINUATION_SYSTEM_PROMPT
        user_prompt = CONTINUATION_USER_PROMPT.format(**values)
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]
