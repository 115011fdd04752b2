"""
Language detection from file names.

Dependencies: repo_audit.core.indexing.filters
System role: Language hints for rendered code blocks
"""

import posixpath

from repo_audit.core.indexing.filters import file_extension

EXTENSION_LANGUAGES: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".kt": "kotlin",
    ".scala": "scala",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".php": "php",
    ".rb": "ruby",
    ".swift": "swift",
    ".sh": "bash",
    ".bash": "bash",
    ".sql": "sql",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".md": "markdown",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".xml": "xml",
    ".tf": "hcl",
}

FILENAME_LANGUAGES: dict[str, str] = {
    "Dockerfile": "dockerfile",
    "Makefile": "makefile",
}


def detect_language(path: str) -> str | None:
    """
    Guess the language of a file for fenced code block labels.

    Falls back to the bare extension for unknown extensions.

    Args:
        path: Repository-relative path

    Returns:
        str | None: Language name, or None when the file has no extension
    """
    name = posixpath.basename(path)
    if name in FILENAME_LANGUAGES:
        return FILENAME_LANGUAGES[name]
    extension = file_extension(path)
    if not extension:
        return None
    return EXTENSION_LANGUAGES.get(extension, extension.lstrip("."))
