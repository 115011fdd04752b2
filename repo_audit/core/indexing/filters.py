"""
Indexable path filtering and content truncation.

Decides which tree entries are treated as text worth indexing and caps
decoded content at a per-file size ceiling.

Dependencies: None
System role: Indexer path policy
"""

import posixpath

EXCLUDED_PREFIXES: tuple[str, ...] = ("node_modules/", "dist/", "build/", ".git/")

BINARY_EXTENSIONS: frozenset[str] = frozenset({
    # images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff", ".psd", ".svgz",
    # audio / video
    ".mp3", ".wav", ".ogg", ".flac", ".mp4", ".mov", ".avi", ".mkv", ".webm",
    # fonts
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
    # archives
    ".zip", ".tar", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar", ".jar", ".war",
    # documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # compiled / binary artifacts
    ".exe", ".dll", ".so", ".dylib", ".bin", ".o", ".a", ".class", ".pyc", ".pyo",
    ".wasm", ".db", ".sqlite", ".sqlite3", ".dat",
})

CONFIG_EXTENSIONS: frozenset[str] = frozenset({
    ".json", ".yaml", ".yml", ".toml", ".xml", ".ini", ".cfg", ".conf", ".properties", ".env",
})

TRUNCATION_MARKER = "\n\n... content truncated ({size_kb:.1f}KB total) ...\n"


def file_extension(path: str) -> str:
    """Lower-cased extension of the last path segment, '' if none."""
    return posixpath.splitext(path)[1].lower()


def is_indexable(path: str) -> bool:
    """
    Check whether a tree path should be fetched and indexed.

    Args:
        path: Repository-relative POSIX path

    Returns:
        bool: False for excluded directories and binary/media extensions
    """
    if path.startswith(EXCLUDED_PREFIXES):
        return False
    return file_extension(path) not in BINARY_EXTENSIONS


def size_ceiling(path: str, max_file_bytes: int, max_config_file_bytes: int) -> int:
    """Pick the content ceiling for a path: config files get the larger one."""
    if file_extension(path) in CONFIG_EXTENSIONS:
        return max_config_file_bytes
    return max_file_bytes


def truncate_content(content: str, ceiling_bytes: int) -> str:
    """
    Cap content at a UTF-8 byte ceiling.

    Args:
        content: Decoded file content
        ceiling_bytes: Maximum encoded size kept

    Returns:
        str: Content unchanged when within the ceiling, otherwise the leading
        part followed by a marker stating the original size in KB
    """
    encoded = content.encode("utf-8")
    if len(encoded) <= ceiling_bytes:
        return content
    head = encoded[:ceiling_bytes].decode("utf-8", errors="ignore")
    return head + TRUNCATION_MARKER.format(size_kb=len(encoded) / 1024)
