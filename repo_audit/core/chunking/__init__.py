"""Token estimation and chunk packing."""

from repo_audit.core.chunking.estimator import estimate_tokens
from repo_audit.core.chunking.packer import DEFAULT_MAX_CHUNK_TOKENS, pack_files

__all__ = ["DEFAULT_MAX_CHUNK_TOKENS", "estimate_tokens", "pack_files"]
