"""HTTP helpers shared by outbound clients."""

from repo_audit.boundary.http.retry import is_retryable, structural_retry

__all__ = ["is_retryable", "structural_retry"]
