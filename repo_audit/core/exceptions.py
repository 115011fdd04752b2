"""
Exception hierarchy for the repository audit service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RepoAuditException(Exception):
    """Base exception for all repository audit errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RepoAuditException):
    """Raised when request validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class UpstreamFetchError(RepoAuditException):
    """Raised when a structural provider call (branch, ref, tree) fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        repository: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream fetch error.

        Args:
            message: Error message
            provider: Provider name (github, gitlab)
            repository: Repository full name
            status_code: HTTP status returned by the provider, if any
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        if repository:
            details["repository"] = repository
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class NoIndexableFilesError(RepoAuditException):
    """Raised when a repository tree holds no indexable file after filtering."""

    def __init__(self, repository: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["repository"] = repository
        super().__init__(f"No indexable files found in {repository}", details)


class PerFileFetchError(RepoAuditException):
    """Raised when a single file's content cannot be fetched or decoded."""

    def __init__(
        self,
        message: str,
        path: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["path"] = path
        super().__init__(message, details)


class IndexingCancelledError(RepoAuditException):
    """Raised when an indexing run is cancelled through its cancel signal."""

    pass


class BackendUnavailableError(RepoAuditException):
    """Raised when the chat-completion backend cannot be reached or rejects the call."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize backend unavailable error.

        Args:
            message: Error message
            status_code: HTTP status returned by the backend, if any
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class StreamRelayError(RepoAuditException):
    """Raised when reading from an upstream stream fails mid-relay."""

    def __init__(
        self,
        message: str,
        bytes_relayed: int = 0,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["bytes_relayed"] = bytes_relayed
        super().__init__(message, details)


class AnalysisRequestError(RepoAuditException):
    """Raised by the analysis client when the analyze endpoint rejects a chunk request."""

    def __init__(
        self,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)
