"""
Observability module.

Provides structured logging, correlation ID tracking and request logging.
"""

from repo_audit.observability.correlation import get_correlation_id, set_correlation_id
from repo_audit.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger", "get_correlation_id", "set_correlation_id"]
