"""
Router utility functions.

Contains response helpers shared by the streaming endpoints.
"""

from repo_audit.api.routers.router_utils.responses import SSE_HEADERS, error_response

__all__ = [
    "SSE_HEADERS",
    "error_response",
]
