"""Client for the chunked analysis API."""

from repo_audit.client.analysis_client import AnalysisClient

__all__ = ["AnalysisClient"]
