"""Application services."""

from repo_audit.application.services.analysis_service import AnalysisPlan, AnalysisService
from repo_audit.application.services.chat_service import ChatPlan, ChatService
from repo_audit.application.services.indexing_service import IndexingService

__all__ = ["AnalysisPlan", "AnalysisService", "ChatPlan", "ChatService", "IndexingService"]
