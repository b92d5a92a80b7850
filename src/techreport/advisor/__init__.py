"""Advisor service: report data in, parsed recommendations out."""

from techreport.advisor.exceptions import AdvisorError, ChatError, RecommendationGenerationError
from techreport.advisor.models import (
    ChatMessage,
    GenerationMetadata,
    MachineDetails,
    RecommendationResult,
    ReportData,
)
from techreport.advisor.service import RecommendationService

__all__ = [
    "AdvisorError",
    "ChatError",
    "ChatMessage",
    "GenerationMetadata",
    "MachineDetails",
    "RecommendationGenerationError",
    "RecommendationResult",
    "RecommendationService",
    "ReportData",
]
