"""Recommendation extraction and normalisation for language-model output.

- :func:`parse_recommendations` – raw response text → ranked records
- :class:`RecommendationParser` – configurable pipeline with per-block reports
- :class:`Recommendation` – the normalised, render-ready record
- :class:`Priority` / :class:`Urgency` – closed tag sets used for ranking
"""

from techreport.recommendations.exceptions import (
    CandidateParseError,
    MarkdownRenderError,
    RecommendationError,
)
from techreport.recommendations.models import (
    RECOMMENDATION_DEFAULTS,
    Accepted,
    ExtractionReport,
    Priority,
    Recommendation,
    Rejected,
    SkipReason,
    Skipped,
    Urgency,
    Valid,
)
from techreport.recommendations.parser import (
    ParserConfig,
    RecommendationParser,
    parse_recommendations,
)
from techreport.recommendations.ranking import priority_breakdown, sort_recommendations

__all__ = [
    "Accepted",
    "CandidateParseError",
    "ExtractionReport",
    "MarkdownRenderError",
    "ParserConfig",
    "Priority",
    "RECOMMENDATION_DEFAULTS",
    "Recommendation",
    "RecommendationError",
    "RecommendationParser",
    "Rejected",
    "SkipReason",
    "Skipped",
    "Urgency",
    "Valid",
    "parse_recommendations",
    "priority_breakdown",
    "sort_recommendations",
]
