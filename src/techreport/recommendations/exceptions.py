"""Custom exceptions for the recommendations pipeline."""

from __future__ import annotations

from techreport.recommendations.models import SkipReason


class RecommendationError(Exception):
    """Base exception for all recommendation pipeline errors."""


class CandidateParseError(RecommendationError):
    """Raised when a fenced block cannot be read as a JSON object.

    The pipeline catches this per block and skips the block; it never
    reaches callers of :func:`parse_recommendations`.

    Attributes:
        reason: Why the block was rejected.
    """

    def __init__(self, reason: SkipReason, message: str) -> None:
        self.reason = reason
        super().__init__(message)


class MarkdownRenderError(RecommendationError):
    """Raised when the markdown renderer itself fails.

    This is a collaborator fault, not a malformed-input condition, so it
    propagates out of the pipeline.
    """
