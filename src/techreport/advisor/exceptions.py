"""Custom exceptions for the advisor service."""

from __future__ import annotations


class AdvisorError(Exception):
    """Base exception for advisor service errors."""


class RecommendationGenerationError(AdvisorError):
    """Raised when recommendations cannot be generated for a report."""


class ChatError(AdvisorError):
    """Raised when the chat assistant cannot produce a reply."""
