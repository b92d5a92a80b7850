"""Custom exceptions for the LLM client layer."""

from __future__ import annotations


class LLMGatewayError(Exception):
    """Base exception for all LLM gateway errors."""


class ConfigurationError(LLMGatewayError):
    """Raised when the gateway is misconfigured (e.g. empty model name)."""


class LLMRequestError(LLMGatewayError):
    """Raised when the provider rejects or fails a completion request.

    Attributes:
        model: Model identifier the request was sent to.
    """

    def __init__(self, model: str, cause: Exception) -> None:
        self.model = model
        super().__init__(f"Completion request to {model} failed: {cause}")


class TemplateError(LLMGatewayError):
    """Raised when a prompt template is missing or cannot be rendered."""
