"""LLM client layer: LiteLLM gateway and Jinja2 prompt templates."""

from techreport.llm.exceptions import (
    ConfigurationError,
    LLMGatewayError,
    LLMRequestError,
    TemplateError,
)
from techreport.llm.gateway import LLMGateway
from techreport.llm.models import DEFAULT_MODEL, GatewayConfig, LLMLogEntry
from techreport.llm.prompt_templates import PromptTemplate

__all__ = [
    "ConfigurationError",
    "DEFAULT_MODEL",
    "GatewayConfig",
    "LLMGateway",
    "LLMGatewayError",
    "LLMLogEntry",
    "LLMRequestError",
    "PromptTemplate",
    "TemplateError",
]
