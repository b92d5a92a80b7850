"""Configuration and log models for the LLM gateway."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODEL = "cerebras/gpt-oss-120b"


class LLMLogEntry(BaseModel):
    """Structured log entry for a single completion request."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC time the request completed",
    )
    request_id: UUID = Field(default_factory=uuid4)
    model: str = Field(..., description="Model identifier used for the request")
    messages: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Request messages (content truncated)",
    )
    response: str = Field(default="", description="Response text (truncated)")
    tokens_prompt: int = Field(default=0)
    tokens_completion: int = Field(default=0)
    tokens_total: int = Field(default=0)
    latency_ms: float = Field(default=0.0)


class GatewayConfig(BaseModel):
    """Configuration for :class:`~techreport.llm.gateway.LLMGateway`."""

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    model: str = Field(
        default=DEFAULT_MODEL,
        description="LiteLLM model identifier (provider/model)",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, gt=0)
