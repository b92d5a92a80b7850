"""LLM Gateway – chat completions via LiteLLM.

The gateway sends one request per call and records a :class:`LLMLogEntry`
for every successful completion. Provider credentials are read by LiteLLM
from the environment (e.g. ``CEREBRAS_API_KEY``).
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any
from uuid import uuid4

import litellm
from litellm import completion as litellm_completion
from litellm.exceptions import (
    APIConnectionError as LiteLLMAPIConnectionError,
    APIError as LiteLLMAPIError,
    AuthenticationError as LiteLLMAuthenticationError,
    BadRequestError as LiteLLMBadRequestError,
    RateLimitError as LiteLLMRateLimitError,
)

from techreport.llm.exceptions import ConfigurationError, LLMRequestError
from techreport.llm.models import GatewayConfig, LLMLogEntry

logger = logging.getLogger(__name__)

_REQUEST_ERRORS: tuple[type[Exception], ...] = (
    LiteLLMAPIConnectionError,
    LiteLLMAPIError,
    LiteLLMAuthenticationError,
    LiteLLMBadRequestError,
    LiteLLMRateLimitError,
    TimeoutError,
)

# Maximum truncation length for logged messages / responses.
_LOG_TRUNCATE_LEN = 1000


def _truncate(text: str, max_len: int = _LOG_TRUNCATE_LEN) -> str:
    """Truncate text to *max_len* characters, appending '…' if clipped."""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "…"


def _truncate_messages(
    messages: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Return a copy of *messages* with ``content`` values truncated."""
    truncated: list[dict[str, Any]] = []
    for msg in messages:
        entry = dict(msg)
        if isinstance(entry.get("content"), str):
            entry["content"] = _truncate(entry["content"])
        truncated.append(entry)
    return truncated


class LLMGateway:
    """Thin chat-completion client with request logging.

    Example::

        gw = LLMGateway(GatewayConfig(model="cerebras/gpt-oss-120b"))
        text = gw.complete([{"role": "user", "content": "Hello!"}])
    """

    def __init__(self, config: GatewayConfig | None = None) -> None:
        self._config = config or GatewayConfig()
        if not self._config.model.strip():
            raise ConfigurationError("No model configured for the LLM gateway")
        self._logs: list[LLMLogEntry] = []

        # Suppress litellm's own verbose logging by default
        litellm.suppress_debug_info = True

    @property
    def config(self) -> GatewayConfig:
        return self._config

    @property
    def logs(self) -> list[LLMLogEntry]:
        """Access the request/response log."""
        return list(self._logs)

    def complete(
        self,
        messages: list[dict[str, Any]],
        model: str | None = None,
        **kwargs: Any,
    ) -> str:
        """Send a chat completion request and return the response text.

        Args:
            messages: Chat messages (``{"role": …, "content": …}``).
            model: Model override; defaults to the configured model.
            **kwargs: Extra arguments forwarded to ``litellm.completion()``.
                ``temperature`` and ``max_tokens`` default to the config.

        Returns:
            The assistant's response text (empty string when the provider
            returns no content).

        Raises:
            LLMRequestError: If the provider call fails.
        """
        target = model or self._config.model
        kwargs.setdefault("temperature", self._config.temperature)
        kwargs.setdefault("max_tokens", self._config.max_tokens)

        start = time.monotonic()
        try:
            response = litellm_completion(model=target, messages=messages, **kwargs)
        except _REQUEST_ERRORS as exc:
            logger.error("LLM request to %s failed: %s", target, exc)
            raise LLMRequestError(target, exc) from exc
        elapsed_ms = (time.monotonic() - start) * 1000

        text = response.choices[0].message.content or ""

        usage = response.usage
        prompt_tokens = usage.prompt_tokens if usage else 0
        completion_tokens = usage.completion_tokens if usage else 0
        total_tokens = usage.total_tokens if usage else 0

        self._logs.append(
            LLMLogEntry(
                request_id=uuid4(),
                model=target,
                messages=_truncate_messages(messages),
                response=_truncate(text),
                tokens_prompt=prompt_tokens,
                tokens_completion=completion_tokens,
                tokens_total=total_tokens,
                latency_ms=elapsed_ms,
            )
        )
        logger.debug(
            "LLM response from %s: %d chars, %d tokens, %.0f ms",
            target,
            len(text),
            total_tokens,
            elapsed_ms,
        )
        return text

    def get_logs(
        self,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
    ) -> list[LLMLogEntry]:
        """Return log entries optionally filtered by an inclusive UTC range."""
        result: list[LLMLogEntry] = []
        for entry in self._logs:
            if start_time and entry.timestamp < start_time:
                continue
            if end_time and entry.timestamp > end_time:
                continue
            result.append(entry)
        return result
