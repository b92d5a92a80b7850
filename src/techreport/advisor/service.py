"""Recommendation generation and chat assistant service.

Renders the prompt templates for a report, sends them through the
:class:`~techreport.llm.gateway.LLMGateway` and hands the response text to
the recommendation parser.

Usage::

    service = RecommendationService()
    result = service.generate(report)
    for rec in result.structured:
        print(rec.priority, rec.title)
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from techreport.advisor.exceptions import ChatError, RecommendationGenerationError
from techreport.advisor.models import (
    ChatMessage,
    GenerationMetadata,
    RecommendationResult,
    ReportData,
)
from techreport.llm.exceptions import LLMGatewayError
from techreport.llm.gateway import LLMGateway
from techreport.llm.prompt_templates import PromptTemplate
from techreport.recommendations.parser import RecommendationParser
from techreport.recommendations.ranking import priority_breakdown

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_TEXT = "Unable to generate recommendations at this time."
DEFAULT_MAX_RECOMMENDATIONS = "1-2"


class RecommendationService:
    """Generates recommendations for reports and answers chat questions.

    Attributes:
        gateway: LLM gateway used for completions.
        templates: Prompt template renderer.
        parser: Recommendation parser applied to model output.
    """

    def __init__(
        self,
        gateway: LLMGateway | None = None,
        templates: PromptTemplate | None = None,
        parser: RecommendationParser | None = None,
        max_recommendations: str = DEFAULT_MAX_RECOMMENDATIONS,
    ) -> None:
        self.gateway = gateway or LLMGateway()
        self.templates = templates or PromptTemplate()
        self.parser = parser or RecommendationParser()
        self.max_recommendations = max_recommendations

    def build_messages(self, report: ReportData) -> list[dict[str, Any]]:
        """System and user messages asking for recommendations on *report*."""
        system_prompt = self.templates.render(
            "recommendations_system",
            max_recommendations=self.max_recommendations,
        )
        user_prompt = self.templates.render(
            "recommendations_user",
            machine=report.machine_details,
            user_complaint=report.user_complaint,
            findings=report.findings,
        )
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

    def generate(self, report: ReportData) -> RecommendationResult:
        """Ask the model for recommendations and parse its answer.

        Raises:
            RecommendationGenerationError: If the model call fails.
        """
        messages = self.build_messages(report)
        try:
            raw = self.gateway.complete(messages)
        except LLMGatewayError as exc:
            raise RecommendationGenerationError(
                f"Failed to generate recommendations: {exc}"
            ) from exc

        if not raw.strip():
            logger.warning("Model returned an empty response")
            raw = EMPTY_RESPONSE_TEXT

        structured = self.parser.parse(raw)
        metadata = GenerationMetadata(
            total_recommendations=len(structured),
            priority_breakdown=priority_breakdown(structured),
        )
        logger.info(
            "Generated %d recommendation(s) for %s %s",
            len(structured),
            report.machine_details.make,
            report.machine_details.model,
        )
        return RecommendationResult(raw=raw, structured=structured, metadata=metadata)

    def chat(
        self,
        message: str,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Return the assistant's reply to *message* given prior turns.

        Raises:
            ChatError: If the model call fails.
        """
        messages: list[dict[str, Any]] = [
            {"role": "system", "content": self.templates.render("chat_system")},
        ]
        messages.extend({"role": turn.role, "content": turn.content} for turn in history)
        messages.append({"role": "user", "content": message})

        try:
            return self.gateway.complete(messages)
        except LLMGatewayError as exc:
            raise ChatError(f"Failed to get chat response: {exc}") from exc
