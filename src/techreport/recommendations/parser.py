"""Recommendation extraction pipeline.

Usage::

    from techreport.recommendations import parse_recommendations

    records = parse_recommendations(response_text)
    for rec in records:
        print(rec.priority, rec.title)

Pipeline stages:

1. **Extract** every fenced ``recommendation`` block.
2. **Parse** each block as a JSON object (bad blocks are skipped).
3. **Validate** the required ``title`` / ``steps`` fields.
4. **Normalise** defaults, render markdown fields, assign ids.
5. **Rank** by priority, then urgency.

If no block yields a record the response is handed to the line-oriented
fallback in :mod:`techreport.recommendations.fallback`.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from techreport.recommendations.exceptions import CandidateParseError
from techreport.recommendations.extractor import extract_blocks, parse_candidate
from techreport.recommendations.fallback import parse_fallback
from techreport.recommendations.models import (
    Accepted,
    ExtractionReport,
    Recommendation,
    Rejected,
    Skipped,
)
from techreport.recommendations.normalizer import normalize_candidate
from techreport.recommendations.ranking import sort_recommendations
from techreport.recommendations.validation import validate_candidate

logger = logging.getLogger(__name__)


class ParserConfig(BaseModel):
    """Configuration for :class:`RecommendationParser`."""

    model_config = ConfigDict(frozen=True)

    fallback_when_all_rejected: bool = Field(
        default=True,
        description=(
            "Run the line fallback when blocks were found but none produced "
            "a record. When False the fallback only runs if no block was found."
        ),
    )


class RecommendationParser:
    """Turns raw model output into ranked :class:`Recommendation` records.

    Instances hold no per-call state and may be shared across threads.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()

    def extract(self, raw: str) -> ExtractionReport:
        """Run extract / parse / validate / normalise over every block.

        Returns one outcome per block so callers can inspect why blocks
        were skipped. No fallback and no sorting happen here.
        """
        blocks = extract_blocks(raw)
        report = ExtractionReport(blocks_found=len(blocks))

        for index, block in enumerate(blocks):
            try:
                candidate = parse_candidate(block)
            except CandidateParseError as exc:
                logger.warning("Failed to parse recommendation block %d: %s", index, exc)
                report.outcomes.append(Skipped(index, exc.reason, str(exc)))
                continue

            result = validate_candidate(candidate)
            if isinstance(result, Rejected):
                logger.debug(
                    "Dropping recommendation block %d (%s): %s",
                    index,
                    result.reason.value,
                    result.detail,
                )
                report.outcomes.append(Skipped(index, result.reason, result.detail))
                continue

            report.outcomes.append(Accepted(index, normalize_candidate(result.candidate)))

        return report

    def parse(self, raw: str) -> list[Recommendation]:
        """Return the ranked recommendations found in *raw*.

        Never raises for malformed input. Only a renderer fault
        (:class:`~techreport.recommendations.exceptions.MarkdownRenderError`)
        propagates.
        """
        raw = raw or ""
        report = self.extract(raw)
        recommendations = report.recommendations

        if recommendations:
            logger.debug(
                "Extracted %d recommendation(s) from %d block(s)",
                len(recommendations),
                report.blocks_found,
            )
            return sort_recommendations(recommendations)

        if report.blocks_found == 0 or self.config.fallback_when_all_rejected:
            logger.info(
                "No structured recommendations in response (%d block(s) found); "
                "using line fallback",
                report.blocks_found,
            )
            return parse_fallback(raw)

        return []


_default_parser = RecommendationParser()


def parse_recommendations(raw: str) -> list[Recommendation]:
    """Parse *raw* with the default :class:`RecommendationParser`."""
    return _default_parser.parse(raw)
