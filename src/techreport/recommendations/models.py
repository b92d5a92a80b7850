"""Data models for the recommendation extraction pipeline.

The pipeline turns raw model output into :class:`Recommendation` records.
Intermediate values are plain dictionaries (candidates) wrapped in small
tagged result types so every stage reports *why* a block was dropped,
even though the public entry point only returns the surviving records.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Priority / urgency tag sets
# ---------------------------------------------------------------------------

_PARENTHESISED_SUFFIX = re.compile(r"\s*\(.*\)\s*$")


def _label_key(text: str) -> str:
    """Lower-case *text* and collapse its whitespace."""
    return " ".join(text.split()).lower()


def _short_label_key(text: str) -> str:
    """Like :func:`_label_key` but without a trailing ``(...)`` window."""
    return _label_key(_PARENTHESISED_SUFFIX.sub("", text))


class Priority(str, Enum):
    """Recommendation priority as emitted by the model.

    UNKNOWN stands in for any label outside the closed set and ranks
    lowest.
    """

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> Priority:
        """Map a free-text label onto a member, defaulting to UNKNOWN."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        key = _short_label_key(value)
        for member in cls:
            if member is not cls.UNKNOWN and _label_key(member.value) == key:
                return member
        return cls.UNKNOWN


class Urgency(str, Enum):
    """Time window in which a recommendation should be acted on.

    Labels match either in full (``"Same Day (4-24 hours)"``) or without
    the parenthesised window (``"same day"``).
    """

    IMMEDIATE = "Immediate (0-4 hours)"
    SAME_DAY = "Same Day (4-24 hours)"
    THIS_WEEK = "This Week (1-7 days)"
    THIS_MONTH = "This Month (1-30 days)"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> Urgency:
        """Map a free-text label onto a member, defaulting to UNKNOWN."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        full = _label_key(value)
        short = _short_label_key(value)
        for member in cls:
            if member is cls.UNKNOWN:
                continue
            if full == _label_key(member.value) or short == _short_label_key(member.value):
                return member
        return cls.UNKNOWN


PRIORITY_RANKS: dict[Priority, int] = {
    Priority.CRITICAL: 4,
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
    Priority.UNKNOWN: 0,
}

URGENCY_RANKS: dict[Urgency, int] = {
    Urgency.IMMEDIATE: 4,
    Urgency.SAME_DAY: 3,
    Urgency.THIS_WEEK: 2,
    Urgency.THIS_MONTH: 1,
    Urgency.UNKNOWN: 0,
}

# ---------------------------------------------------------------------------
# Defaults applied during normalisation
# ---------------------------------------------------------------------------

STRING_FIELDS: tuple[str, ...] = (
    "priority",
    "category",
    "urgency",
    "description",
    "estimated_time",
    "expected_outcome",
    "cost_estimate",
    "follow_up",
)

LIST_FIELDS: tuple[str, ...] = (
    "steps",
    "prerequisites",
    "risks",
    "alternative_solutions",
)

RECOMMENDATION_DEFAULTS: dict[str, Any] = {
    "priority": Priority.MEDIUM.value,
    "category": "General",
    "urgency": Urgency.THIS_WEEK.value,
    "description": "",
    "steps": (),
    "prerequisites": (),
    "estimated_time": "Not specified",
    "expected_outcome": "Improved system functionality",
    "risks": (),
    "cost_estimate": "Not specified",
    "follow_up": "Monitor system performance",
    "alternative_solutions": (),
}

DEFAULT_TITLE = "General IT Support Recommendation"
DEFAULT_STEPS: tuple[str, ...] = (
    "Review the provided recommendations",
    "Implement suggested solutions",
)

# ---------------------------------------------------------------------------
# Normalised record
# ---------------------------------------------------------------------------


class Recommendation(BaseModel):
    """A complete, render-ready recommendation.

    ``description``, every ``steps`` entry and ``expected_outcome`` hold
    rendered HTML, not markdown. ``priority`` and ``urgency`` keep the
    label the model produced; use :attr:`priority_level` and
    :attr:`urgency_level` for the parsed tags.

    Records built from fenced blocks always have at least one step.
    Records recovered by the line fallback may have none.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identifier unique within one parse call")
    title: str = Field(..., min_length=1, description="Short recommendation title")
    priority: str = Field(default=RECOMMENDATION_DEFAULTS["priority"])
    category: str = Field(default=RECOMMENDATION_DEFAULTS["category"])
    urgency: str = Field(default=RECOMMENDATION_DEFAULTS["urgency"])
    description: str = Field(default="", description="Rendered description HTML")
    steps: list[str] = Field(default_factory=list, description="Rendered step HTML")
    prerequisites: list[str] = Field(default_factory=list)
    estimated_time: str = Field(default=RECOMMENDATION_DEFAULTS["estimated_time"])
    expected_outcome: str = Field(default=RECOMMENDATION_DEFAULTS["expected_outcome"])
    risks: list[str] = Field(default_factory=list)
    cost_estimate: str = Field(default=RECOMMENDATION_DEFAULTS["cost_estimate"])
    follow_up: str = Field(default=RECOMMENDATION_DEFAULTS["follow_up"])
    alternative_solutions: list[str] = Field(default_factory=list)

    @property
    def priority_level(self) -> Priority:
        return Priority.parse(self.priority)

    @property
    def urgency_level(self) -> Urgency:
        return Urgency.parse(self.urgency)


# ---------------------------------------------------------------------------
# Tagged results
# ---------------------------------------------------------------------------


class SkipReason(str, Enum):
    """Why a fenced block did not become a recommendation."""

    INVALID_JSON = "invalid_json"
    NOT_A_MAPPING = "not_a_mapping"
    MISSING_TITLE = "missing_title"
    MISSING_STEPS = "missing_steps"


@dataclass(frozen=True)
class Valid:
    """A candidate that passed validation."""

    candidate: dict[str, Any]


@dataclass(frozen=True)
class Rejected:
    """A candidate that failed validation."""

    reason: SkipReason
    detail: str = ""


ValidationResult = Valid | Rejected


@dataclass(frozen=True)
class Accepted:
    """A fenced block that produced a recommendation."""

    block_index: int
    recommendation: Recommendation


@dataclass(frozen=True)
class Skipped:
    """A fenced block that was dropped."""

    block_index: int
    reason: SkipReason
    detail: str = ""


BlockOutcome = Accepted | Skipped


@dataclass
class ExtractionReport:
    """Outcome of scanning one raw response for fenced blocks."""

    blocks_found: int = 0
    outcomes: list[BlockOutcome] = field(default_factory=list)

    @property
    def recommendations(self) -> list[Recommendation]:
        """Accepted records in document order."""
        return [o.recommendation for o in self.outcomes if isinstance(o, Accepted)]

    @property
    def skipped(self) -> list[Skipped]:
        return [o for o in self.outcomes if isinstance(o, Skipped)]
