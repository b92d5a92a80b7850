"""Priority / urgency ranking."""

from __future__ import annotations

from typing import Iterable

from techreport.recommendations.models import (
    PRIORITY_RANKS,
    URGENCY_RANKS,
    Priority,
    Recommendation,
    Urgency,
)


def priority_rank(label: str) -> int:
    """Rank of a priority label; unrecognised labels rank 0."""
    return PRIORITY_RANKS[Priority.parse(label)]


def urgency_rank(label: str) -> int:
    """Rank of an urgency label; unrecognised labels rank 0."""
    return URGENCY_RANKS[Urgency.parse(label)]


def sort_recommendations(recommendations: Iterable[Recommendation]) -> list[Recommendation]:
    """Order by descending priority, then descending urgency.

    :func:`sorted` is stable, so equal-ranked records keep their input
    order.
    """
    return sorted(
        recommendations,
        key=lambda rec: (-priority_rank(rec.priority), -urgency_rank(rec.urgency)),
    )


def priority_breakdown(recommendations: Iterable[Recommendation]) -> dict[str, int]:
    """Count records per known priority label.

    Only exact labels are counted; anything else is left out.
    """
    breakdown = {
        Priority.CRITICAL.value: 0,
        Priority.HIGH.value: 0,
        Priority.MEDIUM.value: 0,
        Priority.LOW.value: 0,
    }
    for rec in recommendations:
        if rec.priority in breakdown:
            breakdown[rec.priority] += 1
    return breakdown
