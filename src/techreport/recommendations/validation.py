"""Candidate validation.

A candidate is usable when it has a non-blank string ``title`` and a
``steps`` list with at least one non-null entry. Everything else is
optional and filled in by the normaliser.
"""

from __future__ import annotations

from typing import Any

from techreport.recommendations.models import Rejected, SkipReason, Valid, ValidationResult


def validate_candidate(candidate: dict[str, Any]) -> ValidationResult:
    """Check the two required fields of *candidate*."""
    title = candidate.get("title")
    if not isinstance(title, str) or not title.strip():
        return Rejected(SkipReason.MISSING_TITLE, "title must be a non-blank string")

    steps = candidate.get("steps")
    if not isinstance(steps, list) or all(step is None for step in steps):
        return Rejected(SkipReason.MISSING_STEPS, "steps must be a list with at least one non-null entry")

    return Valid(candidate)
