"""Line-oriented fallback for responses without fenced blocks.

A line whose marker (a number, ``-``, ``*`` or ``•``) is followed by
whitespace opens a new recommendation: ``1. Replace the battery`` or
``- Update drivers``. Other lines starting with ``-`` or ``*``
(``-Restart the laptop``) add a step to the open recommendation; ``**``
emphasis and ``---`` rules do not count as markers. Any other
non-heading line extends its description. When nothing can be
recovered a single generic recommendation wraps the whole response.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field

from techreport.recommendations.markdown import render_inline, render_markdown
from techreport.recommendations.models import DEFAULT_STEPS, DEFAULT_TITLE, Recommendation
from techreport.recommendations.normalizer import apply_defaults, generate_id

logger = logging.getLogger(__name__)

_RECORD_LINE = re.compile(r"^(?:\d+\.?|[-*•])\s+(.+)")
_STEP_LINE = re.compile(r"^[-*](?![-*])\s*(.+)")


@dataclass
class _Draft:
    title: str
    description: str
    steps: list[str] = field(default_factory=list)


def _start_draft(text: str) -> _Draft:
    return _Draft(title=text, description=render_inline(text))


def _finish(draft: _Draft, index: int, stamp: int) -> Recommendation:
    fields = apply_defaults(
        {"title": draft.title, "description": draft.description, "steps": draft.steps}
    )
    return Recommendation(id=f"fallback_{stamp}_{index}", **fields)


def default_recommendation(raw: str) -> Recommendation:
    """The catch-all record used when no recommendation can be recovered."""
    fields = apply_defaults(
        {
            "title": DEFAULT_TITLE,
            "description": render_markdown(raw),
            "steps": list(DEFAULT_STEPS),
        }
    )
    return Recommendation(id=generate_id("default"), **fields)


def parse_lines(raw: str) -> list[Recommendation]:
    """Recover recommendations from marker lines.

    Returns an empty list when *raw* has no numbered or bulleted lines.
    """
    stamp = int(time.time() * 1000)
    drafts: list[_Draft] = []
    current: _Draft | None = None

    for line in raw.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        record = _RECORD_LINE.match(trimmed)
        if record:
            current = _start_draft(record.group(1))
            drafts.append(current)
            continue

        if current is None:
            continue

        step = _STEP_LINE.match(trimmed)
        if step:
            current.steps.append(render_inline(step.group(1)))
        else:
            current.description += " " + render_inline(trimmed)

    return [_finish(draft, index, stamp) for index, draft in enumerate(drafts)]


def parse_fallback(raw: str) -> list[Recommendation]:
    """Line-oriented extraction, ending in the catch-all record if needed."""
    recommendations = parse_lines(raw or "")
    if recommendations:
        logger.debug("Fallback recovered %d recommendation(s)", len(recommendations))
        return recommendations

    logger.debug("Fallback found nothing; returning the default recommendation")
    return [default_recommendation(raw or "")]
