"""Normalisation of validated candidates into :class:`Recommendation` records."""

from __future__ import annotations

import random
import string
import time
from typing import Any

from techreport.recommendations.markdown import render_inline, render_markdown
from techreport.recommendations.models import (
    LIST_FIELDS,
    RECOMMENDATION_DEFAULTS,
    STRING_FIELDS,
    Recommendation,
)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LEN = 9


def generate_id(prefix: str = "rec") -> str:
    """Return ``<prefix>_<epoch ms>_<random base36 suffix>``.

    Good enough for list keys within one response; not collision-proof.
    """
    suffix = "".join(random.choices(_ID_ALPHABET, k=_ID_SUFFIX_LEN))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def _coerce_text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = value if isinstance(value, str) else str(value)
    return text or default


def _coerce_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def apply_defaults(candidate: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *candidate* with every optional field populated.

    Missing, ``None`` and empty-string scalars take the default value.
    Unknown keys are dropped.
    """
    fields: dict[str, Any] = {"title": str(candidate["title"]).strip()}
    for name in STRING_FIELDS:
        fields[name] = _coerce_text(candidate.get(name), RECOMMENDATION_DEFAULTS[name])
    for name in LIST_FIELDS:
        fields[name] = _coerce_list(candidate.get(name)) or list(RECOMMENDATION_DEFAULTS[name])
    return fields


def normalize_candidate(candidate: dict[str, Any]) -> Recommendation:
    """Fill defaults, render markdown fields and assign an id.

    *candidate* must already have passed
    :func:`~techreport.recommendations.validation.validate_candidate`.
    """
    fields = apply_defaults(candidate)

    if fields["description"]:
        fields["description"] = render_markdown(fields["description"])
    fields["steps"] = [render_inline(step) for step in fields["steps"]]
    if fields["expected_outcome"]:
        fields["expected_outcome"] = render_inline(fields["expected_outcome"])

    return Recommendation(id=generate_id(), **fields)
