"""Fenced-block extraction and candidate parsing.

Model output embeds recommendations as fenced blocks::

    ```recommendation
    {"title": "...", "steps": ["..."]}
    ```

:func:`extract_blocks` returns the inner text of every such block and
:func:`parse_candidate` reads one block as a JSON object.
"""

from __future__ import annotations

import json
import re
from typing import Any

from techreport.recommendations.exceptions import CandidateParseError
from techreport.recommendations.models import SkipReason

# Non-greedy: each block ends at the nearest closing fence.
_BLOCK_PATTERN = re.compile(r"```recommendation\s*(.*?)\s*```", re.DOTALL)

_PREVIEW_LEN = 80


def extract_blocks(raw: str) -> list[str]:
    """Return the trimmed inner text of every recommendation block.

    Blocks are returned in document order and never overlap. An opening
    fence without a closing fence yields nothing.
    """
    if not raw:
        return []
    return [match.group(1).strip() for match in _BLOCK_PATTERN.finditer(raw)]


def parse_candidate(text: str) -> dict[str, Any]:
    """Parse one block's inner text into a candidate mapping.

    Raises:
        CandidateParseError: If *text* is not valid JSON (including
            nesting too deep to decode) or its top level is not an object.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise CandidateParseError(
            SkipReason.INVALID_JSON,
            f"Block is not valid JSON: {exc}. Preview: {text[:_PREVIEW_LEN]!r}",
        ) from exc

    if not isinstance(data, dict):
        raise CandidateParseError(
            SkipReason.NOT_A_MAPPING,
            f"Block must be a JSON object, got {type(data).__name__}",
        )
    return data
