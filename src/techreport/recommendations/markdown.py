"""Markdown rendering for recommendation text fields.

Backed by :mod:`markdown2`. Block rendering turns single newlines into
hard breaks and enables GitHub-style tables, strikethrough and fenced
code. Inline rendering uses the same options but drops the paragraph
element that would otherwise wrap a single line.
"""

from __future__ import annotations

import re
from typing import Any

import markdown2

from techreport.recommendations.exceptions import MarkdownRenderError

_EXTRAS: dict[str, Any] = {
    "breaks": {"on_newline": True},
    "tables": None,
    "strike": None,
    "fenced-code-blocks": None,
}

# Line starts that would turn inline text into a heading, list or quote.
# markdown2 reads "#1" as a heading too, so "#" needs no trailing space.
_BLOCK_MARKER = re.compile(
    r"^[ \t]*(#+|(?:\d+\.|[-*+>])(?=[ \t]|$))", re.MULTILINE
)

_P_OPEN = "<p>"
_P_CLOSE = "</p>"


def _convert(text: str) -> str:
    try:
        return str(markdown2.markdown(text, extras=_EXTRAS))
    except Exception as exc:
        raise MarkdownRenderError(f"Markdown rendering failed: {exc}") from exc


def _escape_block_marker(match: re.Match[str]) -> str:
    marker = match.group(1)
    if marker.endswith("."):
        return marker[:-1] + "\\."
    return "\\" + marker


def render_markdown(text: str) -> str:
    """Render *text* as block-level HTML."""
    if not text:
        return ""
    return _convert(text)


def render_inline(text: str) -> str:
    """Render *text* as HTML without a wrapping paragraph.

    Heading, list and quote markers at the start of a line are kept as
    literal text. Other output that is not a single paragraph (tables,
    fenced code) is returned unchanged apart from surrounding whitespace.
    """
    if not text:
        return ""
    html = _convert(_BLOCK_MARKER.sub(_escape_block_marker, text)).strip()
    if (
        html.startswith(_P_OPEN)
        and html.endswith(_P_CLOSE)
        and html.count(_P_OPEN) == 1
    ):
        html = html[len(_P_OPEN):-len(_P_CLOSE)]
    return html
