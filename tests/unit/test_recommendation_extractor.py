"""Unit tests for fenced-block extraction and candidate parsing."""

from __future__ import annotations

import pytest

from techreport.recommendations.exceptions import CandidateParseError
from techreport.recommendations.extractor import extract_blocks, parse_candidate
from techreport.recommendations.models import SkipReason


class TestExtractBlocks:
    def test_no_blocks(self) -> None:
        assert extract_blocks("Just some prose.") == []

    def test_empty_input(self) -> None:
        assert extract_blocks("") == []

    def test_single_block_trimmed(self) -> None:
        raw = "Intro\n```recommendation\n  {\"title\": \"A\"}  \n```\nOutro"
        assert extract_blocks(raw) == ['{"title": "A"}']

    def test_multiple_blocks_in_order(self) -> None:
        raw = (
            "```recommendation\n{\"n\": 1}\n```\n"
            "text between\n"
            "```recommendation\n{\"n\": 2}\n```\n"
            "```recommendation\n{\"n\": 3}\n```"
        )
        assert extract_blocks(raw) == ['{"n": 1}', '{"n": 2}', '{"n": 3}']

    def test_stops_at_nearest_closing_fence(self) -> None:
        raw = "```recommendation\nfirst\n```\nmiddle\n```\nlast\n```"
        assert extract_blocks(raw) == ["first"]

    def test_unterminated_block_yields_nothing(self) -> None:
        assert extract_blocks("```recommendation\n{\"title\": \"A\"}") == []

    def test_other_fence_tags_ignored(self) -> None:
        raw = "```json\n{\"title\": \"A\"}\n```"
        assert extract_blocks(raw) == []

    def test_block_on_one_line(self) -> None:
        assert extract_blocks('```recommendation {"a": 1} ```') == ['{"a": 1}']

    def test_repeated_calls_are_independent(self) -> None:
        raw = "```recommendation\nx\n```"
        assert extract_blocks(raw) == extract_blocks(raw) == ["x"]


class TestParseCandidate:
    def test_object(self) -> None:
        data = parse_candidate('{"title": "A", "steps": ["one"]}')
        assert data == {"title": "A", "steps": ["one"]}

    def test_invalid_json(self) -> None:
        with pytest.raises(CandidateParseError) as exc_info:
            parse_candidate('{"title": "A", "steps": [')
        assert exc_info.value.reason is SkipReason.INVALID_JSON

    def test_array_is_not_a_mapping(self) -> None:
        with pytest.raises(CandidateParseError) as exc_info:
            parse_candidate('["a", "b"]')
        assert exc_info.value.reason is SkipReason.NOT_A_MAPPING

    def test_deep_nesting_is_invalid_json(self) -> None:
        with pytest.raises(CandidateParseError) as exc_info:
            parse_candidate("[" * 100_000)
        assert exc_info.value.reason is SkipReason.INVALID_JSON

    def test_error_message_has_preview(self) -> None:
        with pytest.raises(CandidateParseError, match="not valid JSON"):
            parse_candidate("title: A")
