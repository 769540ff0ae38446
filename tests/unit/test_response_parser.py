"""
Unit tests for the assistant output parser.
Covers the three degradation tiers and the field probe order.
"""

import json

from pillpal.models.domain import AssistantOutput
from pillpal.services.response_parser import parse_assistant_output, salvage_output


class TestValidOutput:
    """Tier 1: well-formed replies pass through untouched."""

    def test_full_reply_returned_as_is(self):
        """Should keep both fields of a valid reply."""
        # Arrange
        raw = '{"response":"Take with food","suggestions":["When?","Why?"]}'

        # Act
        result = parse_assistant_output(raw)

        # Assert
        assert result == AssistantOutput(
            response="Take with food", suggestions=["When?", "Why?"]
        )

    def test_reply_without_suggestions(self):
        """Should accept a reply with no suggestions field."""
        result = parse_assistant_output('{"response": "All good"}')

        assert result.response == "All good"
        assert result.suggestions is None

    def test_extra_fields_are_ignored(self):
        """Should ignore keys outside the output shape."""
        raw = json.dumps({"response": "Hi", "suggestions": [], "mood": "happy"})

        result = parse_assistant_output(raw)

        assert result.response == "Hi"
        assert result.suggestions == []


class TestSalvage:
    """Tier 2: parseable JSON with the wrong shape."""

    def test_answer_field_used_when_response_missing(self):
        """Should fall back to the 'answer' field."""
        result = parse_assistant_output('{"answer":"Take with food"}')

        assert result.response == "Take with food"
        assert result.suggestions is None

    def test_non_string_suggestions_are_dropped(self):
        """Should keep only string suggestions."""
        result = parse_assistant_output('{"response":"ok","suggestions":["a", 5, "b"]}')

        assert result.response == "ok"
        assert result.suggestions == ["a", "b"]

    def test_response_preferred_over_answer(self):
        """Should probe 'response' before 'answer'."""
        raw = json.dumps({"response": "first", "answer": "second", "suggestions": "x"})

        result = parse_assistant_output(raw)

        assert result.response == "first"
        assert result.suggestions is None

    def test_non_string_response_falls_through_to_answer(self):
        """Should skip a response field that is not a string."""
        raw = json.dumps({"response": {"text": "nested"}, "answer": "flat"})

        result = parse_assistant_output(raw)

        assert result.response == "flat"

    def test_raw_text_used_when_no_candidate_field(self):
        """Should use the raw text when neither field is usable."""
        raw = '{"message": "hello", "suggestions": ["Next?"]}'

        result = parse_assistant_output(raw)

        assert result.response == raw
        assert result.suggestions == ["Next?"]

    def test_json_array_uses_raw_text(self):
        """Should treat non-object JSON as having no fields."""
        raw = '["just", "a", "list"]'

        result = salvage_output(json.loads(raw), raw)

        assert result.response == raw
        assert result.suggestions is None


class TestUnparseable:
    """Tier 3: text that is not JSON at all."""

    def test_plain_text_returned_verbatim(self):
        """Should wrap plain text as the response."""
        result = parse_assistant_output("not json at all")

        assert result.response == "not json at all"
        assert result.suggestions is None

    def test_truncated_json_returned_verbatim(self):
        """Should not attempt to repair broken JSON."""
        raw = '{"response": "cut off'

        result = parse_assistant_output(raw)

        assert result.response == raw

    def test_oversized_integer_returned_verbatim(self):
        """Should fall back to raw text when the decoder rejects a huge number."""
        raw = '{"response": "ok", "n": ' + "1" * 5000 + "}"

        result = parse_assistant_output(raw)

        assert result.response == raw
        assert result.suggestions is None

    def test_deeply_nested_json_returned_verbatim(self):
        """Should fall back to raw text when nesting exceeds the recursion limit."""
        raw = "[" * 100000 + "]" * 100000

        result = parse_assistant_output(raw)

        assert result.response == raw
