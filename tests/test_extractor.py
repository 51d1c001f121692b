"""Tests for structured-payload extraction."""

import json

from geosearch_analyst.modules.keyword_analysis.extractor import (
    NOT_FOUND,
    Found,
    extract_from_bracket_span,
    extract_from_fenced_block,
    extract_payload,
)


class TestFencedBlock:

    def test_returns_array_inside_fence_ignoring_outer_brackets(self):
        text = (
            "Here is the data [see notes]:\n"
            "```json\n[{\"keyword\": \"a\"}]\n```\n"
            "Trailing prose with [brackets] too."
        )
        result = extract_payload(text)
        assert isinstance(result, Found)
        assert result.payload == [{"keyword": "a"}]

    def test_no_fence_is_not_found(self):
        assert extract_from_fenced_block("[1, 2]") is NOT_FOUND

    def test_malformed_fence_falls_through_to_bracket_span(self):
        text = "```json\n[{broken\n```\nLater: [{\"keyword\": \"b\"}]"
        assert extract_from_fenced_block(text) is NOT_FOUND
        # The bracket span covers the broken fence too, so it also fails.
        assert extract_payload(text) is NOT_FOUND

    def test_malformed_fence_with_valid_bare_array(self):
        text = "```json\n{broken}\n```\n[{\"keyword\": \"b\"}]"
        result = extract_payload(text)
        assert isinstance(result, Found)
        assert result.payload == [{"keyword": "b"}]

    def test_fence_tag_is_case_insensitive(self):
        result = extract_payload("```JSON\n[]\n```")
        assert isinstance(result, Found)
        assert result.payload == []


class TestBracketSpan:

    def test_single_bare_array(self):
        records = [{"keyword": "x", "searchVolume": "100"}]
        text = "Some prose. " + json.dumps(records) + " More prose."
        result = extract_payload(text)
        assert isinstance(result, Found)
        assert result.payload == records

    def test_two_arrays_use_outermost_pair(self):
        text = '[{"keyword": "a"}] and also [{"keyword": "b"}]'
        # First "[" to last "]" spans both arrays plus prose: not valid JSON.
        assert extract_from_bracket_span(text) is NOT_FOUND

    def test_two_arrays_nested_in_outer_array(self):
        text = 'Result: [[1], [2]] done'
        result = extract_from_bracket_span(text)
        assert isinstance(result, Found)
        assert result.payload == [[1], [2]]

    def test_reversed_brackets_not_found(self):
        assert extract_from_bracket_span("] nothing [") is NOT_FOUND


class TestExtractPayload:

    def test_no_json_anywhere(self):
        assert extract_payload("Narrative only, no data at all.") is NOT_FOUND

    def test_empty_text(self):
        assert extract_payload("") is NOT_FOUND

    def test_not_found_is_falsy_singleton(self):
        assert not NOT_FOUND
        assert extract_payload("nothing") is NOT_FOUND

    def test_found_empty_array_is_still_found(self):
        result = extract_payload("[]")
        assert isinstance(result, Found)
        assert result.payload == []

    def test_custom_strategy_chain(self):
        calls = []

        def first(text):
            calls.append("first")
            return NOT_FOUND

        def second(text):
            calls.append("second")
            return Found(["custom"])

        result = extract_payload("anything", strategies=[first, second])
        assert result == Found(["custom"])
        assert calls == ["first", "second"]
