"""Tests for search result formatting."""

from __future__ import annotations

from collections import OrderedDict
from datetime import date

import pytest

from fess_mcp.search.backend import FacetField, FacetResponse, Pagination, SearchResult
from fess_mcp.search.formatter import (
    create_document_content,
    format_search_result,
    process_document_items,
    sanitize,
    shape_facets,
    truncate_content,
)


class HighlightFragment:
    """Stand-in for a backend-specific rich-text fragment."""

    def __init__(self, text: str) -> None:
        self._text = text

    def __str__(self) -> str:
        return f"<em>{self._text}</em>"


class TestSanitize:
    def test_none(self) -> None:
        assert sanitize(None) is None

    @pytest.mark.parametrize("value", ["test", 123, 1.5, True, False, 0])
    def test_scalars_unchanged(self, value: object) -> None:
        assert sanitize(value) == value
        assert type(sanitize(value)) is type(value)

    def test_list(self) -> None:
        assert sanitize(["a", "b", 1]) == ["a", "b", 1]

    def test_tuple_becomes_list(self) -> None:
        assert sanitize(("a", "b", 1)) == ["a", "b", 1]

    def test_mapping_keys_become_strings(self) -> None:
        assert sanitize({"key1": "value1", 2: 123}) == {"key1": "value1", "2": 123}

    def test_ordered_mapping(self) -> None:
        result = sanitize(OrderedDict([("b", 1), ("a", 2)]))
        assert type(result) is dict
        assert list(result) == ["b", "a"]

    def test_opaque_leaf_stringified(self) -> None:
        assert sanitize(HighlightFragment("fess")) == "<em>fess</em>"
        assert sanitize(date(2024, 1, 2)) == "2024-01-02"

    def test_nested(self) -> None:
        value = {"hits": [{"title": HighlightFragment("x"), "tags": ("a", None)}]}
        assert sanitize(value) == {"hits": [{"title": "<em>x</em>", "tags": ["a", None]}]}


class TestProcessDocumentItems:
    def test_none(self) -> None:
        assert process_document_items(None) == []

    def test_empty(self) -> None:
        assert process_document_items([]) == []

    def test_documents(self) -> None:
        docs = [{"title": "Doc1", "url": "http://example.com/1"}, {"title": "Doc2"}]
        result = process_document_items(docs)
        assert [d["title"] for d in result] == ["Doc1", "Doc2"]


class TestTruncateContent:
    def test_none(self) -> None:
        assert truncate_content(None, 100) is None

    def test_short(self) -> None:
        assert truncate_content("Short", 100) == "Short"

    def test_exact_length(self) -> None:
        assert truncate_content("12345", 5) == "12345"

    def test_long(self) -> None:
        assert truncate_content("This is a long content that should be truncated", 10) == "This is a ..."

    def test_empty(self) -> None:
        assert truncate_content("", 100) == ""
        assert truncate_content("", 0) == ""

    def test_zero_max_length(self) -> None:
        assert truncate_content("test", 0) == "..."

    @pytest.mark.parametrize("text", ["", "a", "abcdef", "日本語のテキスト", "x" * 50])
    @pytest.mark.parametrize("limit", [0, 1, 5, 20])
    def test_length_and_idempotence(self, text: str, limit: int) -> None:
        once = truncate_content(text, limit)
        assert once is not None
        assert len(once) == min(len(text), limit) + (3 if len(text) > limit else 0)
        assert truncate_content(once, limit) == once


class TestCreateDocumentContent:
    def test_full_document(self) -> None:
        doc = {
            "title": "Test Document",
            "url": "https://example.com/test",
            "content": "This is test content.",
            "score": 10.5,
        }
        block = create_document_content(doc, 1000)
        assert block.type == "text"
        assert block.text == (
            "**Title**: Test Document\n"
            "**URL**: https://example.com/test\n"
            "**Score**: 10.5\n"
            "\n"
            "This is test content."
        )

    def test_without_score(self) -> None:
        doc = {"title": "Test Document", "url": "https://example.com/test", "content": "Body"}
        text = create_document_content(doc, 1000).text
        assert "**Title**: Test Document" in text
        assert "**Score**:" not in text

    def test_zero_score_is_rendered(self) -> None:
        text = create_document_content({"title": "t", "url": "u", "score": 0}, 100).text
        assert "**Score**: 0" in text

    def test_empty_document(self) -> None:
        text = create_document_content({}, 100).text
        assert "**Title**:" in text
        assert "**URL**:" in text

    def test_truncation(self) -> None:
        doc = {"title": "Test", "url": "http://test.com", "content": "This is a very long content that should be truncated"}
        text = create_document_content(doc, 20).text
        assert text.endswith("This is a very long ...")
        assert "should be truncated" not in text

    def test_falls_back_to_content_description(self) -> None:
        doc = {"title": "t", "url": "u", "content_description": "a <em>snippet</em>"}
        assert create_document_content(doc, 100).text.endswith("a <em>snippet</em>")

    def test_non_string_values(self) -> None:
        doc = {"title": ["part", "two"], "url": HighlightFragment("u"), "content": 42}
        text = create_document_content(doc, 100).text
        assert "**Title**: part two" in text
        assert "**URL**: <em>u</em>" in text
        assert text.endswith("42")


class TestShapeFacets:
    def test_none(self) -> None:
        assert shape_facets(None) == {}

    def test_empty_response(self) -> None:
        assert shape_facets(FacetResponse()) == {}

    def test_fields_and_queries(self) -> None:
        facets = FacetResponse(
            fields=[FacetField(name="label", value_count_map={"docs": 3, "wiki": 1})],
            query_count_map={"filetype:pdf": 2},
        )
        assert shape_facets(facets) == {
            "facet_field": [
                {
                    "name": "label",
                    "result": [{"value": "docs", "count": 3}, {"value": "wiki", "count": 1}],
                }
            ],
            "facet_query": [{"value": "filetype:pdf", "count": 2}],
        }


class TestFormatSearchResult:
    def test_payload(self) -> None:
        result = SearchResult(
            query="report",
            query_id="q1",
            documents=[
                {"title": "A", "url": "http://a", "content": "alpha", "score": 2.0},
                {"title": HighlightFragment("B"), "url": "http://b", "content": "beta"},
            ],
            pagination=Pagination(page_size=2, record_count=10, page_count=5, next_page=True),
        )
        payload = format_search_result(result, 1000)

        assert [b["type"] for b in payload["content"]] == ["text", "text"]
        assert "**Title**: <em>B</em>" in payload["content"][1]["text"]
        summary = payload["structuredContent"]
        assert summary["q"] == "report"
        assert summary["record_count"] == 10
        assert summary["next_page"] is True
        assert "facet_field" not in summary
