"""Tests for search argument normalization."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from fess_mcp.config import McpSettings
from fess_mcp.search.params import SearchInvocationParams, build_search_params, parse_int


@pytest.fixture
def paging() -> McpSettings:
    return McpSettings(default_start=0, default_page_size=20, max_page_size=100)


class TestPageSize:
    @pytest.mark.parametrize("num", [0, -5, "abc", "", None, 101, "1000", True])
    def test_out_of_range_falls_back_to_max(self, paging: McpSettings, num: Any) -> None:
        assert build_search_params({"num": num}, paging).page_size == 100

    def test_absent_falls_back_to_max(self, paging: McpSettings) -> None:
        assert build_search_params({}, paging).page_size == 100

    @pytest.mark.parametrize(("num", "expected"), [(1, 1), ("20", 20), (100, 100), (7.9, 7)])
    def test_in_range_passes_through(self, paging: McpSettings, num: Any, expected: int) -> None:
        assert build_search_params({"num": num}, paging).page_size == expected


class TestStartPosition:
    @pytest.mark.parametrize("start", [-1, -10, "x", "1.5", None])
    def test_invalid_falls_back_to_default(self, start: Any) -> None:
        settings = McpSettings(default_start=3)
        assert build_search_params({"start": start}, settings).start == 3

    @pytest.mark.parametrize(("start", "expected"), [(0, 0), ("15", 15), (200, 200)])
    def test_non_negative_passes_through(self, paging: McpSettings, start: Any, expected: int) -> None:
        assert build_search_params({"start": start}, paging).start == expected

    def test_fallback_is_default_not_max(self) -> None:
        settings = McpSettings(default_start=0, max_page_size=50)
        params = build_search_params({"start": "bad", "num": "bad"}, settings)
        assert params.start == 0
        assert params.page_size == 50


class TestOffset:
    def test_default_zero(self, paging: McpSettings) -> None:
        assert build_search_params({}, paging).offset == 0
        assert build_search_params({"offset": "nope"}, paging).offset == 0

    def test_parsed(self, paging: McpSettings) -> None:
        assert build_search_params({"offset": "5"}, paging).offset == 5
        assert build_search_params({"offset": -2}, paging).offset == -2


class TestQueryAndStrings:
    def test_query_cast_to_string(self, paging: McpSettings) -> None:
        assert build_search_params({"q": 123}, paging).query == "123"

    def test_absent_query_is_none(self, paging: McpSettings) -> None:
        assert build_search_params({}, paging).query is None

    def test_query_not_trimmed(self, paging: McpSettings) -> None:
        assert build_search_params({"q": "  spaced  "}, paging).query == "  spaced  "

    def test_sort_and_hash(self, paging: McpSettings) -> None:
        params = build_search_params({"sort": "score.desc", "sdh": "abc123"}, paging)
        assert params.sort == "score.desc"
        assert params.similar_doc_hash == "abc123"


class TestLanguages:
    def test_absent(self, paging: McpSettings) -> None:
        assert build_search_params({}, paging).languages == []

    def test_single_string(self, paging: McpSettings) -> None:
        assert build_search_params({"lang": "ja"}, paging).languages == ["ja"]

    def test_list(self, paging: McpSettings) -> None:
        assert build_search_params({"lang": ["en", "ja"]}, paging).languages == ["en", "ja"]


class TestFieldsAndConditions:
    def test_absent(self, paging: McpSettings) -> None:
        params = build_search_params({}, paging)
        assert params.fields == {}
        assert params.conditions == {}

    def test_nested_mappings(self, paging: McpSettings) -> None:
        params = build_search_params(
            {"fields": {"label": ["docs", "wiki"]}, "as": {"filetype": ["pdf"], "occt": [1]}},
            paging,
        )
        assert params.fields == {"label": ["docs", "wiki"]}
        assert params.conditions == {"filetype": ["pdf"], "occt": ["1"]}

    def test_flat_aliases_merge(self, paging: McpSettings) -> None:
        params = build_search_params(
            {"fields": {"label": ["docs"]}, "fields.label": "wiki", "as.filetype": ["pdf"]},
            paging,
        )
        assert params.fields == {"label": ["docs", "wiki"]}
        assert params.conditions == {"filetype": ["pdf"]}


class TestExtraQueries:
    def test_absent_is_none(self, paging: McpSettings) -> None:
        assert build_search_params({}, paging).extra_queries is None

    def test_empty_list_preserved(self, paging: McpSettings) -> None:
        assert build_search_params({"ex_q": []}, paging).extra_queries == []

    def test_values(self, paging: McpSettings) -> None:
        assert build_search_params({"ex_q": ["a", "b"]}, paging).extra_queries == ["a", "b"]


class TestParseInt:
    @pytest.mark.parametrize(("value", "expected"), [(5, 5), ("42", 42), (3.7, 3), ("-1", -1)])
    def test_valid(self, value: Any, expected: int) -> None:
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "1.5", True, float("nan"), float("inf"), [1]])
    def test_invalid(self, value: Any) -> None:
        assert parse_int(value) is None


def test_params_are_frozen(paging: McpSettings) -> None:
    params = build_search_params({"q": "x"}, paging)
    assert isinstance(params, SearchInvocationParams)
    with pytest.raises(ValidationError):
        params.query = "y"  # type: ignore[misc]
