"""Unit tests for search strategy classification."""

import pytest

from symbol_search.errors import InvalidQuery
from symbol_search.search.strategy import SearchStrategy, classify_query


class TestClassifyQuery:
    @pytest.mark.parametrize("raw", ["Marshal", "A_B", "  ReadAll  ", "x"])
    def test_single_token_without_dot_is_bare_symbol(self, raw):
        classified = classify_query(raw)

        assert classified.strategy is SearchStrategy.BARE_SYMBOL
        assert classified.raw == raw.strip()
        assert classified.words == (raw.strip(),)

    @pytest.mark.parametrize(
        ("raw", "head", "rest"),
        [
            ("json.Marshal", "json", "Marshal"),
            ("http.Server.ListenAndServe", "http", "Server.ListenAndServe"),
            ("github.com/foo/bar.Baz", "github", "com/foo/bar.Baz"),
            ("my_pkg.Do_It", "my_pkg", "Do_It"),
        ],
    )
    def test_dotted_single_token_is_qualified_reference(self, raw, head, rest):
        classified = classify_query(raw)

        assert classified.strategy is SearchStrategy.QUALIFIED_REFERENCE
        assert classified.head == head
        assert classified.rest == rest

    @pytest.mark.parametrize(
        ("raw", "words"),
        [
            ("http server", ("http", "server")),
            ("  http \t\n server  mux", ("http", "server", "mux")),
            ("json.Marshal indent", ("json.Marshal", "indent")),
        ],
    )
    def test_whitespace_selects_multi_word(self, raw, words):
        classified = classify_query(raw)

        assert classified.strategy is SearchStrategy.MULTI_WORD
        assert classified.words == words
        assert classified.head == ""

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_blank_query_is_invalid(self, raw):
        with pytest.raises(InvalidQuery, match="empty"):
            classify_query(raw)

    @pytest.mark.parametrize("raw", [".Marshal", "json.", "."])
    def test_qualified_reference_needs_both_sides(self, raw):
        with pytest.raises(InvalidQuery) as excinfo:
            classify_query(raw)

        assert excinfo.value.query == raw
        assert isinstance(excinfo.value, ValueError)

    def test_strategy_values_are_stable(self):
        assert {strategy.value for strategy in SearchStrategy} == {
            "bare_symbol",
            "qualified_reference",
            "multi_word",
        }
