"""Unit tests for relevance scoring."""

import math

import pytest

from symbol_search.domain.model import CorpusRow, Package, Symbol
from symbol_search.search.predicates import TokenQuery
from symbol_search.search.scoring import (
    DEFAULT_RANK_WEIGHTS,
    PopularityScore,
    RankedPopularityScore,
    build_score,
    lexical_rank,
    popularity_weight,
    validate_rank_weights,
)
from symbol_search.search.strategy import classify_query


OR_NORMALIZER = 1.64493406685


def _row(imported_by_count: int, lexical_rank: float | None = None) -> CorpusRow:
    package = Package(
        path="net/http",
        module_path="std",
        version="v1.21.0",
        name="http",
        imported_by_count=imported_by_count,
    )
    return CorpusRow(symbol=Symbol(name="Server", kind="Type"), package=package, lexical_rank=lexical_rank)


class TestPopularityWeight:
    def test_zero_importers_maps_to_one(self):
        assert popularity_weight(0) == 1.0

    def test_matches_log_formula(self):
        assert popularity_weight(1000) == pytest.approx(math.log(math.e + 1000))

    def test_strictly_increasing(self):
        weights = [popularity_weight(n) for n in (0, 1, 2, 5, 50, 5000, 10**9)]

        assert all(a < b for a, b in zip(weights, weights[1:]))

    def test_sub_linear(self):
        assert popularity_weight(10_000) < 10 * popularity_weight(1_000)

    def test_rejects_negative_counts(self):
        with pytest.raises(ValueError, match="non-negative"):
            popularity_weight(-1)


class TestLexicalRank:
    def test_tier_a_match(self):
        rank = lexical_rank(DEFAULT_RANK_WEIGHTS, {"http": "A", "net": "C"}, ["http"])

        assert rank == pytest.approx(1.0 / OR_NORMALIZER)

    def test_averages_over_query_terms(self):
        rank = lexical_rank(DEFAULT_RANK_WEIGHTS, {"http": "A"}, ["http", "server"])

        assert rank == pytest.approx(1.0 / OR_NORMALIZER / 2)

    def test_lower_tiers_weigh_less(self):
        tokens = {"github": "D", "acme": "C", "acme/tools": "B", "tools": "A"}

        ranks = [lexical_rank(DEFAULT_RANK_WEIGHTS, tokens, [term]) for term in ("github", "acme", "acme/tools")]

        assert ranks == pytest.approx([0.1 / OR_NORMALIZER, 0.2 / OR_NORMALIZER, 1.0 / OR_NORMALIZER])

    def test_no_overlap_ranks_zero(self):
        assert lexical_rank(DEFAULT_RANK_WEIGHTS, {"http": "A"}, ["json"]) == 0.0

    def test_terms_are_normalized_and_folded(self):
        assert lexical_rank(DEFAULT_RANK_WEIGHTS, {"x-y": "A"}, ["X_Y"]) == pytest.approx(1.0 / OR_NORMALIZER)

    def test_empty_query_ranks_zero(self):
        assert lexical_rank(DEFAULT_RANK_WEIGHTS, {"http": "A"}, []) == 0.0

    def test_rejects_wrong_weight_count(self):
        with pytest.raises(ValueError, match="exactly 4"):
            lexical_rank((1.0, 1.0), {"http": "A"}, ["http"])

    def test_rejects_negative_weights(self):
        with pytest.raises(ValueError, match="non-negative"):
            validate_rank_weights((0.1, -0.2, 1.0, 1.0))


class TestScoreExpressions:
    def test_popularity_score_ignores_lexical_rank(self):
        assert PopularityScore().evaluate(_row(50, lexical_rank=0.0)) == pytest.approx(popularity_weight(50))

    def test_ranked_score_multiplies(self):
        score = RankedPopularityScore(TokenQuery(("http", "server")))

        assert score.evaluate(_row(50, lexical_rank=0.3)) == pytest.approx(0.3 * popularity_weight(50))

    def test_zero_rank_zeroes_popular_rows(self):
        score = RankedPopularityScore(TokenQuery(("http", "server")))

        assert score.evaluate(_row(10**6, lexical_rank=0.0)) == 0.0

    def test_ranked_score_requires_rank(self):
        score = RankedPopularityScore(TokenQuery(("http", "server")))

        with pytest.raises(ValueError, match="lexical rank"):
            score.evaluate(_row(5))

    def test_monotonic_in_popularity_with_fixed_rank(self):
        score = RankedPopularityScore(TokenQuery(("http", "server")))

        assert score.evaluate(_row(5, 0.3)) < score.evaluate(_row(50, 0.3))

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("Marshal", PopularityScore), ("json.Marshal", PopularityScore), ("http server", RankedPopularityScore)],
    )
    def test_build_score_per_strategy(self, raw, expected):
        assert isinstance(build_score(classify_query(raw)), expected)
