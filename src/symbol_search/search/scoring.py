"""Relevance scores for symbol search rows.

One-word queries rank purely by popularity. Multi-word queries multiply a
lexical rank of the package path by the same popularity weight, so a package
whose path shares nothing with the query scores zero however popular it is.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Any

from symbol_search.search.predicates import TokenQuery, token_query_for
from symbol_search.search.strategy import ClassifiedQuery, SearchStrategy
from symbol_search.search.tokens import to_lexeme


if TYPE_CHECKING:
    from symbol_search.domain.model import CorpusRow


# Weights for tiers D, C, B and A, in the order ts_rank expects them.
DEFAULT_RANK_WEIGHTS: tuple[float, float, float, float] = (0.1, 0.2, 1.0, 1.0)
RANK_TIERS: tuple[str, str, str, str] = ("D", "C", "B", "A")

# ts_rank divides OR-query contributions by pi**2 / 6.
_OR_RANK_NORMALIZER = 1.64493406685


def popularity_weight(imported_by_count: int) -> float:
    """Return ``ln(e + imported_by_count)``; 0 importers maps to exactly 1."""
    if imported_by_count < 0:
        raise ValueError(f"imported_by_count must be non-negative, got {imported_by_count}")
    return math.log(math.e + imported_by_count)


def validate_rank_weights(weights: Iterable[float]) -> tuple[float, float, float, float]:
    values = tuple(float(weight) for weight in weights)
    if len(values) != len(RANK_TIERS):
        raise ValueError(f"rank weights need exactly {len(RANK_TIERS)} values, got {len(values)}")
    if any(weight < 0 for weight in values):
        raise ValueError("rank weights must be non-negative")
    return values  # type: ignore[return-value]


def lexical_rank(
    weights: Sequence[float],
    path_tokens: Mapping[str, str],
    query_terms: Iterable[str],
) -> float:
    """Rank a tiered path-token set against OR-combined query terms.

    Args:
        weights: Tier weights ordered D, C, B, A
        path_tokens: Folded path lexeme -> tier label ("A" is most important)
        query_terms: Query terms; they are normalized and folded here

    Returns:
        Mean tier weight of the matched terms, scaled by the ts_rank OR
        normalizer. Zero when nothing matches.
    """
    tier_weight = dict(zip(RANK_TIERS, validate_rank_weights(weights), strict=True))
    lexemes = {to_lexeme(term) for term in query_terms}
    if not lexemes:
        return 0.0

    total = 0.0
    for lexeme in lexemes:
        tier = path_tokens.get(lexeme)
        if tier is None:
            continue
        total += tier_weight[tier] / _OR_RANK_NORMALIZER
    return total / len(lexemes)


@dataclass(frozen=True)
class PopularityScore:
    """Score used by one-word strategies."""

    def evaluate(self, row: CorpusRow) -> float:
        return popularity_weight(row.package.imported_by_count)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "popularity"}


@dataclass(frozen=True)
class RankedPopularityScore:
    """Lexical rank of the package path times the popularity weight."""

    query: TokenQuery
    weights: tuple[float, float, float, float] = DEFAULT_RANK_WEIGHTS

    def evaluate(self, row: CorpusRow) -> float:
        if row.lexical_rank is None:
            raise ValueError(
                f"row for {row.package.path}.{row.symbol.name} has no lexical rank; "
                "multi-word queries need the corpus to rank path tokens"
            )
        return row.lexical_rank * popularity_weight(row.package.imported_by_count)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "ranked_popularity", "weights": list(self.weights), "query": self.query.to_dict()}


ScoreExpression = PopularityScore | RankedPopularityScore


def build_score(
    classified: ClassifiedQuery,
    weights: tuple[float, float, float, float] = DEFAULT_RANK_WEIGHTS,
) -> ScoreExpression:
    if classified.strategy is SearchStrategy.MULTI_WORD:
        return RankedPopularityScore(token_query_for(classified), weights)
    return PopularityScore()
