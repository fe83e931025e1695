"""Compile raw symbol search input into an executable query description.

Each strategy has one precompiled :class:`QueryPlan`. Plans are pure values
built on first use and memoized, so choosing a strategy at call time is a
lookup rather than string assembly. Binding a plan to a classified query
yields the :class:`QueryDescription` handed to the corpus collaborator.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache
import logging
from typing import Any

from symbol_search.errors import InvalidLimit
from symbol_search.search.predicates import Predicate, build_predicate
from symbol_search.search.scoring import DEFAULT_RANK_WEIGHTS, ScoreExpression, build_score, validate_rank_weights
from symbol_search.search.strategy import ClassifiedQuery, SearchStrategy, classify_query
from symbol_search.search.tokens import TEXT_SEARCH_CONFIGURATION


logger = logging.getLogger(__name__)

DEFAULT_SCORE_FLOOR = 0.1

# Sort keys applied after the score floor, most significant first.
RESULT_ORDERING: tuple[str, ...] = (
    "score DESC",
    "commit_time DESC",
    "symbol_name ASC",
    "package_path ASC",
)


def validate_limit(limit: object) -> int:
    # bool is an int subclass but never a meaningful result count.
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidLimit(limit)
    return limit


@dataclass(frozen=True)
class QueryDescription:
    """Strategy-tagged predicate tree and score expression for one search.

    ``parameters`` mirrors the positional parameters a SQL collaborator binds:
    the trimmed query text and the result limit.
    """

    strategy: SearchStrategy
    predicate: Predicate
    score: ScoreExpression
    limit: int
    raw_query: str
    score_floor: float = DEFAULT_SCORE_FLOOR
    text_search_configuration: str = TEXT_SEARCH_CONFIGURATION
    ordering: tuple[str, ...] = RESULT_ORDERING

    @property
    def parameters(self) -> tuple[str, int]:
        if self.strategy is SearchStrategy.MULTI_WORD:
            # Collapse whitespace runs so a single-space split sees every word.
            return " ".join(self.raw_query.split()), self.limit
        return self.raw_query, self.limit

    @property
    def needs_lexical_rank(self) -> bool:
        return self.strategy is SearchStrategy.MULTI_WORD

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy.value,
            "raw_query": self.raw_query,
            "limit": self.limit,
            "score_floor": self.score_floor,
            "text_search_configuration": self.text_search_configuration,
            "predicate": self.predicate.to_dict(),
            "score": self.score.to_dict(),
            "ordering": list(self.ordering),
        }


@dataclass(frozen=True)
class QueryPlan:
    """Precompiled shape of one search strategy."""

    strategy: SearchStrategy
    rank_weights: tuple[float, float, float, float] = DEFAULT_RANK_WEIGHTS
    score_floor: float = DEFAULT_SCORE_FLOOR
    text_search_configuration: str = TEXT_SEARCH_CONFIGURATION

    def bind(self, classified: ClassifiedQuery, limit: int) -> QueryDescription:
        """Attach a classified query and limit to this plan.

        Raises:
            ValueError: if ``classified`` belongs to a different strategy.
            InvalidLimit: if ``limit`` is not a positive integer.
        """
        if classified.strategy is not self.strategy:
            raise ValueError(f"{self.strategy.value} plan cannot bind a {classified.strategy.value} query")
        return QueryDescription(
            strategy=self.strategy,
            predicate=build_predicate(classified),
            score=build_score(classified, self.rank_weights),
            limit=validate_limit(limit),
            raw_query=classified.raw,
            score_floor=self.score_floor,
            text_search_configuration=self.text_search_configuration,
        )


def query_plan(
    strategy: SearchStrategy,
    rank_weights: Sequence[float] = DEFAULT_RANK_WEIGHTS,
    score_floor: float = DEFAULT_SCORE_FLOOR,
    text_search_configuration: str = TEXT_SEARCH_CONFIGURATION,
) -> QueryPlan:
    """Return the memoized plan for ``strategy``.

    ``rank_weights`` may be any sequence; it is frozen to a tuple so that
    equal weights share one cached plan.
    """
    return _cached_query_plan(strategy, tuple(rank_weights), score_floor, text_search_configuration)


@lru_cache(maxsize=32)
def _cached_query_plan(
    strategy: SearchStrategy,
    rank_weights: tuple[float, ...],
    score_floor: float,
    text_search_configuration: str,
) -> QueryPlan:
    return QueryPlan(
        strategy=strategy,
        rank_weights=validate_rank_weights(rank_weights),
        score_floor=score_floor,
        text_search_configuration=text_search_configuration,
    )


def compile_query(
    raw_query: str,
    limit: int,
    *,
    rank_weights: Sequence[float] = DEFAULT_RANK_WEIGHTS,
    score_floor: float = DEFAULT_SCORE_FLOOR,
    text_search_configuration: str = TEXT_SEARCH_CONFIGURATION,
) -> QueryDescription:
    """Compile ``raw_query`` into a query description returning at most ``limit`` rows.

    Raises:
        InvalidLimit: if ``limit`` is not a positive integer.
        InvalidQuery: if ``raw_query`` is blank or a malformed qualified reference.
    """
    validate_limit(limit)
    classified = classify_query(raw_query)
    plan = query_plan(classified.strategy, rank_weights, score_floor, text_search_configuration)
    description = plan.bind(classified, limit)
    logger.debug("Compiled %r as %s (limit=%d)", classified.raw, classified.strategy.value, limit)
    return description
