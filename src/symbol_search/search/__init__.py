"""Query compilation: tokens, strategies, predicates, scoring and assembly."""

from symbol_search.search.assembler import assemble, result_sort_key
from symbol_search.search.compiler import QueryDescription, QueryPlan, compile_query, query_plan
from symbol_search.search.predicates import (
    AllOf,
    AnyOf,
    ExactFieldMatch,
    NameTokenMatch,
    PathTokenMatch,
    Predicate,
    TokenQuery,
)
from symbol_search.search.scoring import (
    DEFAULT_RANK_WEIGHTS,
    PopularityScore,
    RankedPopularityScore,
    lexical_rank,
    popularity_weight,
)
from symbol_search.search.strategy import ClassifiedQuery, SearchStrategy, classify_query
from symbol_search.search.tokens import normalize, split_first_dot, split_words, to_lexeme


__all__ = [
    "DEFAULT_RANK_WEIGHTS",
    "AllOf",
    "AnyOf",
    "ClassifiedQuery",
    "ExactFieldMatch",
    "NameTokenMatch",
    "PathTokenMatch",
    "PopularityScore",
    "Predicate",
    "QueryDescription",
    "QueryPlan",
    "RankedPopularityScore",
    "SearchStrategy",
    "TokenQuery",
    "assemble",
    "classify_query",
    "compile_query",
    "lexical_rank",
    "normalize",
    "popularity_weight",
    "query_plan",
    "result_sort_key",
    "split_first_dot",
    "split_words",
    "to_lexeme",
]
