"""Classify raw search input into one of the three symbol search shapes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from symbol_search.errors import InvalidQuery
from symbol_search.search.tokens import split_first_dot, split_words


class SearchStrategy(str, Enum):
    """Closed set of query shapes the compiler knows how to build."""

    BARE_SYMBOL = "bare_symbol"
    QUALIFIED_REFERENCE = "qualified_reference"
    MULTI_WORD = "multi_word"


@dataclass(frozen=True)
class ClassifiedQuery:
    """Trimmed query text plus the pieces its strategy needs.

    ``head`` and ``rest`` are only set for qualified references; ``words`` is
    set for every strategy (a single element for the one-word shapes).
    """

    strategy: SearchStrategy
    raw: str
    head: str = ""
    rest: str = ""
    words: tuple[str, ...] = ()


def classify_query(raw_query: str) -> ClassifiedQuery:
    """Pick the search strategy for ``raw_query``.

    Whitespace wins over dots: ``encoding/json Marshal.Indent`` is multi-word.
    A dotted single word must have something on both sides of its first dot.

    Raises:
        InvalidQuery: if the input is blank or a dotted word has an empty side.
    """
    text = raw_query.strip()
    if not text:
        raise InvalidQuery(raw_query, "query is empty")

    words = split_words(text)
    if len(words) > 1:
        return ClassifiedQuery(SearchStrategy.MULTI_WORD, text, words=tuple(words))

    if "." in text:
        head, rest = split_first_dot(text)
        if not head:
            raise InvalidQuery(raw_query, "missing package before the first '.'")
        if not rest:
            raise InvalidQuery(raw_query, "missing symbol after the first '.'")
        return ClassifiedQuery(SearchStrategy.QUALIFIED_REFERENCE, text, head=head, rest=rest, words=(text,))

    return ClassifiedQuery(SearchStrategy.BARE_SYMBOL, text, words=(text,))
