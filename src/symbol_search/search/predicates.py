"""Predicate tree for symbol search.

A compiled query filters (symbol, package) rows with a small tree of AND/OR
nodes over three atomic matches. The tree only says *what* must hold; the
corpus collaborator decides how to evaluate it, either natively (see
``symbol_search.search.sql``) or through :meth:`Predicate.matches`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from symbol_search.search.strategy import ClassifiedQuery, SearchStrategy
from symbol_search.search.tokens import normalize, to_lexeme


class TokenOperator(str, Enum):
    SINGLE = "single"
    OR = "or"


class TokenSource(str, Enum):
    """Which slice of the raw query a token query was built from."""

    QUERY = "query"
    REST = "rest"
    WORDS = "words"


class TokenSubject(Protocol):
    """What an evaluator must expose for predicates to run in-process."""

    @property
    def name_lexemes(self) -> frozenset[str]: ...

    @property
    def path_lexemes(self) -> frozenset[str]: ...

    def field_value(self, field: str) -> str: ...


@dataclass(frozen=True)
class TokenQuery:
    """Normalized match tokens, OR-combined when there is more than one."""

    terms: tuple[str, ...]
    source: TokenSource = TokenSource.QUERY

    @property
    def operator(self) -> TokenOperator:
        return TokenOperator.OR if len(self.terms) > 1 else TokenOperator.SINGLE

    def lexemes(self) -> frozenset[str]:
        return frozenset(to_lexeme(term) for term in self.terms)

    def intersects(self, tokens: frozenset[str]) -> bool:
        return not self.lexemes().isdisjoint(tokens)

    def to_dict(self) -> dict[str, Any]:
        return {"terms": list(self.terms), "operator": self.operator.value, "source": self.source.value}


class Predicate:
    """Base class for predicate tree nodes."""

    def matches(self, subject: TokenSubject) -> bool:  # pragma: no cover - interface definition
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:  # pragma: no cover - interface definition
        raise NotImplementedError


@dataclass(frozen=True)
class NameTokenMatch(Predicate):
    """True when the symbol's name-token set overlaps the query tokens."""

    query: TokenQuery

    def matches(self, subject: TokenSubject) -> bool:
        return self.query.intersects(subject.name_lexemes)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "name_tokens", "query": self.query.to_dict()}


@dataclass(frozen=True)
class PathTokenMatch(Predicate):
    """True when the package's path-token set overlaps the query tokens."""

    query: TokenQuery

    def matches(self, subject: TokenSubject) -> bool:
        return self.query.intersects(subject.path_lexemes)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "path_tokens", "query": self.query.to_dict()}


@dataclass(frozen=True)
class ExactFieldMatch(Predicate):
    """Case-sensitive equality between a package field and a literal."""

    field: str
    literal: str

    def matches(self, subject: TokenSubject) -> bool:
        return subject.field_value(self.field) == self.literal

    def to_dict(self) -> dict[str, Any]:
        return {"op": "equals", "field": self.field, "literal": self.literal}


@dataclass(frozen=True)
class AllOf(Predicate):
    children: tuple[Predicate, ...]

    def matches(self, subject: TokenSubject) -> bool:
        return all(child.matches(subject) for child in self.children)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "and", "children": [child.to_dict() for child in self.children]}


@dataclass(frozen=True)
class AnyOf(Predicate):
    children: tuple[Predicate, ...]

    def matches(self, subject: TokenSubject) -> bool:
        return any(child.matches(subject) for child in self.children)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "or", "children": [child.to_dict() for child in self.children]}


PACKAGE_NAME_FIELD = "package_name"
PACKAGE_PATH_FIELD = "package_path"


def token_query_for(classified: ClassifiedQuery) -> TokenQuery:
    """Return the normalized match tokens a classified query searches with."""
    if classified.strategy is SearchStrategy.QUALIFIED_REFERENCE:
        return TokenQuery((normalize(classified.rest),), TokenSource.REST)
    if classified.strategy is SearchStrategy.MULTI_WORD:
        return TokenQuery(tuple(normalize(word) for word in classified.words), TokenSource.WORDS)
    return TokenQuery((normalize(classified.raw),), TokenSource.QUERY)


def _bare_symbol(classified: ClassifiedQuery) -> Predicate:
    return NameTokenMatch(token_query_for(classified))


def _qualified_reference(classified: ClassifiedQuery) -> Predicate:
    # The head is compared verbatim; only the symbol part is a match token.
    package_head = AnyOf(
        (
            ExactFieldMatch(PACKAGE_NAME_FIELD, classified.head),
            ExactFieldMatch(PACKAGE_PATH_FIELD, classified.head),
        )
    )
    return AllOf((package_head, NameTokenMatch(token_query_for(classified))))


def _multi_word(classified: ClassifiedQuery) -> Predicate:
    # One word may satisfy the symbol side and a different word the package side.
    words = token_query_for(classified)
    return AllOf((NameTokenMatch(words), PathTokenMatch(words)))


_BUILDERS: dict[SearchStrategy, Callable[[ClassifiedQuery], Predicate]] = {
    SearchStrategy.BARE_SYMBOL: _bare_symbol,
    SearchStrategy.QUALIFIED_REFERENCE: _qualified_reference,
    SearchStrategy.MULTI_WORD: _multi_word,
}


def build_predicate(classified: ClassifiedQuery) -> Predicate:
    """Build the filter predicate for a classified query."""
    return _BUILDERS[classified.strategy](classified)
