"""In-process corpus collaborator.

Evaluates predicate trees directly against precomputed token sets. It stands
in for a text-search database in tests and local tooling, so its token
derivation helpers apply the same underscore normalization as the query side.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import logging
from types import MappingProxyType

from symbol_search.adapters.corpus import AbstractSymbolCorpus
from symbol_search.domain.model import CorpusRow, Package, Symbol
from symbol_search.search.compiler import QueryDescription
from symbol_search.search.predicates import PACKAGE_NAME_FIELD, PACKAGE_PATH_FIELD
from symbol_search.search.scoring import RankedPopularityScore, lexical_rank
from symbol_search.search.tokens import to_lexeme


logger = logging.getLogger(__name__)

_TIER_STRENGTH = {"A": 3, "B": 2, "C": 1, "D": 0}


def derive_name_tokens(name: str) -> frozenset[str]:
    """Name lexemes for a symbol: the full name plus each dotted part.

    ``Client.Do`` yields ``{"client.do", "client", "do"}``.
    """
    lexeme = to_lexeme(name)
    tokens = {lexeme}
    parts = [part for part in lexeme.split(".") if part]
    if len(parts) > 1:
        tokens.update(parts)
    return frozenset(tokens)


def _keep_strongest(tokens: dict[str, str], lexeme: str, tier: str) -> None:
    if not lexeme:
        return
    current = tokens.get(lexeme)
    if current is None or _TIER_STRENGTH[tier] > _TIER_STRENGTH[current]:
        tokens[lexeme] = tier


def derive_path_tokens(path: str) -> Mapping[str, str]:
    """Tiered path lexemes for a package import path.

    The full path and its final element rank highest (A), trailing sub-paths
    next (B), other elements after that (C), and dot/hyphen fragments of
    elements last (D).
    """
    lexeme = to_lexeme(path)
    elements = [element for element in lexeme.split("/") if element]
    tokens: dict[str, str] = {}
    _keep_strongest(tokens, lexeme, "A")
    if elements:
        _keep_strongest(tokens, elements[-1], "A")
    for start in range(1, len(elements) - 1):
        _keep_strongest(tokens, "/".join(elements[start:]), "B")
    for element in elements:
        _keep_strongest(tokens, element, "C")
        for fragment in element.replace("-", ".").split("."):
            _keep_strongest(tokens, fragment, "D")
    return MappingProxyType(tokens)


@dataclass(frozen=True)
class SymbolIndexEntry:
    """One (symbol, package, build context) row with its token sets."""

    symbol: Symbol
    package: Package
    name_lexemes: frozenset[str]
    path_tokens: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def build(cls, symbol: Symbol, package: Package) -> SymbolIndexEntry:
        return cls(symbol, package, derive_name_tokens(symbol.name), derive_path_tokens(package.path))

    @property
    def path_lexemes(self) -> frozenset[str]:
        return frozenset(self.path_tokens)

    def field_value(self, field: str) -> str:
        if field == PACKAGE_NAME_FIELD:
            return self.package.name
        if field == PACKAGE_PATH_FIELD:
            return self.package.path
        raise KeyError(field)


class InMemorySymbolCorpus(AbstractSymbolCorpus):
    """Corpus collaborator backed by a list of index entries."""

    def __init__(self, entries: Iterable[SymbolIndexEntry] = ()) -> None:
        self._entries: tuple[SymbolIndexEntry, ...] = tuple(entries)

    @classmethod
    def from_symbols(cls, pairs: Iterable[tuple[Symbol, Package]]) -> InMemorySymbolCorpus:
        return cls(SymbolIndexEntry.build(symbol, package) for symbol, package in pairs)

    def __len__(self) -> int:
        return len(self._entries)

    async def fetch(self, description: QueryDescription) -> list[CorpusRow]:
        score = description.score
        rows: list[CorpusRow] = []
        for entry in self._entries:
            if not description.predicate.matches(entry):
                continue
            rank = None
            if isinstance(score, RankedPopularityScore):
                rank = lexical_rank(score.weights, entry.path_tokens, score.query.terms)
            rows.append(CorpusRow(symbol=entry.symbol, package=entry.package, lexical_rank=rank))
        logger.debug("In-memory corpus matched %d of %d entries", len(rows), len(self._entries))
        return rows
