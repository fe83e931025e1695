"""Domain models for symbol search."""

from symbol_search.domain.model import (
    BuildContext,
    CorpusRow,
    Package,
    SearchResponse,
    Symbol,
    SymbolSearchResult,
)


__all__ = [
    "BuildContext",
    "CorpusRow",
    "Package",
    "SearchResponse",
    "Symbol",
    "SymbolSearchResult",
]
