"""Corpus collaborators that evaluate compiled symbol search queries."""

from symbol_search.adapters.corpus import AbstractSymbolCorpus
from symbol_search.adapters.memory_corpus import (
    InMemorySymbolCorpus,
    SymbolIndexEntry,
    derive_name_tokens,
    derive_path_tokens,
)


__all__ = [
    "AbstractSymbolCorpus",
    "InMemorySymbolCorpus",
    "SymbolIndexEntry",
    "derive_name_tokens",
    "derive_path_tokens",
]
