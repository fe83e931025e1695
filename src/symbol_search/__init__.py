"""Ranked symbol search query compiler."""

from symbol_search.errors import CorpusUnavailable, InvalidLimit, InvalidQuery, SymbolSearchError
from symbol_search.search.compiler import QueryDescription, compile_query
from symbol_search.search.strategy import SearchStrategy


__version__ = "0.1.0"

__all__ = [
    "CorpusUnavailable",
    "InvalidLimit",
    "InvalidQuery",
    "QueryDescription",
    "SearchStrategy",
    "SymbolSearchError",
    "__version__",
    "compile_query",
]
