"""Exceptions raised by the symbol search compiler and its service layer."""

from __future__ import annotations


class SymbolSearchError(Exception):
    """Base class for symbol search failures."""


class InvalidQuery(SymbolSearchError, ValueError):
    """Raised when a raw query cannot be compiled into any search strategy."""

    def __init__(self, query: str, reason: str) -> None:
        self.query = query
        self.reason = reason
        super().__init__(f"invalid symbol search query {query!r}: {reason}")


class InvalidLimit(SymbolSearchError, ValueError):
    """Raised when the requested result count is not a positive integer."""

    def __init__(self, limit: object) -> None:
        self.limit = limit
        super().__init__(f"limit must be a positive integer, got {limit!r}")


class CorpusUnavailable(SymbolSearchError, RuntimeError):
    """Raised when the corpus collaborator fails to evaluate a compiled query."""
