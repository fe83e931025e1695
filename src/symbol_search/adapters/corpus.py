"""Corpus collaborator abstraction.

Defines the boundary between the query compiler and whatever store holds the
tokenized symbol corpus, following the Repository Pattern.
"""

from abc import ABC, abstractmethod

from symbol_search.domain.model import CorpusRow
from symbol_search.search.compiler import QueryDescription


class AbstractSymbolCorpus(ABC):
    """Evaluates compiled queries against a read-only snapshot of the corpus.

    Implementations perform token-set intersection and, for multi-word
    queries, path-token ranking. Scoring, thresholding and ordering stay with
    the caller.
    """

    @abstractmethod
    async def fetch(self, description: QueryDescription) -> list[CorpusRow]:
        """Return every row satisfying ``description.predicate``.

        Rows for multi-word descriptions must carry ``lexical_rank``. Any
        failure to reach or read the corpus should propagate as an exception;
        callers decide how to surface it.
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Optional hook for releasing collaborator resources."""

        return
