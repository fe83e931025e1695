"""Symbol search orchestration layer.

Compiles the raw query, makes exactly one round trip to the corpus
collaborator, and ranks what comes back. Retries and cancellation belong to
the caller.
"""

import logging
import time

from symbol_search.adapters.corpus import AbstractSymbolCorpus
from symbol_search.config import Settings, get_settings
from symbol_search.domain.model import SearchResponse
from symbol_search.errors import CorpusUnavailable
from symbol_search.observability import (
    SEARCH_COUNT,
    SEARCH_ERRORS,
    SEARCH_LATENCY,
    bind_search_context,
    create_span,
    track_latency,
)
from symbol_search.search.assembler import assemble
from symbol_search.search.compiler import QueryDescription, compile_query, validate_limit


logger = logging.getLogger(__name__)


class SymbolSearchService:
    """High-level symbol search service.

    Stateless apart from its collaborator and settings, so one instance can
    serve any number of concurrent searches.
    """

    def __init__(self, corpus: AbstractSymbolCorpus, settings: Settings | None = None):
        """Initialize the service.

        Args:
            corpus: Collaborator that evaluates compiled queries
            settings: Ranking and limit configuration; defaults to environment settings
        """
        self.corpus = corpus
        self.settings = settings or get_settings()

    def compile(self, raw_query: str, limit: int | None = None) -> QueryDescription:
        """Compile ``raw_query`` using configured ranking and limit policy.

        A missing limit falls back to ``default_limit``; larger limits are
        clamped to ``max_limit``.

        Raises:
            InvalidLimit: if ``limit`` is given and is not a positive integer
            InvalidQuery: if ``raw_query`` cannot be classified
        """
        if limit is None:
            limit = self.settings.default_limit
        validate_limit(limit)

        capped = self.settings.cap_limit(limit)
        if capped != limit:
            logger.debug("Clamped limit %d to %d", limit, capped)

        return compile_query(
            raw_query,
            capped,
            rank_weights=self.settings.rank_weights,
            score_floor=self.settings.score_floor,
            text_search_configuration=self.settings.text_search_configuration,
        )

    async def search(self, raw_query: str, limit: int | None = None) -> SearchResponse:
        """Run a ranked symbol search.

        Args:
            raw_query: User's search text
            limit: Maximum number of results; defaults to ``default_limit``

        Returns:
            SearchResponse with results in rank order

        Raises:
            InvalidQuery: if the query is blank or malformed (no I/O happens)
            InvalidLimit: if the limit is not a positive integer (no I/O happens)
            CorpusUnavailable: if the corpus collaborator fails
        """
        try:
            description = self.compile(raw_query, limit)
        except ValueError as exc:
            SEARCH_ERRORS.labels(error_type=type(exc).__name__).inc()
            raise

        strategy = description.strategy.value
        bind_search_context(strategy, description.raw_query)
        start = time.perf_counter()

        with (
            create_span(
                "symbol_search.search",
                attributes={
                    "search.strategy": strategy,
                    "search.limit": description.limit,
                },
            ) as span,
            track_latency(SEARCH_LATENCY, strategy=strategy),
        ):
            try:
                rows = await self.corpus.fetch(description)
            except CorpusUnavailable:
                self._record_failure(strategy, "CorpusUnavailable")
                raise
            except Exception as exc:
                self._record_failure(strategy, type(exc).__name__)
                logger.error("Corpus evaluation failed for %s query: %s", strategy, exc, exc_info=True)
                raise CorpusUnavailable(f"corpus evaluation failed: {exc}") from exc

            try:
                results = assemble(description, rows)
            except ValueError as exc:
                self._record_failure(strategy, type(exc).__name__)
                logger.error("Corpus returned unrankable rows for %s query: %s", strategy, exc)
                raise CorpusUnavailable(f"corpus returned unrankable rows: {exc}") from exc

            span.set_attribute("search.candidates", len(rows))
            span.set_attribute("search.results", len(results))

        SEARCH_COUNT.labels(strategy=strategy, status="ok").inc()
        elapsed = time.perf_counter() - start
        logger.debug(
            "Symbol search returned %d of %d candidates in %.3fs",
            len(results),
            len(rows),
            elapsed,
        )
        return SearchResponse(
            query=description.raw_query,
            strategy=description.strategy,
            results=results,
            search_time=elapsed,
        )

    def _record_failure(self, strategy: str, error_type: str) -> None:
        SEARCH_COUNT.labels(strategy=strategy, status="error").inc()
        SEARCH_ERRORS.labels(error_type=error_type).inc()
