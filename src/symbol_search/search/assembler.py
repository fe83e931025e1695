"""Threshold, order and truncate scored symbol search rows."""

from __future__ import annotations

from collections.abc import Iterable
import logging

from symbol_search.domain.model import CorpusRow, SymbolSearchResult
from symbol_search.search.compiler import QueryDescription


logger = logging.getLogger(__name__)


def result_sort_key(result: SymbolSearchResult) -> tuple:
    """Total order: score desc, commit time desc, symbol name, package path.

    Results without a commit time sort after those with one. The build context
    breaks any remaining tie so per-variant rows keep a stable position.
    """
    commit_time = result.commit_time
    return (
        -result.score,
        commit_time is None,
        -commit_time.timestamp() if commit_time is not None else 0.0,
        result.symbol_name,
        result.package_path,
        result.goos,
        result.goarch,
    )


def assemble(description: QueryDescription, rows: Iterable[CorpusRow]) -> list[SymbolSearchResult]:
    """Score ``rows`` with the description's score expression and rank them.

    Rows scoring at or below the description's floor are dropped before
    sorting; at most ``description.limit`` results are returned.
    """
    kept: list[SymbolSearchResult] = []
    dropped = 0
    for row in rows:
        score = description.score.evaluate(row)
        if score <= description.score_floor:
            dropped += 1
            continue
        kept.append(SymbolSearchResult.from_row(row, score))

    kept.sort(key=result_sort_key)
    if dropped:
        logger.debug("Dropped %d rows at or below score floor %.2f", dropped, description.score_floor)
    return kept[: description.limit]
