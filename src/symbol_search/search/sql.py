"""Render compiled query descriptions as PostgreSQL text-search SQL.

The output targets the relational layout the package site stores symbols in:
``symbol_search_documents`` joined to ``search_documents`` (packages) and
``symbol_names``, with ``tsvector`` columns for name and path tokens. ``$1``
is the trimmed query text and ``$2`` the limit; literals that cannot be
derived from ``$1`` are appended as ``$3`` onwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from symbol_search.search.compiler import QueryDescription
from symbol_search.search.predicates import (
    PACKAGE_NAME_FIELD,
    PACKAGE_PATH_FIELD,
    AllOf,
    AnyOf,
    ExactFieldMatch,
    NameTokenMatch,
    PathTokenMatch,
    Predicate,
    TokenQuery,
    TokenSource,
)
from symbol_search.search.scoring import PopularityScore, RankedPopularityScore, ScoreExpression
from symbol_search.search.tokens import split_first_dot


POPULARITY_SQL = "ln(exp(1)+sd.imported_by_count)"

_FIELD_COLUMNS = {
    PACKAGE_NAME_FIELD: "sd.name",
    PACKAGE_PATH_FIELD: "sd.package_path",
}

_TOKEN_ARGUMENTS = {
    TokenSource.QUERY: "$1",
    TokenSource.REST: "substring($1 from E'[^.]*\\.(.+)$')",
    TokenSource.WORDS: "replace($1, ' ', ' | ')",
}

_SPLIT_FIRST_DOT = "split_part($1, '.', 1)"

_BASE_QUERY = """
WITH results AS (
	SELECT
			s.name AS symbol_name,
			sd.package_path,
			sd.module_path,
			sd.version,
			sd.name AS package_name,
			sd.synopsis,
			sd.license_types,
			sd.commit_time,
			sd.imported_by_count,
			ssd.package_symbol_id,
			ssd.goos,
			ssd.goarch,
			{score} AS score
	FROM symbol_search_documents ssd
	INNER JOIN search_documents sd ON sd.unit_id = ssd.unit_id
	INNER JOIN symbol_names s ON s.id = ssd.symbol_name_id
	WHERE {where}
)
SELECT
	r.symbol_name,
	r.package_path,
	r.module_path,
	r.version,
	r.package_name,
	r.synopsis,
	r.license_types,
	r.commit_time,
	r.imported_by_count,
	r.goos,
	r.goarch,
	ps.type AS symbol_type,
	ps.synopsis AS symbol_synopsis,
	r.score
FROM results r
INNER JOIN package_symbols ps ON r.package_symbol_id = ps.id
WHERE r.score > {floor!r}
ORDER BY
	score DESC,
	commit_time DESC,
	symbol_name,
	package_path
LIMIT $2;"""


@dataclass
class _RenderState:
    description: QueryDescription
    extra_parameters: list[str] = field(default_factory=list)

    def bind(self, literal: str) -> str:
        self.extra_parameters.append(literal)
        return f"${len(self.extra_parameters) + 2}"


def _to_tsquery(query: TokenQuery, configuration: str) -> str:
    # Underscores become hyphens before the text parser sees them.
    argument = _TOKEN_ARGUMENTS[query.source].replace("$1", "replace($1, '_', '-')")
    return f"to_tsquery('{configuration}', {argument})"


def _render_predicate(predicate: Predicate, state: _RenderState) -> str:
    configuration = state.description.text_search_configuration
    if isinstance(predicate, NameTokenMatch):
        return f"s.tsv_name_tokens @@ {_to_tsquery(predicate.query, configuration)}"
    if isinstance(predicate, PathTokenMatch):
        return f"sd.tsv_path_tokens @@ {_to_tsquery(predicate.query, configuration)}"
    if isinstance(predicate, ExactFieldMatch):
        column = _FIELD_COLUMNS.get(predicate.field)
        if column is None:
            raise ValueError(f"no column for field {predicate.field!r}")
        head, _ = split_first_dot(state.description.raw_query)
        value = _SPLIT_FIRST_DOT if predicate.literal == head else state.bind(predicate.literal)
        return f"{column}={value}"
    if isinstance(predicate, AllOf | AnyOf):
        joiner = " AND " if isinstance(predicate, AllOf) else " OR "
        return "(" + joiner.join(_render_predicate(child, state) for child in predicate.children) + ")"
    raise TypeError(f"cannot render predicate {type(predicate).__name__}")


def _render_score(score: ScoreExpression, configuration: str) -> str:
    if isinstance(score, PopularityScore):
        return POPULARITY_SQL
    if isinstance(score, RankedPopularityScore):
        weights = "{" + ", ".join(repr(weight) for weight in score.weights) + "}"
        return (
            f"ts_rank('{weights}', sd.tsv_path_tokens, {_to_tsquery(score.query, configuration)})"
            f" * {POPULARITY_SQL}"
        )
    raise TypeError(f"cannot render score {type(score).__name__}")


def render_sql(description: QueryDescription) -> tuple[str, tuple[str | int, ...]]:
    """Return the SQL text and positional parameters for ``description``."""
    state = _RenderState(description)
    where = _render_predicate(description.predicate, state)
    score = _render_score(description.score, description.text_search_configuration)
    sql = _BASE_QUERY.format(score=score, where=where, floor=description.score_floor)
    return sql, (*description.parameters, *state.extra_parameters)
