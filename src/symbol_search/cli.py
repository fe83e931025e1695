"""Command-line entry point for inspecting compiled symbol searches."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys

import orjson
from pydantic import ValidationError

from symbol_search.adapters.corpus import AbstractSymbolCorpus
from symbol_search.adapters.memory_corpus import InMemorySymbolCorpus
from symbol_search.config import Settings, get_settings
from symbol_search.domain.model import Package, SearchResponse, Symbol
from symbol_search.errors import SymbolSearchError
from symbol_search.observability import configure_logging, init_tracing
from symbol_search.search.sql import render_sql
from symbol_search.service_layer.search_service import SymbolSearchService


def _load_corpus(path: Path) -> InMemorySymbolCorpus:
    """Load ``[{"symbol": {...}, "package": {...}}, ...]`` into memory."""
    records = orjson.loads(path.read_bytes())
    return InMemorySymbolCorpus.from_symbols(
        (Symbol.model_validate(record["symbol"]), Package.model_validate(record["package"])) for record in records
    )


async def _run_search(
    corpus: AbstractSymbolCorpus, query: str, limit: int | None, settings: Settings
) -> SearchResponse:
    """Run one search and release the corpus afterwards, even on failure."""
    try:
        return await SymbolSearchService(corpus, settings).search(query, limit)
    finally:
        await corpus.close()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="symbol-search", description="Compile and run ranked symbol searches")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Print the compiled query description as JSON")
    compile_parser.add_argument("query")
    compile_parser.add_argument("--limit", type=int, default=None)

    sql_parser = subparsers.add_parser("sql", help="Print PostgreSQL text and parameters for a query")
    sql_parser.add_argument("query")
    sql_parser.add_argument("--limit", type=int, default=None)

    search_parser = subparsers.add_parser("search", help="Search a JSON corpus file")
    search_parser.add_argument("query")
    search_parser.add_argument("--corpus", type=Path, required=True, help="JSON list of symbol/package records")
    search_parser.add_argument("--limit", type=int, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    init_tracing(settings.service_name)

    try:
        if args.command == "search":
            try:
                corpus = _load_corpus(args.corpus)
            except (OSError, orjson.JSONDecodeError, KeyError, TypeError, ValidationError) as exc:
                print(f"symbol-search: cannot load corpus {args.corpus}: {exc}", file=sys.stderr)
                return 2

            response = asyncio.run(_run_search(corpus, args.query, args.limit, settings))
            sys.stdout.write(orjson.dumps(response.model_dump(mode="json"), option=orjson.OPT_INDENT_2).decode())
            sys.stdout.write("\n")
            return 0

        description = SymbolSearchService(InMemorySymbolCorpus(), settings).compile(args.query, args.limit)
    except SymbolSearchError as exc:
        print(f"symbol-search: {exc}", file=sys.stderr)
        return 2

    if args.command == "sql":
        sql, parameters = render_sql(description)
        print(sql.strip())
        print(f"-- parameters: {list(parameters)!r}")
    else:
        sys.stdout.write(orjson.dumps(description.to_dict(), option=orjson.OPT_INDENT_2).decode())
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
