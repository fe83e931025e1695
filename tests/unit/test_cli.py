"""Unit tests for the symbol-search command line."""

import json

import orjson
import pytest

from symbol_search import cli
from symbol_search.adapters.memory_corpus import InMemorySymbolCorpus


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture(autouse=True)
def traced_services(monkeypatch) -> list[str]:
    names: list[str] = []
    monkeypatch.setattr(cli, "init_tracing", names.append)
    return names


@pytest.fixture
def closed_corpora(monkeypatch) -> list[InMemorySymbolCorpus]:
    closed: list[InMemorySymbolCorpus] = []

    async def close(self) -> None:
        closed.append(self)

    monkeypatch.setattr(InMemorySymbolCorpus, "close", close)
    return closed


@pytest.fixture
def corpus_file(tmp_path, packages):
    records = [
        {"symbol": {"name": "Marshal", "kind": "Function"}, "package": packages["json"].model_dump(mode="json")},
        {"symbol": {"name": "Marshal", "kind": "Function"}, "package": packages["jsoniter"].model_dump(mode="json")},
        {"symbol": {"name": "Server", "kind": "Type"}, "package": packages["http"].model_dump(mode="json")},
    ]
    path = tmp_path / "corpus.json"
    path.write_bytes(orjson.dumps(records))
    return path


def test_compile_prints_description(capsys):
    assert cli.main(["compile", "json.Marshal", "--limit", "5"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["strategy"] == "qualified_reference"
    assert data["limit"] == 5
    assert data["predicate"]["children"][1]["query"]["terms"] == ["Marshal"]


def test_compile_uses_default_limit(capsys):
    assert cli.main(["compile", "Marshal"]) == 0

    assert json.loads(capsys.readouterr().out)["limit"] == 10


def test_sql_prints_query_and_parameters(capsys):
    assert cli.main(["sql", "http server", "--limit", "3"]) == 0

    out = capsys.readouterr().out
    assert "ts_rank('{0.1, 0.2, 1.0, 1.0}'" in out
    assert "-- parameters: ['http server', 3]" in out


@pytest.mark.parametrize("argv", [["compile", ".Marshal"], ["sql", "Marshal", "--limit", "0"]])
def test_invalid_input_exits_with_usage_status(argv, capsys):
    assert cli.main(argv) == 2

    assert capsys.readouterr().err.startswith("symbol-search: ")


def test_search_reads_corpus_file(corpus_file, capsys):
    assert cli.main(["search", "Marshal", "--corpus", str(corpus_file)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["strategy"] == "bare_symbol"
    assert [r["package_path"] for r in data["results"]] == ["encoding/json", "github.com/json-iterator/go"]


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_search_closes_corpus(corpus_file, closed_corpora):
    assert cli.main(["search", "Marshal", "--corpus", str(corpus_file)]) == 0

    assert len(closed_corpora) == 1


def test_search_closes_corpus_after_invalid_query(corpus_file, closed_corpora, capsys):
    assert cli.main(["search", "json.", "--corpus", str(corpus_file)]) == 2

    assert len(closed_corpora) == 1
    assert capsys.readouterr().err.startswith("symbol-search: ")


@pytest.mark.parametrize(
    "content",
    [
        None,
        b"{not json",
        orjson.dumps([{"package": {"path": "encoding/json"}}]),
        orjson.dumps([{"symbol": {"name": "Marshal", "kind": "Function"}, "package": {"imported_by_count": -1}}]),
        orjson.dumps(["Marshal"]),
    ],
    ids=["missing-file", "invalid-json", "missing-symbol", "invalid-package", "not-a-record"],
)
def test_unreadable_corpus_exits_with_usage_status(tmp_path, content, capsys):
    path = tmp_path / "corpus.json"
    if content is not None:
        path.write_bytes(content)

    assert cli.main(["search", "Marshal", "--corpus", str(path)]) == 2

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith(f"symbol-search: cannot load corpus {path}")


def test_tracing_uses_configured_service_name(monkeypatch, traced_services, capsys):
    monkeypatch.setenv("SYMBOL_SEARCH_SERVICE_NAME", "symbols-cli")

    assert cli.main(["compile", "Marshal"]) == 0

    assert traced_services == ["symbols-cli"]
