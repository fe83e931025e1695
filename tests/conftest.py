"""Shared test fixtures and configuration."""

from datetime import datetime, timezone
import os

import pytest


TEST_ENV = {
    "SYMBOL_SEARCH_DEFAULT_LIMIT": "10",
    "SYMBOL_SEARCH_MAX_LIMIT": "100",
    "SYMBOL_SEARCH_SCORE_FLOOR": "0.1",
    "SYMBOL_SEARCH_LOG_LEVEL": "info",
    "SYMBOL_SEARCH_LOG_JSON": "true",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from symbol_search.adapters.memory_corpus import InMemorySymbolCorpus
from symbol_search.config import get_settings
from symbol_search.domain.model import BuildContext, Package, Symbol


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Pin SYMBOL_SEARCH_* variables and drop cached settings around each test."""
    for key in list(os.environ):
        if key.startswith("SYMBOL_SEARCH_") and key not in TEST_ENV:
            monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_package(
    path: str,
    name: str,
    imported_by_count: int = 0,
    *,
    commit_time: datetime | None = datetime(2023, 8, 8, tzinfo=timezone.utc),
    module_path: str | None = None,
) -> Package:
    return Package(
        path=path,
        module_path=module_path or path,
        version="v1.0.0",
        name=name,
        synopsis=f"Package {name}.",
        license_types=("BSD-3-Clause",),
        commit_time=commit_time,
        imported_by_count=imported_by_count,
    )


@pytest.fixture
def packages() -> dict[str, Package]:
    return {
        "json": make_package("encoding/json", "json", 500, module_path="std"),
        "jsoniter": make_package("github.com/json-iterator/go", "jsoniter", 50),
        "http": make_package("net/http", "http", 1000, module_path="std"),
        "httptest": make_package("net/http/httptest", "httptest", 200, module_path="std"),
        "fasthttp": make_package("github.com/valyala/fasthttp", "fasthttp", 30),
        "under": make_package("example.com/under", "under", 5),
        "alpha": make_package("example.com/alpha", "alpha", 0),
        "tools": make_package("github.com/acme/tools", "tools", 0),
        "syscall": make_package("syscall", "syscall", 80, module_path="std"),
    }


@pytest.fixture
def corpus(packages) -> InMemorySymbolCorpus:
    pairs = [
        (Symbol(name="Marshal", kind="Function"), packages["json"]),
        (Symbol(name="Unmarshal", kind="Function"), packages["json"]),
        (Symbol(name="Decoder", kind="Type"), packages["json"]),
        (Symbol(name="Decoder.Decode", kind="Method"), packages["json"]),
        (Symbol(name="Marshal", kind="Function"), packages["jsoniter"]),
        (Symbol(name="Server", kind="Type"), packages["http"]),
        (Symbol(name="Server.ListenAndServe", kind="Method"), packages["http"]),
        (Symbol(name="ListenAndServe", kind="Function"), packages["http"]),
        (Symbol(name="Server", kind="Type"), packages["httptest"]),
        (Symbol(name="NewServer", kind="Function"), packages["httptest"]),
        (Symbol(name="Server", kind="Type"), packages["fasthttp"]),
        (Symbol(name="A", kind="Constant"), packages["under"]),
        (Symbol(name="A_B", kind="Constant"), packages["under"]),
        (Symbol(name="A", kind="Constant"), packages["alpha"]),
        (Symbol(name="Widget", kind="Type"), packages["tools"]),
        (
            Symbol(name="Getpagesize", kind="Function", build=BuildContext(goos="linux", goarch="amd64")),
            packages["syscall"],
        ),
        (
            Symbol(name="Getpagesize", kind="Function", build=BuildContext(goos="darwin", goarch="arm64")),
            packages["syscall"],
        ),
    ]
    return InMemorySymbolCorpus.from_symbols(pairs)


@pytest.fixture
def package_factory():
    """Return :func:`make_package` for tests that build their own corpus."""
    return make_package
