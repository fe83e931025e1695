"""Domain models for symbol search.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- No infrastructure dependencies

Packages and symbols are read-only snapshots of the corpus. The compiler never
creates or mutates them; it only reads rows the corpus collaborator returns.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from symbol_search.search.strategy import SearchStrategy


ALL_BUILDS = "all"


class BuildContext(BaseModel):
    """OS/architecture pair a symbol declaration is built for."""

    model_config = ConfigDict(frozen=True)

    goos: str = ALL_BUILDS
    goarch: str = ALL_BUILDS

    def __str__(self) -> str:
        return f"{self.goos}/{self.goarch}"


class Package(BaseModel):
    """Value object for the package that owns a symbol."""

    model_config = ConfigDict(frozen=True)

    path: str
    module_path: str
    version: str
    name: str
    synopsis: str = ""
    license_types: tuple[str, ...] = ()
    commit_time: datetime | None = None
    imported_by_count: int = Field(default=0, ge=0, description="Distinct importers; drives popularity")
    redistributable: bool = True


class Symbol(BaseModel):
    """One build-tagged declaration of an exported symbol.

    The same name can appear once per build context; those rows are distinct
    and are never merged.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: str
    synopsis: str = ""
    build: BuildContext = Field(default_factory=BuildContext)


class CorpusRow(BaseModel):
    """A row returned by the corpus collaborator for a compiled query.

    ``lexical_rank`` is filled in for multi-word queries only.
    """

    model_config = ConfigDict(frozen=True)

    symbol: Symbol
    package: Package
    lexical_rank: float | None = Field(default=None, ge=0.0)


class SymbolSearchResult(BaseModel):
    """Value object for a single ranked symbol search hit.

    ``score`` is exposed for diagnostics, not for display.
    """

    model_config = ConfigDict(frozen=True)

    symbol_name: str
    symbol_kind: str
    symbol_synopsis: str
    goos: str
    goarch: str
    package_path: str
    module_path: str
    version: str
    package_name: str
    synopsis: str
    license_types: tuple[str, ...]
    commit_time: datetime | None
    imported_by_count: int
    score: float

    @classmethod
    def from_row(cls, row: CorpusRow, score: float) -> "SymbolSearchResult":
        return cls(
            symbol_name=row.symbol.name,
            symbol_kind=row.symbol.kind,
            symbol_synopsis=row.symbol.synopsis,
            goos=row.symbol.build.goos,
            goarch=row.symbol.build.goarch,
            package_path=row.package.path,
            module_path=row.package.module_path,
            version=row.package.version,
            package_name=row.package.name,
            synopsis=row.package.synopsis,
            license_types=row.package.license_types,
            commit_time=row.package.commit_time,
            imported_by_count=row.package.imported_by_count,
            score=score,
        )


class SearchResponse(BaseModel):
    """Ordered results for one symbol search plus timing information."""

    model_config = ConfigDict(frozen=True)

    query: str
    strategy: SearchStrategy
    results: list[SymbolSearchResult]
    search_time: float = 0.0
