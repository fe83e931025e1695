"""Centralized configuration for symbol search using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from symbol_search.search.compiler import DEFAULT_SCORE_FLOOR
from symbol_search.search.scoring import DEFAULT_RANK_WEIGHTS, validate_rank_weights
from symbol_search.search.tokens import TEXT_SEARCH_CONFIGURATION


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``SYMBOL_SEARCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SYMBOL_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Result sizing
    default_limit: int = Field(default=10, ge=1, description="Results returned when the caller gives no limit")
    max_limit: int = Field(default=100, ge=1, description="Upper bound applied to caller-supplied limits")

    # Ranking
    score_floor: float = Field(default=DEFAULT_SCORE_FLOOR, ge=0.0, description="Rows must score above this value")
    rank_weights: tuple[float, float, float, float] = Field(
        default=DEFAULT_RANK_WEIGHTS,
        description="Path-token tier weights (D, C, B, A) for multi-word lexical rank",
    )
    text_search_configuration: str = Field(
        default=TEXT_SEARCH_CONFIGURATION, min_length=1, description="Text search configuration name"
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")
    service_name: str = Field(default="symbol-search", description="Service name for traces and metrics")

    @field_validator("rank_weights")
    @classmethod
    def _check_rank_weights(cls, value: tuple[float, ...]) -> tuple[float, float, float, float]:
        return validate_rank_weights(value)

    @model_validator(mode="after")
    def _check_limits(self) -> "Settings":
        if self.default_limit > self.max_limit:
            raise ValueError(
                f"SYMBOL_SEARCH_DEFAULT_LIMIT ({self.default_limit}) must not exceed "
                f"SYMBOL_SEARCH_MAX_LIMIT ({self.max_limit})"
            )
        return self

    def cap_limit(self, limit: int) -> int:
        """Clamp a positive limit to ``max_limit``."""
        return min(limit, self.max_limit)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, loaded once."""
    return Settings()
