"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App settings
    app_name: str = "Nextflix API"
    debug: bool = False
    api_prefix: str = "api"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: str = "*"

    # Upstream provider
    movie_provider: Literal["tmdb", "omdb"] = "tmdb"
    request_timeout: float = 10.0

    # TMDB API
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"

    # OMDB API
    omdb_api_key: str = ""
    omdb_base_url: str = "https://www.omdbapi.com"
    omdb_seed_query: str = "movie"

    # Response cache
    cache_ttl: int = 300
    cache_max_entries: int = 1000

    # Rate limiting (movie endpoints)
    throttle_ttl: int = 60
    throttle_limit: int = 20

    @field_validator("api_prefix")
    @classmethod
    def strip_prefix_slashes(cls, v: str) -> str:
        """Store the prefix without leading or trailing slashes."""
        return v.strip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return level

    @field_validator("cache_ttl", "cache_max_entries", "throttle_ttl", "throttle_limit")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """Reject negative cache and throttle values."""
        if v < 0:
            raise ValueError("must be zero or greater")
        return v

    @model_validator(mode="after")
    def validate_provider_key(self) -> "Settings":
        """Fail startup when the selected provider has no API key."""
        if self.movie_provider == "tmdb" and not self.tmdb_api_key:
            raise ValueError("TMDB_API_KEY is required when MOVIE_PROVIDER is 'tmdb'")
        if self.movie_provider == "omdb" and not self.omdb_api_key:
            raise ValueError("OMDB_API_KEY is required when MOVIE_PROVIDER is 'omdb'")
        return self

    @property
    def cors_origin_list(self) -> list[str]:
        """Return CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if self.cache_ttl == 0 or self.cache_max_entries == 0:
            warnings.append("Response cache is disabled - every request hits the upstream API")

        if self.throttle_limit == 0:
            warnings.append("THROTTLE_LIMIT is 0 - rate limiting is disabled")

        if self.request_timeout > 30:
            warnings.append(
                f"REQUEST_TIMEOUT is {self.request_timeout}s - slow upstreams will hold requests"
            )

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
