"""Configuration for fetch fan-out and error reporting.

All settings can be overridden via environment variables with the TRYRESULT_
prefix. Example: TRYRESULT_MAX_WORKERS=4, TRYRESULT_DEFAULT_ERROR_CODE=503
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class TryResultConfig(BaseSettings):
    """Library-wide settings."""

    model_config = {"env_prefix": "TRYRESULT_"}

    # Fan-out
    max_workers: int = Field(
        default=8, ge=0, description="Concurrent fetches; 0 means one per fetcher"
    )

    # Error reporting
    default_error_code: int = Field(
        default=500, description="Code reported for exceptions without their own code"
    )
    include_exception_type: bool = Field(
        default=False, description="Prefix error messages with the exception type name"
    )

    # Logging
    log_failures: bool = Field(
        default=True, description="Log each captured fetch failure at WARNING"
    )

    def resolve_workers(self, n_fetchers: int, requested: int | None = None) -> int:
        """Resolve the effective worker count for ``n_fetchers`` fetches."""
        if n_fetchers <= 0:
            return 1
        workers = self.max_workers if requested is None else requested
        if workers < 0:
            raise ValueError(f"Worker count must be non-negative, got {workers}")
        if workers == 0:
            return n_fetchers
        return min(workers, n_fetchers)


@lru_cache(maxsize=1)
def get_config() -> TryResultConfig:
    """Return the process-wide configuration, read once from the environment."""
    return TryResultConfig()


def reset_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    get_config.cache_clear()
