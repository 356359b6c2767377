from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .urls import ADVISORY_DB_URL


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the RUSTSEC_ prefix.
    For example:
        - RUSTSEC_DATABASE_URL=https://example.org/Advisories.toml
        - RUSTSEC_DATABASE_PATH=/path/to/Advisories.toml
        - RUSTSEC_CACHE_DIR=/path/to/cache
        - RUSTSEC_CACHE_TTL_HOURS=0

    Alternatively, settings can be provided programmatically when creating the client:
        client = AdvisoryDatabaseClient(database_path="Advisories.toml")
    """

    model_config = SettingsConfigDict(
        env_prefix="RUSTSEC_",
        case_sensitive=False,
        extra="forbid",
    )

    database_url: str = Field(
        default=ADVISORY_DB_URL,
        description="URL of the TOML file containing the advisory database",
    )

    database_path: Optional[Path] = Field(
        default=None,
        description="Local Advisories.toml to read instead of fetching database_url",
    )

    cache_dir: Optional[Path] = Field(
        default=None,
        description="Custom cache directory path. If None, uses platformdirs.user_cache_dir('rustsec')",
    )

    cache_ttl_hours: int = Field(
        default=6,
        ge=0,
        description="TTL for the cached raw advisory document in hours (0 disables caching)",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="HTTP timeout for fetching the advisory database",
    )
