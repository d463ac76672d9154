"""metascan — Centralized typed configuration.

All values can be overridden via environment variables with the METASCAN_ prefix.
Scoring weights and thresholds are NOT settings: ``scoring_config_path`` only names
a JSON override file that is loaded into a fresh ValidationConfig per caller.

Usage:
    from metascan.config import get_settings
    settings = get_settings()
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Typed, validated application settings."""

    model_config = {"env_prefix": "METASCAN_", "env_file": ".env", "extra": "ignore"}

    # --- Core ---
    env: str = Field("development", description="Runtime environment")
    version: str = Field("1.0.0", description="Application version")
    debug: bool = Field(False, description="Debug mode flag")
    log_level: str = Field("INFO", description="Log level")
    log_json: bool = Field(False, description="Emit JSON-structured logs")

    # --- Server ---
    host: str = Field("0.0.0.0", description="API bind host")
    port: int = Field(8000, description="API bind port")

    # --- Scoring ---
    scoring_config_path: str = Field("", description="Optional JSON file with weight/threshold overrides")
    max_batch_size: int = Field(500, description="Max files accepted by one batch request")

    # --- Reports ---
    csv_bom: bool = Field(True, description="Prefix CSV exports with a UTF-8 BOM")

    # --- Derived helpers ---
    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
