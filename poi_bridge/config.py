"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for the bridge's settings:
the backend subprocess command, geocoding options, search radii and
the gazetteer location.

Configuration can be overridden via environment variables:
- POI_RPC_COMMAND='["node", "server.js"]'
- POI_RPC_TIMEOUT_SECONDS=30
- POI_GEO_ENABLED=false
- POI_SEARCH_MAX_RESULTS=50
- POI_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RPCConfig(BaseSettings):
    """Tool backend subprocess configuration.

    Environment variables prefixed with POI_RPC_.
    """

    model_config = SettingsConfigDict(env_prefix="POI_RPC_")

    command: list[str] = Field(default_factory=lambda: ["npx", "ocm-mcp"])
    api_key_env: str = "OCM_API_KEY"
    timeout_seconds: Optional[float] = 60.0  # None waits for the backend indefinitely
    protocol_version: str = "2.0"

    @field_validator("command")
    @classmethod
    def _command_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("backend command must not be empty")
        return value


class GeocodingConfig(BaseSettings):
    """Geocoding configuration.

    Environment variables prefixed with POI_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="POI_GEO_")

    enabled: bool = True
    user_agent: str = "poi-bridge"
    domain: str = "nominatim.openstreetmap.org"
    timeout_seconds: int = 10
    cache_ttl_seconds: float = 3600.0


class SearchConfig(BaseSettings):
    """POI search parameters.

    Environment variables prefixed with POI_SEARCH_.
    """

    model_config = SettingsConfigDict(env_prefix="POI_SEARCH_")

    tool_name: str = "list_poi"
    max_results: int = 100
    coordinate_radius_km: float = 25.0
    country_radius_km: float = 500.0
    region_radius_km: float = 200.0
    city_radius_km: float = 30.0


class GazetteerConfig(BaseSettings):
    """Gazetteer data configuration.

    Environment variables prefixed with POI_GAZETTEER_.
    """

    model_config = SettingsConfigDict(env_prefix="POI_GAZETTEER_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent / "data"
    )
    file_name: str = "gazetteer.csv"

    @property
    def path(self) -> Path:
        """Full path to the gazetteer CSV file."""
        return self.data_dir / self.file_name


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with POI_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="POI_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations are available as attributes:

        config = get_config()
        print(config.rpc.command)
        print(config.gazetteer.path)

    Environment variables prefixed with POI_.
    """

    model_config = SettingsConfigDict(env_prefix="POI_")

    rpc: RPCConfig = Field(default_factory=RPCConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    gazetteer: GazetteerConfig = Field(default_factory=GazetteerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
