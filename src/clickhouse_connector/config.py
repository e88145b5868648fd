"""Connector configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DRIVER_NAME = "ClickHouse ODBC Driver (Unicode)"


class ConnectorSettings(BaseSettings):
    """Settings loaded from CLICKHOUSE_CONNECTOR_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CLICKHOUSE_CONNECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ODBC driver registered with the driver manager
    driver_name: str = DEFAULT_DRIVER_NAME

    # Column-info diagnostic traces
    enable_trace_output: bool = True

    # Driver host
    connect_timeout: int = 10
    client_connection_pooling: bool = True


@lru_cache
def get_settings() -> ConnectorSettings:
    """Get cached settings instance."""
    return ConnectorSettings()
