from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from ``BILLING_*`` environment variables and a
    ``.env`` file (if present). CLI options override these values.
    """

    # Network
    host: str = "127.0.0.1"
    port: int = 5050
    socket_timeout_s: Optional[float] = None

    # Catalog
    catalog_path: str = "data.csv"
    catalog_encoding: str = "utf-8"

    # Application
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BILLING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def set_config_for_test(**kwargs) -> AppConfig:
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
    return _config


def reset_config() -> None:
    global _config
    _config = None
