"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".stonks"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STONKS_",
    )

    app_name: str = "Stonks Portfolio"

    # Data directory (sqlite ledger lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Quote provider (Finnhub)
    finnhub_api_key: Optional[str] = None
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    quote_cache_ttl_ms: int = 60_000
    quote_fetch_workers: int = 8

    # FX provider (OpenExchangeRates)
    openexchangerates_app_id: Optional[str] = None
    openexchangerates_base_url: str = "https://openexchangerates.org/api"
    fx_cache_ttl_seconds: int = 3600
    fx_base_currency: str = "USD"
    fx_currencies: list[str] = ["SGD", "AUD"]

    http_timeout_seconds: float = 10.0

    # Holdings on this exchange feed the aggregate "virtual portfolio" chart
    virtual_portfolio_exchange: str = "BATS"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "stonks.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
