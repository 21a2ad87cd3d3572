from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_RATE_PROVIDERS = {"static", "external-http"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, DB_FILENAME, RATES_REFRESH_INTERVAL_SECONDS, EXCHANGE_RATE_PROVIDER).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Storefront Currency Service"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "storefront.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Display conversion (client side)
    base_currency: str = "INR"
    api_base_url: str = "http://localhost:8080"
    http_timeout_seconds: float = 5.0
    rates_refresh_interval_seconds: float = 3600.0  # 1 hour
    preference_filename: str = "preferences.sqlite3"

    # Generic FX table (server side)
    rates_cache_ttl_seconds: int = 3600
    exchange_rate_provider: str = "static"
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangerate-api.com/v4/latest"  # type: ignore[assignment]

    # Admin multiplier CRUD
    enable_multiplier_admin: bool = True

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.base_currency = self.base_currency.strip().upper()
        if self.exchange_rate_provider not in ALLOWED_RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {ALLOWED_RATE_PROVIDERS}"
            )
        if self.rates_refresh_interval_seconds <= 0:
            raise ValueError("rates_refresh_interval_seconds must be positive")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
