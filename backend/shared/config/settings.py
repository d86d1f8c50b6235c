"""
Service settings, read from the environment or a .env file.

All names are case-insensitive, e.g. TIMEZONE=Africa/Nairobi or
USD_EXCHANGE_RATE=3800.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults suit a local development run."""

    # Environment
    environment: str = "development"
    debug: bool = True

    # Month boundaries are computed in this zone (restaurant wall clock)
    timezone: str = "Africa/Kampala"

    # Currency display. Amounts are whole units, no decimals shown.
    currency_code: str = "UGX"
    currency_symbol: str = "USh"
    usd_exchange_rate: float = 3700.0  # 1 USD = N local units

    # Server
    rest_api_port: int = 8000
    # Comma-separated dashboard origins; empty means the local dev servers
    allowed_origins: str = ""

    # Analytics
    analytics_default_limit: int = 3

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    def validate_settings(self) -> list[str]:
        """Cross-field and lookup checks pydantic cannot express. Empty means valid."""
        errors: list[str] = []

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"TIMEZONE '{self.timezone}' is not a known IANA zone")

        if self.usd_exchange_rate <= 0:
            errors.append("USD_EXCHANGE_RATE must be positive")

        if self.analytics_default_limit < 1:
            errors.append("ANALYTICS_DEFAULT_LIMIT must be at least 1")

        if self.environment == "production" and self.debug:
            errors.append("DEBUG must be off when ENVIRONMENT=production")
        if self.environment == "production" and not self.allowed_origins.strip():
            errors.append("ALLOWED_ORIGINS is required when ENVIRONMENT=production")

        return errors


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()


settings = get_settings()
