from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_RATE_PROVIDERS = {"static", "external-http"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    EXCHANGE_API_BASE_URL, EXCHANGE_RATE_PROVIDER, HTTP_TIMEOUT_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Currency Converter"
    debug: bool = False
    version: str = "0.1.0"

    # Exchange rates
    # All cached rates are expressed against this currency (rate of base = 1).
    base_currency: str = "EUR"
    exchange_api_base_url: str = "https://api.exchangeratesapi.io"
    http_timeout_seconds: float = 5.0

    # Allowed: 'static' (built-in fixed table, offline), 'external-http' (real provider)
    exchange_rate_provider: str = "external-http"

    def init_post_load(self) -> None:
        """Normalize and validate derived fields."""
        self.base_currency = self.base_currency.upper()
        self.exchange_api_base_url = self.exchange_api_base_url.rstrip("/")
        if self.exchange_rate_provider not in ALLOWED_RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {ALLOWED_RATE_PROVIDERS}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
