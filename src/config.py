"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from src.errors import ClientValidationError
from src.models.common import Provider

DEFAULT_RATE_LIMIT = 5
DEFAULT_RATE_LIMIT_TIMEFRAME = 3_600_000  # 1 hour, in milliseconds


class Settings(BaseSettings):
    # ipstack (https://ipstack.com/)
    base_url_ipstack: str = "http://api.ipstack.com"
    api_token_ipstack: str = ""
    rate_limit_ipstack: int = DEFAULT_RATE_LIMIT
    rate_limit_timeframe_ipstack: int = DEFAULT_RATE_LIMIT_TIMEFRAME

    # ipXapi (https://ipxapi.com/)
    base_url_ipxapi: str = "https://ipxapi.com/api"
    api_token_ipxapi: str = ""
    rate_limit_ipxapi: int = DEFAULT_RATE_LIMIT
    rate_limit_timeframe_ipxapi: int = DEFAULT_RATE_LIMIT_TIMEFRAME

    # Comma-separated failover order; the first provider starts out active
    providers: str = "ipstack,ipxapi"

    upstream_timeout_seconds: float = 5.0
    request_timeout_seconds: float = 60.0

    country_api_host: str = "127.0.0.1"
    country_api_port: int = 3000

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def provider_order(self) -> list[Provider]:
        """Parse the comma-separated `providers` value into Provider members."""
        order: list[Provider] = []
        for name in (p.strip() for p in self.providers.split(",")):
            if not name:
                continue
            try:
                order.append(Provider(name))
            except ValueError as exc:
                raise ClientValidationError(f"Unknown provider '{name}' in 'providers' setting") from exc
        return order


@lru_cache
def get_settings() -> Settings:
    return Settings()
