from abc import ABC, abstractmethod
from typing import Any

from src.models.common import Provider


class BaseProvider(ABC):
    """Abstract strategy for a single upstream IP geolocation provider.

    A provider only knows how its API is addressed and how its payloads look.
    Caching, rate limiting and envelope construction are shared and live in
    `ProviderClient`, which delegates to these hooks.
    """

    name: Provider

    @abstractmethod
    def build_url(self, base_url: str, token: str, ip: str) -> str:
        """Return the URL that resolves the country for `ip`."""
        raise NotImplementedError

    def build_headers(self, token: str) -> dict[str, str]:
        """Return the headers sent with every request to the provider."""
        return {}

    @abstractmethod
    def validate_payload(self, payload: dict[str, Any]) -> None:
        """Raise a PayloadError if the payload signals a provider-level error."""
        raise NotImplementedError

    @abstractmethod
    def extract_country_name(self, payload: dict[str, Any]) -> str | None:
        """Return the country name from a validated payload, if present."""
        raise NotImplementedError
