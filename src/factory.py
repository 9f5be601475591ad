from src.clients.base import BaseProvider
from src.clients.ipstack_client import IpstackProvider
from src.clients.ipxapi_client import IpxapiProvider
from src.clients.orchestrator import ClientOrchestrator
from src.clients.provider_client import ProviderClient
from src.config import Settings
from src.models.common import Provider


class ProviderClientFactory:
    """Factory for provider clients.

    Given a Provider enum and the application settings, returns a
    ProviderClient wired with that provider's strategy, credentials and
    rate limit.
    """

    PROVIDERS_MAP: dict[Provider, type[BaseProvider]] = {
        Provider.ipstack: IpstackProvider,
        Provider.ipxapi: IpxapiProvider,
    }

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def __call__(self, provider: Provider) -> ProviderClient:
        provider_cls = self.PROVIDERS_MAP[provider]
        suffix = provider.value
        return ProviderClient(
            provider_cls(),
            base_url=getattr(self._settings, f"base_url_{suffix}"),
            token=getattr(self._settings, f"api_token_{suffix}"),
            rate_limit=getattr(self._settings, f"rate_limit_{suffix}"),
            rate_limit_timeframe=getattr(self._settings, f"rate_limit_timeframe_{suffix}"),
            timeout_seconds=self._settings.upstream_timeout_seconds,
        )


def build_orchestrator(settings: Settings) -> ClientOrchestrator:
    """Build the orchestrator with one client per configured provider, in failover order."""
    factory = ProviderClientFactory(settings)
    return ClientOrchestrator([factory(provider) for provider in settings.provider_order])
