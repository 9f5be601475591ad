from collections.abc import Sequence

from src.clients.provider_client import ProviderClient
from src.errors import ClientValidationError
from src.logger import logger


class ClientOrchestrator:
    """Selects a provider client that is not rate limited, failing over in list order.

    The first client starts out active. Whenever the active client becomes rate
    limited, the first client in list order that is not rate limited takes over
    and inherits the previous client's cache. If every client is rate limited,
    the active client is kept so callers receive its rate-limit error.
    """

    def __init__(self, clients: Sequence[ProviderClient]) -> None:
        if not clients:
            raise ClientValidationError("At least one provider client is required")
        self._clients = tuple(clients)
        self._active_client = self._clients[0]

    @property
    def clients(self) -> tuple[ProviderClient, ...]:
        return self._clients

    @property
    def active_client(self) -> ProviderClient:
        return self._active_client

    @property
    def current_client(self) -> ProviderClient:
        """Return a usable client, re-evaluated on every access."""
        if not self._active_client.is_rate_limited:
            return self._active_client

        qualified_client = next((client for client in self._clients if not client.is_rate_limited), None)
        if qualified_client is None:
            logger.warning(
                f"All provider clients are rate limited, keeping provider={self._active_client.name.value}"
            )
            return self._active_client

        qualified_client.transfer_cache(self._active_client)
        logger.info(
            "Switching provider client "
            f"from={self._active_client.name.value} to={qualified_client.name.value} "
            f"transferred_cache_entries={len(self._active_client.cache)}"
        )
        self._active_client = qualified_client
        return self._active_client
