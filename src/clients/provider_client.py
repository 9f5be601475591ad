import time
from collections.abc import Callable, Mapping
from http import HTTPStatus
from types import MappingProxyType
from typing import Any

import httpx

from src.clients.base import BaseProvider
from src.config import DEFAULT_RATE_LIMIT_TIMEFRAME
from src.errors import ApiError, ClientValidationError, ExtractionError, RateLimitError, TransportError
from src.formatter import format_result
from src.logger import logger
from src.models.common import Provider
from src.models.response_models import Envelope


def _now_ms() -> float:
    return time.time() * 1000


class ProviderClient:
    """Country lookup client for a single upstream provider.

    Owns an in-memory IP -> country name cache and the rate-limit counters for
    its provider. Provider-specific URL shape, headers, payload validation and
    field extraction are delegated to the injected `BaseProvider` strategy.

    The rate-limit window is evaluated lazily: the counter is reset only when a
    new upstream call is attempted after the window has expired.
    """

    def __init__(
        self,
        provider: BaseProvider,
        *,
        base_url: str,
        token: str,
        rate_limit: int,
        rate_limit_timeframe: int | None = None,
        clock: Callable[[], float] | None = None,
        timeout_seconds: float = 5.0,
    ) -> None:
        if not isinstance(base_url, str):
            raise ClientValidationError("'base_url' option is invalid")
        if isinstance(rate_limit, bool) or not isinstance(rate_limit, int) or rate_limit <= 0:
            raise ClientValidationError("'rate_limit' option is invalid")
        if not isinstance(token, str):
            raise ClientValidationError("'token' option is invalid")

        self._provider = provider
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._rate_limit = rate_limit
        self._rate_limit_timeframe = rate_limit_timeframe or DEFAULT_RATE_LIMIT_TIMEFRAME
        self._rate_limit_count = 0
        self._rate_limit_expiry: float | None = None
        self._cache: dict[str, str] = {}
        self._clock = clock or _now_ms
        self._timeout_seconds = timeout_seconds

    @property
    def name(self) -> Provider:
        return self._provider.name

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def rate_limit(self) -> int:
        return self._rate_limit

    @property
    def rate_limit_timeframe(self) -> int:
        return self._rate_limit_timeframe

    @property
    def rate_limit_count(self) -> int:
        return self._rate_limit_count

    @property
    def rate_limit_expiry(self) -> float | None:
        return self._rate_limit_expiry

    @property
    def cache(self) -> Mapping[str, str]:
        """Read-only view of the IP -> country name cache."""
        return MappingProxyType(self._cache)

    @property
    def is_rate_limited(self) -> bool:
        """True if the call budget of the current, unexpired window is used up."""
        if self._is_rate_limit_expired(self._clock()):
            return False
        return self._rate_limit_count >= self._rate_limit

    def transfer_cache(self, other: "ProviderClient") -> None:
        """Merge `other`'s cache into this one; existing entries here take precedence."""
        self._cache = {**other.cache, **self._cache}

    async def get_country(self, ip: str) -> Envelope:
        """Resolve the country name for `ip`.

        Always returns an envelope: lookup failures are reported as error
        envelopes rather than raised.
        """
        url = self._provider.build_url(self._base_url, self._token, ip)

        try:
            cached_name = self._cache.get(ip)
            if cached_name:
                logger.debug(f"Cache hit provider={self.name.value} ip={ip}")
                return self._format_result(cache=True, name=cached_name)

            self._handle_rate_limiting()

            logger.debug(
                f"Requesting country provider={self.name.value} ip={ip} "
                f"rate_limit_count={self._rate_limit_count}/{self._rate_limit}"
            )
            response = await self._fetch(url)
            self._validate_response(response)

            payload = self._parse_json(response)
            self._provider.validate_payload(payload)

            name = self._provider.extract_country_name(payload)
            if not name:
                raise ExtractionError("Country not found for this IP", status=HTTPStatus.BAD_REQUEST)

            self._cache[ip] = name
            return self._format_result(api_url=url, name=name)
        except ApiError as exc:
            # Expected, caller-facing failures carry a 4xx status and are not logged.
            if exc.status is None or exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
                logger.exception(
                    "Country lookup failed "
                    f"provider={self.name.value} ip={ip} status={exc.status} error={exc.message}"
                )
            return self._format_result(api_url=url, error=exc)

    def _is_rate_limit_expired(self, now: float) -> bool:
        return self._rate_limit_expiry is None or now > self._rate_limit_expiry

    def _handle_rate_limiting(self) -> None:
        """Start a new window if the current one expired, then spend one call of budget."""
        now = self._clock()
        if self._is_rate_limit_expired(now):
            self._rate_limit_expiry = now + self._rate_limit_timeframe
            self._rate_limit_count = 0

        if self._rate_limit_count >= self._rate_limit:
            raise RateLimitError("Rate limited")

        self._rate_limit_count += 1

    async def _fetch(self, url: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                return await client.get(url, headers=self._provider.build_headers(self._token))
        except httpx.RequestError as exc:
            raise TransportError(f"Request to provider failed: {repr(exc)}") from exc

    @staticmethod
    def _validate_response(response: httpx.Response) -> None:
        if not response.is_success:
            raise TransportError(
                f"{response.status_code} {response.reason_phrase}",
                status=response.status_code,
            )

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(f"Failed to decode provider response as JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise TransportError("Provider response is not a JSON object")
        return payload

    def _format_result(self, **payload: Any) -> Envelope:
        return format_result(
            rate_limit=self._rate_limit,
            rate_limit_count=self._rate_limit_count,
            **payload,
        )
