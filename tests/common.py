from collections.abc import Callable
from http import HTTPStatus
from typing import Any

import httpx


class MockResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = text

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def reason_phrase(self) -> str:
        return HTTPStatus(self.status_code).phrase

    def json(self) -> Any:
        return self._payload


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient.

    Every GET is recorded in `calls` as a `(url, headers)` tuple.
    """

    def __init__(self, response: MockResponse, calls: list[tuple[str, dict[str, str] | None]] | None = None) -> None:
        self._response = response
        self.calls = calls if calls is not None else []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, headers: dict[str, str] | None = None) -> MockResponse:
        self.calls.append((url, headers))
        return self._response


class FailingAsyncClient:
    """Async client that raises a RequestError on enter to simulate network failure.

    The target URL is provided at construction time, so tests for different providers
    can reuse this implementation with different base URLs.
    """

    def __init__(self, url: str, *args: Any, **kwargs: Any) -> None:
        self._url = url

    async def __aenter__(self) -> "FailingAsyncClient":
        request = httpx.Request("GET", self._url)
        raise httpx.RequestError("Network failure", request=request)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, headers: dict[str, str] | None = None) -> MockResponse:
        return MockResponse(status_code=HTTPStatus.OK, payload={})


def make_fake_async_client(
    response: MockResponse, calls: list[tuple[str, dict[str, str] | None]] | None = None
) -> Callable[..., MockAsyncClient]:
    """Factory for a fake httpx.AsyncClient returning a fixed response.

    Pass a `calls` list to collect the requests made across all client instances.
    """

    def _fake_client(*args: Any, **kwargs: Any) -> MockAsyncClient:
        return MockAsyncClient(response, calls)

    return _fake_client


class FakeClock:
    """Controllable clock returning epoch milliseconds."""

    def __init__(self, now_ms: float = 1_700_000_000_000.0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms
