from http import HTTPStatus

import httpx
import pytest

from src.clients.ipxapi_client import IpxapiProvider
from src.clients.provider_client import ProviderClient
from src.errors import PayloadError
from tests.common import FakeClock, MockResponse, make_fake_async_client

BASE_URL = "https://ipxapi.com/api"
TOKEN = "xyz789"


@pytest.fixture
def provider() -> IpxapiProvider:
    return IpxapiProvider()


def test_build_url_uses_ip_query_parameter(provider: IpxapiProvider) -> None:
    assert provider.build_url(BASE_URL, TOKEN, "8.8.8.8") == "https://ipxapi.com/api/ip?ip=8.8.8.8"


def test_build_headers_send_bearer_token(provider: IpxapiProvider) -> None:
    assert provider.build_headers(TOKEN) == {
        "accept": "application/json",
        "authorization": "Bearer xyz789",
    }


def test_extract_country_name(provider: IpxapiProvider) -> None:
    payload = {"ip": "8.8.8.8", "country": "United States", "country_code": "US"}

    assert provider.extract_country_name(payload) == "United States"


def test_validate_payload_success_false_maps_to_400(provider: IpxapiProvider) -> None:
    with pytest.raises(PayloadError) as exc_info:
        provider.validate_payload({"success": False, "message": "Invalid IP address"})

    assert exc_info.value.status == HTTPStatus.BAD_REQUEST
    assert exc_info.value.message == "Invalid IP address"


def test_validate_payload_success_false_without_message(provider: IpxapiProvider) -> None:
    with pytest.raises(PayloadError) as exc_info:
        provider.validate_payload({"success": False})

    assert exc_info.value.message == "An unknown error occurred"


def test_validate_payload_missing_success_flag_is_accepted(provider: IpxapiProvider) -> None:
    provider.validate_payload({"country": "Japan"})


@pytest.mark.asyncio
async def test_get_country_with_ipxapi(monkeypatch: pytest.MonkeyPatch, provider: IpxapiProvider) -> None:
    """The shared client sends the ipxapi URL and headers and reads the `country` field."""
    calls: list = []
    response = MockResponse(status_code=HTTPStatus.OK, payload={"success": True, "country": "Japan"})
    monkeypatch.setattr(httpx, "AsyncClient", make_fake_async_client(response, calls))

    client = ProviderClient(provider, base_url=BASE_URL, token=TOKEN, rate_limit=3, clock=FakeClock())
    result = await client.get_country("221.47.149.135")

    assert result.to_dict() == {
        "data": {"name": "Japan"},
        "meta": {
            "apiUrl": "https://ipxapi.com/api/ip?ip=221.47.149.135",
            "cache": False,
            "rateLimit": 3,
            "rateLimitCount": 1,
            "status": 200,
        },
    }
    assert calls == [("https://ipxapi.com/api/ip?ip=221.47.149.135", provider.build_headers(TOKEN))]


@pytest.mark.asyncio
async def test_get_country_with_ipxapi_error_payload(
    monkeypatch: pytest.MonkeyPatch, provider: IpxapiProvider
) -> None:
    response = MockResponse(status_code=HTTPStatus.OK, payload={"success": False, "message": "Quota exceeded"})
    monkeypatch.setattr(httpx, "AsyncClient", make_fake_async_client(response))

    client = ProviderClient(provider, base_url=BASE_URL, token=TOKEN, rate_limit=3, clock=FakeClock())
    result = await client.get_country("8.8.8.8")

    assert result.to_dict() == {
        "error": {"message": "Quota exceeded"},
        "meta": {
            "apiUrl": "https://ipxapi.com/api/ip?ip=8.8.8.8",
            "rateLimit": 3,
            "rateLimitCount": 1,
            "status": 400,
        },
    }
