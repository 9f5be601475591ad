from typing import Any

from src.clients.base import BaseProvider
from src.errors import PayloadError
from src.models.common import Provider


class IpxapiProvider(BaseProvider):
    """Strategy for the https://ipxapi.com/ API.

    The token is sent as a bearer `authorization` header and the country is
    reported in the `country` field. Failures come back as
    `{"success": false, "message": "..."}`.
    """

    name = Provider.ipxapi

    def build_url(self, base_url: str, token: str, ip: str) -> str:
        return f"{base_url}/ip?ip={ip}"

    def build_headers(self, token: str) -> dict[str, str]:
        return {
            "accept": "application/json",
            "authorization": f"Bearer {token}",
        }

    def validate_payload(self, payload: dict[str, Any]) -> None:
        if payload.get("success") is False:
            raise PayloadError(str(payload.get("message") or "An unknown error occurred"))

    def extract_country_name(self, payload: dict[str, Any]) -> str | None:
        return payload.get("country")
