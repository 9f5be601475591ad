from http import HTTPStatus
from typing import Any

from src.clients.base import BaseProvider
from src.errors import PayloadError
from src.models.common import Provider


class IpstackProvider(BaseProvider):
    """Strategy for the https://ipstack.com/ API.

    The access key travels as a query parameter and the country is reported in
    the `country_name` field.
    """

    name = Provider.ipstack

    def build_url(self, base_url: str, token: str, ip: str) -> str:
        return f"{base_url}/{ip}?access_key={token}"

    def validate_payload(self, payload: dict[str, Any]) -> None:
        """Normalize ipstack error payloads into PayloadError.

        ipstack reports errors in the JSON body with HTTP 200, e.g.:
            { "success": false, "error": { "code": 101, "type": "invalid_access_key",
              "info": "You have not supplied a valid API Access Key." } }
        An invalid key maps to 401; everything else is a 400.
        """
        error = payload.get("error")
        if not error:
            return

        details = error if isinstance(error, dict) else {}
        error_type = details.get("type")
        message = str(details.get("info") or error_type or "An unknown error occurred")

        if error_type == "invalid_access_key":
            raise PayloadError(message, status=HTTPStatus.UNAUTHORIZED)
        raise PayloadError(message, status=HTTPStatus.BAD_REQUEST)

    def extract_country_name(self, payload: dict[str, Any]) -> str | None:
        return payload.get("country_name")
