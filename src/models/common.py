from enum import Enum


class Provider(str, Enum):
    """Supported IP geolocation providers."""

    ipstack = "ipstack"
    ipxapi = "ipxapi"
