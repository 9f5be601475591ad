class AppError(Exception):
    """Base application error for the IP country service."""


class ClientValidationError(AppError):
    """Raised when a provider client or the orchestrator is constructed with invalid options."""


class ApiError(AppError):
    """Base error for failures that are reported to callers as an error envelope.

    `status` is the HTTP status code of the envelope. `None` means the failure
    carries no status of its own; it is then logged and reported as 400.
    """

    default_status: int | None = 400

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status if status is not None else self.default_status


class TransportError(ApiError):
    """Raised when the upstream HTTP call fails or returns a non-2xx response."""

    default_status = None


class PayloadError(ApiError):
    """Raised when the provider signals an error inside a 2xx response body."""


class ExtractionError(ApiError):
    """Raised when no country name can be derived from the provider payload."""


class RateLimitError(ApiError):
    """Raised when a provider client has used up its call budget for the current window."""

    default_status = 429


class RequestTimeoutError(ApiError):
    """Raised when an inbound request does not finish within the configured timeout."""

    default_status = 408


class RouteNotFoundError(ApiError):
    """Raised when no route matches the inbound request."""

    default_status = 404
