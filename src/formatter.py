from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

from src.models.response_models import Envelope, ErrorDetail, Meta


def _error_parts(error: BaseException | Mapping[str, Any]) -> tuple[str, int | None]:
    if isinstance(error, Mapping):
        return str(error.get("message") or ""), error.get("status")
    message = getattr(error, "message", None) or str(error)
    return message, getattr(error, "status", None)


def format_result(
    *,
    api_url: str | None = None,
    cache: bool = False,
    rate_limit: int | None = None,
    rate_limit_count: int | None = None,
    error: BaseException | Mapping[str, Any] | None = None,
    **data: Any,
) -> Envelope:
    """Build the canonical response envelope for a lookup outcome.

    If `error` is given (an exception or a `{"message", "status"}` mapping) an
    error envelope is produced; its status defaults to 400 when the error
    carries none, and `cache` is left out of the metadata. Otherwise every
    remaining keyword argument becomes `data` and the status is always 200.
    """
    if error is not None:
        message, status = _error_parts(error)
        return Envelope(
            error=ErrorDetail(message=message),
            meta=Meta(
                api_url=api_url,
                rate_limit=rate_limit,
                rate_limit_count=rate_limit_count,
                status=int(status or HTTPStatus.BAD_REQUEST),
            ),
        )

    return Envelope(
        data=data,
        meta=Meta(
            api_url=api_url,
            cache=cache,
            rate_limit=rate_limit,
            rate_limit_count=rate_limit_count,
            status=int(HTTPStatus.OK),
        ),
    )
