from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class ErrorDetail(BaseModel):
    """Error body of a failed lookup."""

    message: str


class Meta(BaseModel):
    """Diagnostic metadata attached to every envelope.

    Fields are serialized with camelCase keys (`apiUrl`, `rateLimitCount`) and
    unset fields are left out of the JSON body entirely.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    api_url: str | None = None
    cache: bool | None = None
    rate_limit: int | None = None
    rate_limit_count: int | None = None
    status: int


class Envelope(BaseModel):
    """Normalized `{data|error, meta}` response returned for every request."""

    data: dict[str, Any] | None = None
    error: ErrorDetail | None = None
    meta: Meta

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the outward-facing JSON shape."""
        return self.model_dump(by_alias=True, exclude_none=True)
