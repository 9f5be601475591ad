import asyncio

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.config import get_settings
from src.errors import RequestTimeoutError
from src.exception_handlers import envelope_response
from src.logger import logger


class RequestTimeoutMiddleware:
    """Answer with a 408 error envelope when a request is not finished in time.

    The timeout defaults to the `request_timeout_seconds` setting, read per
    request. If the response has already started when the timeout fires, the
    timeout error is re-raised instead.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float | None = None) -> None:
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        timeout_seconds = self.timeout_seconds or get_settings().request_timeout_seconds
        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=timeout_seconds)
        except asyncio.TimeoutError:
            logger.error(
                "Request timed out "
                f"path={scope.get('path')} method={scope.get('method')} timeout_seconds={timeout_seconds}"
            )
            if response_started:
                raise
            response = envelope_response(RequestTimeoutError("Response timeout"))
            await response(scope, receive, send)
