from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.errors import ApiError, RouteNotFoundError
from src.formatter import format_result
from src.logger import logger


def envelope_response(error: ApiError) -> JSONResponse:
    result = format_result(error=error)
    return JSONResponse(status_code=result.meta.status, content=result.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unmatched routes, wrong methods) as error envelopes."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.info(f"No route matched path={request.url.path} method={request.method}")
        return envelope_response(RouteNotFoundError("404 Not Found"))
    return envelope_response(ApiError(str(exc.detail), status=exc.status_code))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a 500 error envelope."""
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method}"
    )
    message = str(exc) or "An unexpected error occurred while processing the request."
    return envelope_response(ApiError(message, status=status.HTTP_500_INTERNAL_SERVER_ERROR))
