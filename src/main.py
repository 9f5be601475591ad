from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.clients.orchestrator import ClientOrchestrator
from src.config import get_settings
from src.exception_handlers import http_exception_handler, unhandled_exception_handler
from src.factory import build_orchestrator
from src.logger import logger
from src.middleware import RequestTimeoutMiddleware
from src.models.response_models import Envelope, HealthResponse

SERVICE_NAME = "ip-country-service"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the provider orchestrator once per process and keep it on app state."""
    settings = get_settings()
    app.state.orchestrator = build_orchestrator(settings)
    providers = ",".join(client.name.value for client in app.state.orchestrator.clients)
    logger.info(f"Started {SERVICE_NAME}@{VERSION} port={settings.country_api_port} providers={providers}")
    yield
    logger.info(f"Stopped {SERVICE_NAME}@{VERSION}")


app = FastAPI(
    title="IP Country Service",
    version=VERSION,
    description="Resolves the country of an IP address using rate-limited upstream providers.",
    lifespan=lifespan,
)


def get_orchestrator(request: Request) -> ClientOrchestrator:
    """Dependency to provide the process-wide ClientOrchestrator."""
    return request.app.state.orchestrator


app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)
app.add_middleware(RequestTimeoutMiddleware)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/countries/{ip}",
    response_model=Envelope,
    tags=["countries"],
    summary="Look up the country name for an IP address.",
)
async def get_country(
    ip: str,
    request: Request,
    orchestrator: Annotated[ClientOrchestrator, Depends(get_orchestrator)],
) -> JSONResponse:
    """Resolve the country for `ip` with the currently usable provider client.

    The response status mirrors `meta.status` of the returned envelope.
    """
    client = orchestrator.current_client
    logger.info(
        "Performing country lookup "
        f"path={request.url.path} method={request.method} ip={ip} provider={client.name.value}"
    )
    result = await client.get_country(ip)
    return JSONResponse(status_code=result.meta.status, content=result.to_dict())
