import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import StreamingResponse

from eod_cache_proxy import __version__
from eod_cache_proxy.api.dependencies import ProxyHandlerDep, make_lifespan
from eod_cache_proxy.config import Settings, get_settings
from eod_cache_proxy.dto import HealthCheckResponse, ServiceInfoResponse
from eod_cache_proxy.observability import configure_logging

SERVICE_NAME = "EOD Cache Proxy"

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the proxy application.

    Args:
        settings: Application settings. Defaults to get_settings().
        transport: Innermost network transport, replaced in tests.

    Returns:
        The configured FastAPI app
    """
    settings = settings or get_settings()
    mount = settings.mount_prefix.rstrip("/")

    app = FastAPI(
        title=f"{SERVICE_NAME} API",
        description="Caching reverse proxy for the EOD Historical Data API",
        version=__version__,
        lifespan=make_lifespan(settings, transport),
    )
    app.state.settings = settings

    @app.get("/", response_model=ServiceInfoResponse)
    async def root() -> ServiceInfoResponse:
        """Root endpoint with service information."""
        return ServiceInfoResponse(
            name=SERVICE_NAME,
            version=__version__,
            upstream=settings.upstream_url,
            mount_prefix=settings.mount_prefix,
        )

    @app.get("/health", response_model=HealthCheckResponse)
    async def health() -> HealthCheckResponse:
        """Health check endpoint."""
        return HealthCheckResponse(
            status="healthy",
            upstream=settings.upstream_url,
            cache_backend=settings.cache_backend,
        )

    @app.api_route(mount or "/", methods=PROXY_METHODS, include_in_schema=False)
    @app.api_route(mount + "/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def proxy(request: Request, handler: ProxyHandlerDep) -> StreamingResponse:
        """Forward everything under the mount prefix to the upstream origin."""
        return await handler.forward(request)

    return app


def main() -> None:
    """Run the proxy with uvicorn.

    Invalid configuration raises before the server starts and a failed
    bind makes uvicorn exit, so startup errors terminate the process.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
