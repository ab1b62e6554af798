"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Transport stack and client built once in the lifespan
    - Dependency functions retrieve the handler from request.app.state
    - The upstream client is closed on shutdown
"""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

import httpx
import structlog
from fastapi import Depends, FastAPI, Request

from eod_cache_proxy.config import Settings
from eod_cache_proxy.handlers import ProxyHandler
from eod_cache_proxy.rules import PrefixRuleSet
from eod_cache_proxy.services import CacheDecisionEngine
from eod_cache_proxy.transports import (
    CacheHeadersTransport,
    build_cache_storage,
    build_cache_transport,
)

logger = structlog.get_logger(__name__)


def get_proxy_handler(request: Request) -> ProxyHandler:
    """Dependency injection for ProxyHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ProxyHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "proxy_handler", None)
    if handler is None:
        raise RuntimeError("ProxyHandler not initialized. Check lifespan setup.")
    return handler


def build_upstream_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the httpx client carrying the full transport stack.

    Args:
        settings: Application settings
        transport: Innermost network transport. Defaults to httpx.AsyncHTTPTransport.

    Returns:
        Client bound to the upstream origin
    """
    engine = CacheDecisionEngine.create(rules=PrefixRuleSet.default())
    headers_transport = CacheHeadersTransport.create(transport=transport, policy=engine)
    storage = build_cache_storage(settings)

    return httpx.AsyncClient(
        base_url=settings.upstream_url,
        transport=build_cache_transport(headers_transport, storage),
        timeout=settings.upstream_timeout,
        follow_redirects=False,
    )


def make_lifespan(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Create the lifespan context manager for the FastAPI app.

    Args:
        settings: Application settings
        transport: Optional innermost transport override

    Returns:
        Lifespan callable for FastAPI
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = build_upstream_client(settings, transport)

        app.state.upstream_client = client
        app.state.proxy_handler = ProxyHandler(client=client)

        logger.info(
            "proxy_started",
            upstream=settings.upstream_url,
            mount_prefix=settings.mount_prefix,
            cache_backend=settings.cache_backend,
        )

        try:
            yield
        finally:
            await client.aclose()
            del app.state.proxy_handler
            del app.state.upstream_client
            logger.info("proxy_stopped")

    return lifespan


# Type alias for cleaner dependency injection
ProxyHandlerDep = Annotated[ProxyHandler, Depends(get_proxy_handler)]
