"""Transport that stamps caching policy onto successful upstream responses."""

import httpx
import structlog

from eod_cache_proxy.protocols import CachePolicy
from eod_cache_proxy.services import CacheDecisionEngine

logger = structlog.get_logger(__name__)


class CacheHeadersTransport(httpx.AsyncBaseTransport):
    """Async transport decorator that rewrites Cache-Control.

    The wrapped transport performs the actual network call. Transport
    errors propagate unchanged. Responses with status 200 are passed
    through the cache policy and logged; any other status is returned
    untouched.

    Example:
        ```python
        transport = CacheHeadersTransport.create()
        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.get("https://eodhistoricaldata.com/api/exchanges/US")
            print(response.headers["cache-control"])  # private, max-age=86400
        ```
    """

    def __init__(self, transport: httpx.AsyncBaseTransport, policy: CachePolicy) -> None:
        """Initialize the transport.

        Args:
            transport: Inner transport performing the upstream request.
            policy: Policy applied to successful responses.
        """
        self._transport = transport
        self._policy = policy

    @classmethod
    def create(
        cls,
        transport: httpx.AsyncBaseTransport | None = None,
        policy: CachePolicy | None = None,
    ) -> "CacheHeadersTransport":
        """Factory method with a network transport and the default engine.

        Args:
            transport: Inner transport. If None, uses httpx.AsyncHTTPTransport.
            policy: Cache policy. If None, uses CacheDecisionEngine.create().

        Returns:
            Configured CacheHeadersTransport
        """
        return cls(
            transport=transport or httpx.AsyncHTTPTransport(),
            policy=policy or CacheDecisionEngine.create(),
        )

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self._transport.handle_async_request(request)

        if response.status_code == httpx.codes.OK:
            decision = self._policy.apply(request, response)
            logger.info(
                "cache_control_rewritten",
                path=request.url.path,
                classification=decision.label,
                cache_control=response.headers.get("Cache-Control"),
            )

        return response

    async def aclose(self) -> None:
        await self._transport.aclose()
