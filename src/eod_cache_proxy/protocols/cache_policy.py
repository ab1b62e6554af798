"""Cache policy protocol."""

from typing import Protocol, runtime_checkable

import httpx

from eod_cache_proxy.entities import CacheDecision


@runtime_checkable
class CachePolicy(Protocol):
    """Protocol for objects that stamp a caching policy onto responses.

    Example:
        ```python
        from eod_cache_proxy.services import CacheDecisionEngine

        policy: CachePolicy = CacheDecisionEngine.create()
        ```
    """

    def apply(self, request: httpx.Request, response: httpx.Response) -> CacheDecision:
        """Decide the caching tier and rewrite the response headers.

        Args:
            request: The upstream request that produced the response
            response: The successful upstream response, mutated in place

        Returns:
            The decision that was applied
        """
        ...
