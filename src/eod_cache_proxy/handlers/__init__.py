"""Handler layer for HTTP endpoints.

Handlers translate inbound requests into upstream calls and stream the
results back. They depend on an httpx client whose transport stack
carries the caching behaviour.

Architecture:
    Handler -> httpx.AsyncClient -> HTTP cache -> CacheHeadersTransport -> network
"""

from .proxy_handler import HOP_BY_HOP_HEADERS, ProxyHandler

__all__ = [
    "HOP_BY_HOP_HEADERS",
    "ProxyHandler",
]
