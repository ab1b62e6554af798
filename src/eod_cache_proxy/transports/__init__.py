"""Transport layer wrapping the upstream HTTP round trip.

Transports are composed at startup, innermost first:

    network (httpx.AsyncHTTPTransport)
      -> CacheHeadersTransport (rewrites Cache-Control on 200 responses)
        -> HTTP cache (hishel, stores responses per Cache-Control)

Each layer is an httpx.AsyncBaseTransport, so the stack plugs into a
plain httpx.AsyncClient.
"""

from .cache_headers_transport import CacheHeadersTransport
from .http_cache import build_cache_storage, build_cache_transport

__all__ = [
    "CacheHeadersTransport",
    "build_cache_storage",
    "build_cache_transport",
]
