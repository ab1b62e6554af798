"""Shared HTTP cache layer in front of the header-rewriting transport.

Storage and freshness handling are delegated to hishel, which serves
a stored response for as long as its Cache-Control allows. The cache
acts as a private cache so responses stamped ``private`` are stored.

Backends:
    - memory: in-process store, lost on restart (default)
    - file: one file per entry under a local directory
    - redis: shared store, survives restarts and spans replicas
    - none: no cache layer, every request reaches the upstream
"""

from pathlib import Path

import hishel
import httpx
import redis.asyncio as redis

from eod_cache_proxy.config import CACHE_BACKENDS, Settings
from eod_cache_proxy.entities import MULTI_DAY_TTL

# Stored entries never outlive the longest TTL the engine hands out.
STORAGE_TTL = MULTI_DAY_TTL
MEMORY_CAPACITY = 1024


def build_cache_storage(settings: Settings) -> hishel.AsyncBaseStorage | None:
    """Create the hishel storage selected by ``CACHE_BACKEND``.

    Args:
        settings: Application settings

    Returns:
        The storage instance, or None for the ``none`` backend

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.cache_backend

    if backend == "memory":
        return hishel.AsyncInMemoryStorage(ttl=STORAGE_TTL, capacity=MEMORY_CAPACITY)

    if backend == "file":
        return hishel.AsyncFileStorage(base_path=Path(settings.cache_dir), ttl=STORAGE_TTL)

    if backend == "redis":
        client = redis.from_url(settings.redis_url, password=settings.redis_password)
        return hishel.AsyncRedisStorage(client=client, ttl=STORAGE_TTL)

    if backend == "none":
        return None

    raise ValueError(f"Unknown cache backend {backend!r}, expected one of {list(CACHE_BACKENDS)}")


def build_cache_transport(
    transport: httpx.AsyncBaseTransport,
    storage: hishel.AsyncBaseStorage | None,
) -> httpx.AsyncBaseTransport:
    """Wrap a transport in the HTTP cache.

    Only GET responses with status 200 are stored, since those are the
    only ones carrying a rewritten Cache-Control header.

    Args:
        transport: The transport to call on cache misses
        storage: Cache storage, or None to skip caching

    Returns:
        The caching transport, or ``transport`` itself when storage is None
    """
    if storage is None:
        return transport

    controller = hishel.Controller(
        cacheable_methods=["GET"],
        cacheable_status_codes=[200],
        cache_private=True,
    )
    return hishel.AsyncCacheTransport(transport=transport, storage=storage, controller=controller)
