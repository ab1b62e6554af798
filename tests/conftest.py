"""Shared fixtures for the proxy tests."""

import json
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import httpx
import pytest

from eod_cache_proxy.config import Settings
from eod_cache_proxy.services import CacheDecisionEngine

UPSTREAM_URL = "https://upstream.test"
NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


class ChunkedBody(httpx.AsyncByteStream):
    """Response body delivered in chunks, like a real network stream."""

    def __init__(self, body: bytes, chunk_size: int = 8) -> None:
        self._body = body
        self._chunk_size = chunk_size

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for start in range(0, len(self._body), self._chunk_size):
            yield self._body[start : start + self._chunk_size]


class RecordingUpstream:
    """Fake upstream origin that records every request it receives."""

    def __init__(self, status_code: int = 200, headers: dict | list | None = None) -> None:
        self.status_code = status_code
        self.headers = headers or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        headers = httpx.Headers(self.headers)
        headers["Content-Type"] = "application/json"
        body = json.dumps({"path": request.url.path}).encode()
        return httpx.Response(self.status_code, headers=headers, stream=ChunkedBody(body))


@pytest.fixture
def upstream():
    """Create a fake upstream returning 200."""
    return RecordingUpstream()


@pytest.fixture
def upstream_factory():
    """Factory for fake upstreams with a custom status and headers."""
    return RecordingUpstream


@pytest.fixture
def settings():
    """Settings pointing at the fake upstream, with no HTTP cache layer."""
    return Settings(upstream_url=UPSTREAM_URL, cache_backend="none")


@pytest.fixture
def engine():
    """Decision engine with a fixed clock."""
    return CacheDecisionEngine.create(clock=lambda: NOW)
