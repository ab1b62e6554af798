"""
Tests for settings validation.
"""

import pytest

from eod_cache_proxy.config import Settings


def test_defaults_are_valid():
    settings = Settings(upstream_url="https://eodhistoricaldata.com", cache_backend="memory")
    assert settings.mount_prefix == "/api"
    assert settings.api_port > 0


@pytest.mark.parametrize("url", ["eodhistoricaldata.com", "ftp://example.com", "https://", ""])
def test_invalid_upstream_url(url):
    with pytest.raises(ValueError, match="UPSTREAM_URL"):
        Settings(upstream_url=url)


def test_invalid_mount_prefix():
    with pytest.raises(ValueError, match="MOUNT_PREFIX"):
        Settings(upstream_url="https://upstream.test", mount_prefix="api")


def test_invalid_cache_backend():
    with pytest.raises(ValueError, match="CACHE_BACKEND"):
        Settings(upstream_url="https://upstream.test", cache_backend="s3")


def test_invalid_timeout():
    with pytest.raises(ValueError, match="UPSTREAM_TIMEOUT"):
        Settings(upstream_url="https://upstream.test", cache_backend="none", upstream_timeout=0)
