import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlsplit

from dotenv import load_dotenv

load_dotenv()

CACHE_BACKENDS = ("memory", "file", "redis", "none")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Upstream
    upstream_url: str = os.getenv("UPSTREAM_URL", "https://eodhistoricaldata.com")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "60"))
    mount_prefix: str = os.getenv("MOUNT_PREFIX", "/api")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory").lower()
    cache_dir: str = os.getenv("CACHE_DIR", ".cache/eod-cache-proxy")
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("PORT", "8989"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        parts = urlsplit(self.upstream_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"UPSTREAM_URL must be an absolute http(s) URL, got {self.upstream_url!r}")

        if not self.mount_prefix.startswith("/"):
            raise ValueError(f"MOUNT_PREFIX must start with '/', got {self.mount_prefix!r}")

        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )

        if self.upstream_timeout <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
