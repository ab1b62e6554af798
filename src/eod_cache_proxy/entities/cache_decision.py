"""Cache decision domain entity."""

from dataclasses import dataclass
from datetime import timedelta

from .caching_tier import CachingTier

SHORT_TTL = 3600  # 1 hour
LONG_TTL = 864000  # 10 days
MULTI_DAY_TTL = 1296000  # 15 days
SINGLE_DAY_TTL = 86400  # 1 day

# A requested date older than this is considered final.
DATE_AGE_CUTOFF = timedelta(hours=30)


@dataclass(frozen=True)
class CacheDecision:
    """Outcome of evaluating the caching rules for one request.

    Attributes:
        tier: The caching tier the request falls into
        max_age: Freshness lifetime in seconds, None when nothing is cached
    """

    tier: CachingTier
    max_age: int | None = None

    @classmethod
    def no_cache(cls) -> "CacheDecision":
        return cls(tier=CachingTier.NO_CACHE)

    @property
    def label(self) -> str:
        return self.tier.label

    @property
    def header_value(self) -> str | None:
        """Value for the Cache-Control response header, if any."""
        if self.max_age is None:
            return None
        return f"private, max-age={self.max_age}"
