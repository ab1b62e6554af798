"""Domain entities for cache-control decisions.

These are plain enums and frozen dataclasses used by the rules, the
decision engine and the transports. They carry no HTTP or logging
concerns; the human-readable labels are derived from them at the
logging boundary.
"""

from .cache_decision import (
    DATE_AGE_CUTOFF,
    LONG_TTL,
    MULTI_DAY_TTL,
    SHORT_TTL,
    SINGLE_DAY_TTL,
    CacheDecision,
)
from .caching_tier import CachingTier

__all__ = [
    "CachingTier",
    "CacheDecision",
    "SHORT_TTL",
    "LONG_TTL",
    "MULTI_DAY_TTL",
    "SINGLE_DAY_TTL",
    "DATE_AGE_CUTOFF",
]
