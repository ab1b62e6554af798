"""Service layer for cache-control decisions.

Services hold the decision logic and depend only on entities and
rules. Transports call into them after the upstream round trip.
"""

from .cache_decision_engine import CacheDecisionEngine

__all__ = [
    "CacheDecisionEngine",
]
