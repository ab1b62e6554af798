"""Cache decision engine.

Classifies a proxied request into a caching tier and stamps the
matching ``Cache-Control`` header onto the upstream response.
"""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone

import httpx

from eod_cache_proxy.entities import (
    MULTI_DAY_TTL,
    SINGLE_DAY_TTL,
    CacheDecision,
    CachingTier,
)
from eod_cache_proxy.rules import DateAgePolicy, PrefixRuleSet

DATE_PARAM = "date"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheDecisionEngine:
    """Evaluates the caching rules in fixed priority order.

    Tiers are checked as BY_DATE, MULTI_DAY, SINGLE_DAY; the first
    matching prefix group wins and anything else is NO_CACHE. Requests
    in the BY_DATE tier always get a TTL: an absent or malformed
    ``date`` parameter falls back to the short TTL instead of
    disabling caching.

    Example:
        ```python
        engine = CacheDecisionEngine.create()

        decision = engine.decide("/api/exchanges/US", {})
        print(decision.header_value)  # private, max-age=86400
        ```
    """

    def __init__(
        self,
        rules: PrefixRuleSet,
        date_policy: DateAgePolicy,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the decision engine.

        Args:
            rules: Ordered prefix groups to classify paths with.
            date_policy: TTL policy for the BY_DATE tier.
            clock: Returns the current time. Defaults to the UTC wall clock.
        """
        self._rules = rules
        self._date_policy = date_policy
        self._clock = clock
        self._fixed_ttls = {
            CachingTier.MULTI_DAY: MULTI_DAY_TTL,
            CachingTier.SINGLE_DAY: SINGLE_DAY_TTL,
        }

    @classmethod
    def create(
        cls,
        rules: PrefixRuleSet | None = None,
        date_policy: DateAgePolicy | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "CacheDecisionEngine":
        """Factory method with the default rule set and date policy.

        Args:
            rules: Prefix rule set. If None, uses PrefixRuleSet.default().
            date_policy: Date TTL policy. If None, uses DateAgePolicy().
            clock: Time source. If None, uses the UTC wall clock.

        Returns:
            Configured CacheDecisionEngine
        """
        return cls(
            rules=rules or PrefixRuleSet.default(),
            date_policy=date_policy or DateAgePolicy(),
            clock=clock or utc_now,
        )

    def decide(
        self,
        path: str,
        params: Mapping[str, str],
        now: datetime | None = None,
    ) -> CacheDecision:
        """Classify a request path without touching any response.

        Args:
            path: The request path, including the ``/api`` root
            params: Query parameters; only ``date`` is read
            now: Evaluation time. Defaults to the engine clock.

        Returns:
            The CacheDecision for this request
        """
        group = self._rules.first_match(path)
        if group is None:
            return CacheDecision.no_cache()

        if group.tier is CachingTier.BY_DATE:
            now = now or self._clock()
            ttl = self._date_policy.resolve_ttl(now, params.get(DATE_PARAM))
            return CacheDecision(tier=CachingTier.BY_DATE, max_age=ttl)

        max_age = self._fixed_ttls.get(group.tier)
        if max_age is None:
            return CacheDecision.no_cache()
        return CacheDecision(tier=group.tier, max_age=max_age)

    def apply(self, request: httpx.Request, response: httpx.Response) -> CacheDecision:
        """Classify the request and rewrite ``Cache-Control`` on the response.

        Any Cache-Control value sent by the upstream is replaced for
        cacheable tiers and left alone for NO_CACHE.
        """
        decision = self.decide(request.url.path, request.url.params)
        if decision.header_value is not None:
            response.headers["Cache-Control"] = decision.header_value
        return decision

    def classify(self, request: httpx.Request, response: httpx.Response) -> str:
        """Apply the caching rules and return the human-readable tier label."""
        return self.apply(request, response).label
