"""
Tests for the cache decision engine.
"""

from datetime import datetime, timezone

import httpx
import pytest

from eod_cache_proxy.entities import CacheDecision, CachingTier
from eod_cache_proxy.protocols import CachePolicy
from eod_cache_proxy.rules import PrefixGroup, PrefixRuleSet
from eod_cache_proxy.services import CacheDecisionEngine


def exchange(url: str, headers: dict | None = None) -> tuple[httpx.Request, httpx.Response]:
    request = httpx.Request("GET", url)
    return request, httpx.Response(200, headers=headers, request=request)


@pytest.mark.parametrize(
    "path, tier, max_age",
    [
        ("/api/eod/AAPL.US", CachingTier.BY_DATE, 3600),
        ("/api/fundamentals/AAPL.US", CachingTier.MULTI_DAY, 1296000),
        ("/api/bulk-fundamentals/US", CachingTier.MULTI_DAY, 1296000),
        ("/api/exchanges/US", CachingTier.SINGLE_DAY, 86400),
        ("/api/unknown-endpoint", CachingTier.NO_CACHE, None),
    ],
)
def test_decide(engine, path, tier, max_age):
    """Test each tier's decision for a path without a date."""
    decision = engine.decide(path, {})
    assert decision == CacheDecision(tier=tier, max_age=max_age)


def test_decide_old_date(engine):
    """Test an old date on a date-scored path gets the long TTL."""
    decision = engine.decide("/api/eod/AAPL.US", {"date": "2020-01-01"})
    assert decision.tier is CachingTier.BY_DATE
    assert decision.max_age == 864000


def test_decide_explicit_now_overrides_clock(engine):
    now = datetime(2019, 12, 31, tzinfo=timezone.utc)
    assert engine.decide("/api/eod/AAPL.US", {"date": "2020-01-01"}, now=now).max_age == 3600


def test_fixed_tiers_ignore_query(engine):
    """Test non-date tiers do not depend on query contents."""
    assert engine.decide("/api/exchanges/US", {"date": "2020-01-01"}).max_age == 86400
    assert engine.decide("/api/fundamentals/AAPL.US", {"date": "garbage"}).max_age == 1296000


def test_apply_sets_header(engine):
    request, response = exchange("https://upstream.test/api/exchanges/US")

    decision = engine.apply(request, response)

    assert decision.tier is CachingTier.SINGLE_DAY
    assert response.headers["Cache-Control"] == "private, max-age=86400"


def test_apply_replaces_upstream_header(engine):
    request, response = exchange(
        "https://upstream.test/api/fundamentals/AAPL.US",
        headers={"Cache-Control": "no-cache, no-store"},
    )

    engine.apply(request, response)

    assert response.headers.get_list("Cache-Control") == ["private, max-age=1296000"]


def test_apply_reads_date_from_query(engine):
    request, response = exchange("https://upstream.test/api/eod/AAPL.US?date=2020-01-01&fmt=json")

    engine.apply(request, response)

    assert response.headers["Cache-Control"] == "private, max-age=864000"


def test_no_cache_leaves_headers_alone(engine):
    request, response = exchange(
        "https://upstream.test/api/unknown-endpoint",
        headers={"Cache-Control": "max-age=60"},
    )

    decision = engine.apply(request, response)

    assert decision.tier is CachingTier.NO_CACHE
    assert response.headers["Cache-Control"] == "max-age=60"


def test_no_cache_does_not_add_header(engine):
    request, response = exchange("https://upstream.test/api/user")

    engine.apply(request, response)

    assert "Cache-Control" not in response.headers


def test_malformed_date_still_caches(engine):
    """Test an unparseable date falls back to the short TTL, not to no cache."""
    request, response = exchange("https://upstream.test/api/eod/AAPL.US?date=not-a-date")

    label = engine.classify(request, response)

    assert label == "cache by date"
    assert response.headers["Cache-Control"] == "private, max-age=3600"


@pytest.mark.parametrize(
    "path, label",
    [
        ("/api/eod/AAPL.US", "cache by date"),
        ("/api/fundamentals/AAPL.US", "cache multi day"),
        ("/api/exchanges/US", "cache single day"),
        ("/api/unknown-endpoint", "no cache"),
    ],
)
def test_classify_labels(engine, path, label):
    request, response = exchange("https://upstream.test" + path)
    assert engine.classify(request, response) == label


def test_classification_is_idempotent(engine):
    url = "https://upstream.test/api/eod/AAPL.US?date=2023-06-01"
    first_request, first_response = exchange(url)
    second_request, second_response = exchange(url)

    engine.apply(first_request, first_response)
    engine.apply(second_request, second_response)

    assert first_response.headers["Cache-Control"] == second_response.headers["Cache-Control"]


def test_earlier_tier_wins_on_overlap():
    """Test the priority order when a path belongs to two groups."""
    rules = PrefixRuleSet(
        groups=(
            PrefixGroup(CachingTier.MULTI_DAY, ("/overlap/",)),
            PrefixGroup(CachingTier.SINGLE_DAY, ("/overlap/",)),
        )
    )
    engine = CacheDecisionEngine.create(rules=rules)

    assert engine.decide("/api/overlap/x", {}).tier is CachingTier.MULTI_DAY


def test_engine_satisfies_policy_protocol(engine):
    assert isinstance(engine, CachePolicy)
