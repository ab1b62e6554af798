"""Static caching rules.

Two kinds of rules decide how long an upstream response may be cached:

- prefix_rules: ordered path-prefix groups, each mapped to a caching tier
- date_age: TTL selection from the age of the requested ``date`` parameter

Both are immutable and safe to share across concurrent requests.
"""

from .date_age import DATE_FORMAT, DateAgePolicy, resolve_date_ttl
from .prefix_rules import (
    DATE_SCORED_PREFIXES,
    MULTI_DAY_PREFIXES,
    SINGLE_DAY_PREFIXES,
    PrefixGroup,
    PrefixRuleSet,
    matches_group,
)

__all__ = [
    "DATE_FORMAT",
    "DateAgePolicy",
    "resolve_date_ttl",
    "DATE_SCORED_PREFIXES",
    "MULTI_DAY_PREFIXES",
    "SINGLE_DAY_PREFIXES",
    "PrefixGroup",
    "PrefixRuleSet",
    "matches_group",
]
