"""Path-prefix groups that map upstream endpoints to caching tiers."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from eod_cache_proxy.entities import CachingTier

DEFAULT_ROOT = "/api"

DATE_SCORED_PREFIXES = ("/eod-bulk-last-day/", "/eod/", "/div/", "/splits/")
MULTI_DAY_PREFIXES = ("/bulk-fundamentals/", "/fundamentals/")
SINGLE_DAY_PREFIXES = ("/exchanges/",)


def matches_group(prefixes: Iterable[str], path: str, root: str = DEFAULT_ROOT) -> bool:
    """Check whether a request path starts with ``root + prefix`` for any prefix.

    The comparison is a case-sensitive literal prefix match.

    Args:
        prefixes: The group's prefixes, e.g. ``"/eod/"``
        path: The request path, e.g. ``"/api/eod/AAPL.US"``
        root: Leading path segment shared by every prefix

    Returns:
        True if the path belongs to the group
    """
    return any(path.startswith(root + prefix) for prefix in prefixes)


def _dedupe(prefixes: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(prefixes))


@dataclass(frozen=True)
class PrefixGroup:
    """An ordered set of path prefixes sharing one caching tier.

    Duplicate prefixes are dropped at construction, keeping the first
    occurrence.

    Attributes:
        tier: Tier assigned to paths matching the group
        prefixes: Literal prefixes, relative to the rule set root
    """

    tier: CachingTier
    prefixes: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "prefixes", _dedupe(self.prefixes))

    def matches(self, path: str, root: str = DEFAULT_ROOT) -> bool:
        return matches_group(self.prefixes, path, root)


@dataclass(frozen=True)
class PrefixRuleSet:
    """Ordered table of prefix groups, evaluated first match wins.

    Example:
        ```python
        rules = PrefixRuleSet.default()

        group = rules.first_match("/api/fundamentals/AAPL.US")
        print(group.tier)  # CachingTier.MULTI_DAY

        rules.first_match("/api/user")  # None
        ```
    """

    groups: tuple[PrefixGroup, ...] = field(default_factory=tuple)
    root: str = DEFAULT_ROOT

    @classmethod
    def default(cls, root: str = DEFAULT_ROOT) -> "PrefixRuleSet":
        """Build the rule set for the end-of-day data API."""
        return cls(
            groups=(
                PrefixGroup(CachingTier.BY_DATE, DATE_SCORED_PREFIXES),
                PrefixGroup(CachingTier.MULTI_DAY, MULTI_DAY_PREFIXES),
                PrefixGroup(CachingTier.SINGLE_DAY, SINGLE_DAY_PREFIXES),
            ),
            root=root,
        )

    def first_match(self, path: str) -> PrefixGroup | None:
        """Return the first group in priority order that matches the path."""
        for group in self.groups:
            if group.matches(path, self.root):
                return group
        return None

