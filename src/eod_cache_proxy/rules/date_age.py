"""TTL selection based on how old the requested trading date is.

Data for a date that lies well in the past is final and can be cached
for a long time. Recent dates may still receive corrections from the
data vendor, so they only get a short TTL. The same short TTL is used
when no usable ``date`` parameter was sent.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from eod_cache_proxy.entities import DATE_AGE_CUTOFF, LONG_TTL, SHORT_TTL

DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date(value: str | None) -> datetime | None:
    """Parse a ``YYYY-MM-DD`` string to midnight UTC.

    Returns:
        The parsed datetime, or None when the value is empty or malformed
    """
    if not value or not _DATE_PATTERN.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


@dataclass(frozen=True)
class DateAgePolicy:
    """Chooses between a short and a long TTL from the requested date.

    A date strictly older than ``now - cutoff`` gets ``long_ttl``.
    Everything else gets ``short_ttl``: recent or future dates, a date
    exactly on the cutoff, and missing or unparseable values.

    Example:
        ```python
        policy = DateAgePolicy()
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        policy.resolve_ttl(now, "2020-01-01")  # 864000
        policy.resolve_ttl(now, "2023-12-31")  # 3600
        policy.resolve_ttl(now, "yesterday")   # 3600
        ```
    """

    short_ttl: int = SHORT_TTL
    long_ttl: int = LONG_TTL
    cutoff: timedelta = DATE_AGE_CUTOFF

    def resolve_ttl(self, now: datetime, date_param: str | None) -> int:
        """Resolve the TTL in seconds for a request's ``date`` value.

        Args:
            now: Current time; a naive value is taken as UTC
            date_param: Raw ``date`` query parameter, may be None

        Returns:
            Freshness lifetime in seconds
        """
        date = parse_date(date_param)
        if date is None:
            return self.short_ttl

        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        if date < now - self.cutoff:
            return self.long_ttl
        return self.short_ttl


_default_policy = DateAgePolicy()


def resolve_date_ttl(now: datetime, date_param: str | None) -> int:
    """Resolve a TTL with the default short/long values and 30 hour cutoff."""
    return _default_policy.resolve_ttl(now, date_param)
