"""Caching tier domain entity."""

from enum import Enum


class CachingTier(Enum):
    """Caching classification assigned to a proxied request.

    Members are declared in evaluation priority order: a request is
    checked against BY_DATE first and falls through to NO_CACHE.
    The value of each member is the label written to the logs.
    """

    BY_DATE = "cache by date"
    MULTI_DAY = "cache multi day"
    SINGLE_DAY = "cache single day"
    NO_CACHE = "no cache"

    @property
    def label(self) -> str:
        return self.value
