"""Protocol interfaces for swappable implementations.

The header-rewriting transport depends on the CachePolicy protocol
rather than on the concrete decision engine, so tests and alternative
rule sets can plug in any object with a matching ``apply`` method.
"""

from .cache_policy import CachePolicy

__all__ = [
    "CachePolicy",
]
