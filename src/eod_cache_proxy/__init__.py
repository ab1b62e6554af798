"""EOD Cache Proxy - caching reverse proxy for the EOD Historical Data API.

Requests under the mount prefix are forwarded to the upstream origin.
Successful responses get a ``Cache-Control`` header chosen from the
request path (and, for end-of-day style endpoints, the age of the
requested ``date``), and a shared HTTP cache serves repeat requests.

Layers:
    - entities: Caching tiers and decisions
    - rules: Prefix groups and the date age policy
    - services: The cache decision engine
    - protocols: Interface contracts (CachePolicy)
    - transports: httpx transports (header rewriting, HTTP cache)
    - handlers: Reverse-proxy forwarding
    - dto: Response models for the service endpoints

Usage:
    ```python
    from eod_cache_proxy.services import CacheDecisionEngine

    engine = CacheDecisionEngine.create()
    engine.decide("/api/eod/AAPL.US", {"date": "2020-01-01"})
    ```

For HTTP API:
    ```python
    from eod_cache_proxy.api.app import create_app
    ```
"""

__version__ = "0.1.0"

from eod_cache_proxy.config import Settings, get_settings
from eod_cache_proxy.entities import CacheDecision, CachingTier
from eod_cache_proxy.protocols import CachePolicy
from eod_cache_proxy.rules import DateAgePolicy, PrefixGroup, PrefixRuleSet
from eod_cache_proxy.services import CacheDecisionEngine
from eod_cache_proxy.transports import CacheHeadersTransport

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Entities
    "CachingTier",
    "CacheDecision",
    # Rules
    "PrefixGroup",
    "PrefixRuleSet",
    "DateAgePolicy",
    # Protocols
    "CachePolicy",
    # Services
    "CacheDecisionEngine",
    # Transports
    "CacheHeadersTransport",
]
