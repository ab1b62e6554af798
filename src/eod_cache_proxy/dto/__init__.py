"""Data Transfer Objects for the proxy's own endpoints.

Proxied responses are streamed through untouched; these models only
describe the service endpoints (root info and health).
"""

from .responses import HealthCheckResponse, ServiceInfoResponse

__all__ = [
    "HealthCheckResponse",
    "ServiceInfoResponse",
]
