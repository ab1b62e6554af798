"""Reverse-proxy handler forwarding requests to the upstream origin."""

import httpx
import structlog
from fastapi import HTTPException, Request, status
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

logger = structlog.get_logger(__name__)

# Connection-scoped headers that must not be forwarded by a proxy.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def _filter_headers(headers: list[tuple[str, str]], drop: frozenset[str]) -> list[tuple[str, str]]:
    # Headers listed in Connection are hop-by-hop as well.
    listed = set()
    for name, value in headers:
        if name.lower() == "connection":
            listed.update(token.strip().lower() for token in value.split(","))
    return [
        (name, value)
        for name, value in headers
        if name.lower() not in drop and name.lower() not in listed
    ]


def _append_forwarded_for(headers: list[tuple[str, str]], client_host: str) -> list[tuple[str, str]]:
    prior = [value for name, value in headers if name.lower() == "x-forwarded-for"]
    rest = [(name, value) for name, value in headers if name.lower() != "x-forwarded-for"]
    return rest + [("x-forwarded-for", ", ".join(prior + [client_host]))]


class ProxyHandler:
    """Forwards inbound requests to a single upstream origin.

    The method, headers, body, path and query string are forwarded
    unchanged, except for hop-by-hop headers and ``Host``, which is
    rewritten to the upstream host. The upstream response is streamed
    back as-is. Each inbound request makes exactly one upstream call.

    Example:
        ```python
        client = httpx.AsyncClient(base_url="https://eodhistoricaldata.com")
        handler = ProxyHandler(client=client)

        @app.api_route("/api/{path:path}", methods=["GET"])
        async def proxy(request: Request):
            return await handler.forward(request)
        ```
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the proxy handler.

        Args:
            client: Client bound to the upstream origin via ``base_url``.
        """
        self._client = client

    def build_upstream_request(self, request: Request, body: bytes) -> httpx.Request:
        """Translate an inbound request into the upstream request."""
        headers = _filter_headers(request.headers.items(), HOP_BY_HOP_HEADERS | {"host"})
        if request.client is not None:
            headers = _append_forwarded_for(headers, request.client.host)
        # Body bytes are passed through raw, so never ask for an encoding the caller did not.
        if "accept-encoding" not in request.headers:
            headers.append(("accept-encoding", "identity"))

        # raw_path keeps percent-escapes such as %2F and %3F intact.
        raw_path = request.scope.get("raw_path")
        if raw_path:
            url = raw_path.split(b"?", 1)[0].decode("latin-1")
        else:
            url = request.url.path
        query = request.scope.get("query_string", b"")
        if query:
            url = f"{url}?{query.decode('latin-1')}"

        return self._client.build_request(
            request.method,
            url,
            headers=headers,
            content=body or None,
        )

    async def forward(self, request: Request) -> StreamingResponse:
        """Handle a proxied request.

        Args:
            request: The inbound request

        Returns:
            The upstream response, streamed back to the caller

        Raises:
            HTTPException: 502 if the upstream cannot be reached
        """
        body = await request.body()
        upstream_request = self.build_upstream_request(request, body)

        try:
            upstream_response = await self._client.send(upstream_request, stream=True)
        except httpx.TransportError as e:
            logger.warning(
                "upstream_request_failed",
                path=request.url.path,
                error=str(e) or type(e).__name__,
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Upstream request failed: {type(e).__name__}",
            ) from e

        response = StreamingResponse(
            upstream_response.aiter_raw(),
            status_code=upstream_response.status_code,
            background=BackgroundTask(upstream_response.aclose),
        )
        # Set raw headers directly so repeated headers (Set-Cookie) survive.
        response.raw_headers = [
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in _filter_headers(
                upstream_response.headers.multi_items(), HOP_BY_HOP_HEADERS
            )
        ]
        return response
