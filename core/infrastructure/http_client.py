from collections.abc import Callable

import httpx
import structlog

logger = structlog.get_logger(__name__)

_client: httpx.AsyncClient | None = None


def init_http_client(timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
    global _client
    _client = httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=5),
        limits=httpx.Limits(max_connections=50, max_keepalive_connections=10),
        transport=transport,
    )


async def close_http_client():
    global _client
    if _client:
        await _client.aclose()
        _client = None


def get_http_client() -> httpx.AsyncClient:
    if _client is None:
        raise RuntimeError("HTTP client not initialized")
    return _client


async def http_request(
    method: str,
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    error_handler: Callable[[httpx.Response], None] | None = None,
    **kwargs,
) -> httpx.Response:
    """Single HTTP request, no retries. Non-2xx responses raise."""
    if client is None:
        client = get_http_client()

    response = await client.request(method, url, **kwargs)
    if response.is_success:
        return response

    logger.warning("http_error", status=response.status_code, url=url)
    if error_handler:
        error_handler(response)
    response.raise_for_status()
    return response
