import asyncio
import logging
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Always ask upstream caches for the freshest copy
NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class FetchErrorKind(str, Enum):
    NETWORK_FAILURE = "network_failure"
    MALFORMED_RESPONSE = "malformed_response"


class FetchError(Exception):
    def __init__(self, kind: FetchErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


def make_client(timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
        transport=transport,
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    no_cache: bool = False,
    retries: int = 0,
    backoff: float = 0.5,
) -> Any:
    """GET a JSON document.

    Raises FetchError(NETWORK_FAILURE) on transport errors and HTTP >= 400,
    FetchError(MALFORMED_RESPONSE) when the body is not JSON. Only network
    failures are retried, at most ``retries`` extra times.
    """
    headers = NO_CACHE_HEADERS if no_cache else None
    for attempt in range(retries + 1):
        try:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
            break
        except httpx.HTTPError as e:
            if attempt == retries:
                raise FetchError(FetchErrorKind.NETWORK_FAILURE, f"GET {url} failed: {e}") from e
            delay = backoff * (2**attempt)
            logger.warning(
                "GET %s failed (attempt %d/%d): %s, retrying in %.2fs",
                url, attempt + 1, retries + 1, e, delay,
            )
            await asyncio.sleep(delay)

    try:
        return response.json()
    except ValueError as e:
        raise FetchError(FetchErrorKind.MALFORMED_RESPONSE, f"GET {url} returned invalid JSON") from e
