"""
httpx-backed transport.

One pooled ``httpx.AsyncClient`` is shared by every call made through the
transport. Close it with ``aclose()`` or use the transport as an async
context manager.
"""

import logging
from typing import Optional

import httpx

from blink_debit.errors import NetworkError
from blink_debit.providers.base import Transport, TransportResponse

logger = logging.getLogger("blink_debit.transport")

DEFAULT_TIMEOUT = 10.0


class HttpxTransport(Transport):
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds, connect=min(timeout_seconds, 5.0)),
        )

    async def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        try:
            response = await self._client.request(method, path, headers=headers, content=content)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out: %s", method, path, e)
            raise NetworkError(f"Request timed out: {method} {path}") from e
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Transport error on {method} {path}: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
