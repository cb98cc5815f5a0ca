"""
API executor: turns a validated request into one HTTP exchange.

For every attempt of a call:

  1. Identity: obtain the bearer token (caller's token or a fresh one)
  2. Build: method, path with identifiers, headers, JSON body
  3. Send: hand the request to the transport
  4. Decode: 2xx bodies into the expected result type, anything else into
     an HttpError carrying the server's message

When a retry policy is configured every call goes through it, creates
included. The correlation ID is fixed before the first attempt and reused
by every retry.
"""

import json
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Optional
from urllib.parse import quote

import pydantic
from pydantic import TypeAdapter

from blink_debit.audit.logger import log_exchange
from blink_debit.engine.identity import IdentityProvider
from blink_debit.engine.retry import RetryPolicy, with_retry
from blink_debit.errors import DecodeError, HttpError, NetworkError, ValidationError
from blink_debit.providers.base import Transport, TransportResponse

logger = logging.getLogger("blink_debit.executor")

REQUEST_ID = "request-id"
INTERACTION_ID = "x-fapi-interaction-id"
USER_AGENT = "Python/Blink SDK 1.0"
APPLICATION_JSON = "application/json"


@dataclass
class ApiCall:
    """Everything needed to send one logical API call."""

    method: str
    path: str  # Template relative to the API prefix, e.g. "/refunds/{refund_id}"
    request_id: str
    path_params: dict[str, str] = field(default_factory=dict)
    body: Any = None
    body_adapter: Optional[TypeAdapter] = None
    response_adapter: Optional[TypeAdapter] = None  # None when no body is expected
    interaction_id: bool = True

    def render_path(self, prefix: str = "") -> str:
        params = {name: quote(str(value), safe="") for name, value in self.path_params.items()}
        return prefix.rstrip("/") + self.path.format(**params)


def error_from_response(response: TransportResponse) -> HttpError:
    """Build an HttpError from a non-2xx response."""
    return HttpError(
        response.status_code,
        _error_message(response),
        retry_after=_retry_after(response.header("Retry-After")),
    )


def _error_message(response: TransportResponse) -> str:
    text = response.content.decode("utf-8", errors="replace").strip()
    try:
        data = json.loads(text) if text else None
    except (json.JSONDecodeError, TypeError):
        data = None

    if isinstance(data, dict):
        for key in ("message", "error_description", "error", "detail"):
            if data.get(key):
                return str(data[key])

    if text:
        return text[:500]
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return "Unknown error"


def _retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None


def decode_body(adapter: Optional[TypeAdapter], response: TransportResponse) -> Any:
    """Decode a 2xx body, or return None when no body is expected."""
    if adapter is None:
        return None
    try:
        return adapter.validate_json(response.content)
    except pydantic.ValidationError as e:
        logger.error("Could not decode %d response: %s", response.status_code, e)
        raise DecodeError(
            f"Malformed response body ({e.error_count()} error(s)): {e.errors()[0]['msg']}"
        ) from e


class ApiExecutor:
    def __init__(
        self,
        transport: Transport,
        identity: Optional[IdentityProvider] = None,
        retry_policy: Optional[RetryPolicy] = None,
        path_prefix: str = "/payments/v1",
        user_agent: str = USER_AGENT,
    ) -> None:
        self._transport = transport
        self._identity = identity
        self._retry_policy = retry_policy
        self._path_prefix = path_prefix
        self._user_agent = user_agent

    async def execute(self, call: ApiCall, identity: Optional[IdentityProvider] = None) -> Any:
        """
        Send a call, through the retry policy when one is configured.

        Args:
            call: The validated call.
            identity: Overrides the executor's identity for this call only,
                e.g. a caller-supplied token.

        Returns:
            The decoded result, or None for calls without a response body.

        Raises:
            ExpiredTokenError: The caller's token expired; nothing was sent.
            HttpError: Non-2xx response (after retries, if retriable).
            NetworkError: Transport failure (after retries).
            DecodeError: Malformed 2xx body.
        """
        identity = identity or self._identity
        if identity is None:
            raise ValidationError("Access token must not be null")

        content = None
        if call.body is not None and call.body_adapter is not None:
            content = call.body_adapter.dump_json(call.body, exclude_none=True)

        if self._retry_policy is None:
            return await self._send_once(call, identity, content)
        return await with_retry(
            self._send_once, call, identity, content, policy=self._retry_policy
        )

    def _headers(self, call: ApiCall, token: str, has_body: bool) -> dict[str, str]:
        headers = {
            REQUEST_ID: call.request_id,
            "Authorization": f"Bearer {token}",
            "Accept": APPLICATION_JSON,
            "User-Agent": self._user_agent,
        }
        if call.interaction_id:
            headers[INTERACTION_ID] = call.request_id
        if has_body:
            headers["Content-Type"] = APPLICATION_JSON
        return headers

    async def _send_once(
        self, call: ApiCall, identity: IdentityProvider, content: Optional[bytes]
    ) -> Any:
        # Step 1: Identity
        token = await identity.access_token(call.request_id)

        # Step 2: Build
        path = call.render_path(self._path_prefix)
        headers = self._headers(call, token, has_body=content is not None)

        # Step 3: Send
        try:
            response = await self._transport.send(call.method, path, headers, content)
        except NetworkError as e:
            log_exchange(call.method, path, call.request_id, error=str(e))
            raise

        log_exchange(call.method, path, call.request_id, status_code=response.status_code)

        # Step 4: Decode
        if not response.is_success:
            raise error_from_response(response)
        return decode_body(call.response_adapter, response)
