"""Shared test fixtures."""

import json
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

import jwt
import pytest

from blink_debit.engine.executor import ApiExecutor
from blink_debit.engine.identity import IdentityProvider
from blink_debit.engine.retry import RetryPolicy
from blink_debit.providers.base import TokenSource, Transport, TransportResponse

JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"
REDIRECT_URI = "https://www.blinkpay.co.nz/sample-merchant-return-page"


def make_token(expires_in: timedelta = timedelta(hours=1), **claims: Any) -> str:
    payload = {"sub": "merchant", **claims}
    if expires_in is not None:
        payload["exp"] = int((datetime.now(timezone.utc) + expires_in).timestamp())
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


def json_response(status_code: int, body: Any = None, headers: Optional[dict] = None) -> TransportResponse:
    content = json.dumps(body).encode() if body is not None else b""
    return TransportResponse(status_code=status_code, content=content, headers=headers or {})


@dataclass
class SentRequest:
    method: str
    path: str
    headers: dict[str, str]
    content: Optional[bytes]

    def json(self) -> Any:
        return json.loads(self.content) if self.content else None


class FakeTransport(Transport):
    """Plays back scripted responses (or raises scripted errors) in order."""

    def __init__(self, *outcomes: Union[TransportResponse, Exception]) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[SentRequest] = []

    async def send(self, method, path, headers, content=None):
        self.calls.append(SentRequest(method, path, dict(headers), content))
        if not self.outcomes:
            raise AssertionError(f"Unexpected request: {method} {path}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class StaticIdentity(IdentityProvider):
    def __init__(self, token: str = "test-token") -> None:
        self.token = token
        self.request_ids: list[str] = []

    async def access_token(self, request_id: str) -> str:
        self.request_ids.append(request_id)
        return self.token


class CountingTokenSource(TokenSource):
    """Mints a distinct token per call."""

    def __init__(self) -> None:
        self.request_ids: list[str] = []

    async def fetch_token(self, request_id: str) -> str:
        self.request_ids.append(request_id)
        return f"minted-{len(self.request_ids)}"


FAST_RETRY = RetryPolicy(max_retries=2, base_delay=0.0, max_delay=0.0)


@pytest.fixture
def identity():
    return StaticIdentity()


@pytest.fixture
def make_executor(identity):
    def _make(transport: Transport, retry_policy: Optional[RetryPolicy] = None, **kwargs) -> ApiExecutor:
        kwargs.setdefault("identity", identity)
        return ApiExecutor(transport, retry_policy=retry_policy, **kwargs)

    return _make
