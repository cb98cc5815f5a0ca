"""
Per-call identity: correlation IDs and bearer tokens.

Two ways to authorise a call:
  - CallerTokenIdentity: the caller owns the token. Its ``exp`` claim is
    checked before every attempt and an expired token fails with
    ExpiredTokenError without anything being sent.
  - ClientCredentialsIdentity: a stored client credential is exchanged for
    a fresh token on every attempt. Nothing is cached.

Both are request-scoped values; neither keeps state between calls.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Optional

import jwt

from blink_debit.errors import ExpiredTokenError, ValidationError
from blink_debit.providers.base import TokenSource

logger = logging.getLogger("blink_debit.identity")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def resolve_correlation_id(request_id: Optional[str] = None) -> str:
    """Use the caller's request ID when given, otherwise generate one."""
    if request_id and request_id.strip():
        return request_id
    return str(uuid.uuid4())


class IdentityProvider(ABC):
    @abstractmethod
    async def access_token(self, request_id: str) -> str:
        """Return the bearer token to send with one attempt of a call."""
        ...


class CallerTokenIdentity(IdentityProvider):
    """Authorise with a token the caller already holds."""

    def __init__(self, token: Optional[str], clock: Callable[[], datetime] = _utcnow) -> None:
        if token is None or not token.strip():
            raise ValidationError("Access token must not be blank")
        self._token = token
        self._clock = clock

    @property
    def expires_at(self) -> datetime:
        try:
            claims = jwt.decode(
                self._token,
                options={"verify_signature": False, "verify_exp": False},
            )
        except jwt.InvalidTokenError:
            raise ValidationError("Access token is not a valid JWT") from None

        exp = claims.get("exp")
        if exp is None:
            raise ValidationError("Access token has no expiry claim")
        return datetime.fromtimestamp(int(exp), tz=timezone.utc)

    def check(self) -> None:
        expires_at = self.expires_at
        if expires_at < self._clock():
            logger.warning("Access token expired at %s", expires_at.isoformat())
            raise ExpiredTokenError()

    async def access_token(self, request_id: str) -> str:
        self.check()
        return self._token


class ClientCredentialsIdentity(IdentityProvider):
    """Mint a fresh token from stored client credentials on every attempt."""

    def __init__(self, token_source: TokenSource) -> None:
        self._token_source = token_source

    async def access_token(self, request_id: str) -> str:
        return await self._token_source.fetch_token(request_id)


def caller_identity(access_token: Optional[str]) -> Optional[IdentityProvider]:
    """Identity for a call made with the caller's own token, if one was given."""
    if access_token is None:
        return None
    return CallerTokenIdentity(access_token)
