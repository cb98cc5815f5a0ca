"""Tests for correlation IDs and per-call bearer tokens."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from blink_debit.engine.identity import (
    CallerTokenIdentity,
    ClientCredentialsIdentity,
    caller_identity,
    resolve_correlation_id,
)
from blink_debit.errors import ExpiredTokenError, ValidationError

from conftest import CountingTokenSource, make_token


class TestCorrelationId:
    def test_caller_value_is_kept(self):
        assert resolve_correlation_id("my-request") == "my-request"

    @pytest.mark.parametrize("request_id", [None, "", "   "])
    def test_generated_when_missing(self, request_id):
        generated = resolve_correlation_id(request_id)
        assert uuid.UUID(generated)

    def test_generated_values_differ(self):
        assert resolve_correlation_id() != resolve_correlation_id()


class TestCallerTokenIdentity:
    @pytest.mark.asyncio
    async def test_valid_token_returned(self):
        token = make_token()
        assert await CallerTokenIdentity(token).access_token("req-1") == token

    @pytest.mark.asyncio
    async def test_expired_token(self):
        identity = CallerTokenIdentity(make_token(expires_in=timedelta(minutes=-5)))
        with pytest.raises(ExpiredTokenError) as exc_info:
            await identity.access_token("req-1")
        assert str(exc_info.value) == "Access token has expired, generate a new one"
        assert exc_info.value.sent is False

    @pytest.mark.asyncio
    async def test_expiry_checked_on_every_attempt(self):
        now = datetime.now(timezone.utc)
        clock = [now]
        identity = CallerTokenIdentity(
            make_token(expires_in=timedelta(seconds=30)), clock=lambda: clock[0]
        )

        await identity.access_token("req-1")
        clock[0] = now + timedelta(minutes=5)
        with pytest.raises(ExpiredTokenError):
            await identity.access_token("req-1")

    def test_expires_at_reads_claim(self):
        identity = CallerTokenIdentity(make_token(expires_in=timedelta(hours=2)))
        remaining = identity.expires_at - datetime.now(timezone.utc)
        assert timedelta(minutes=119) < remaining <= timedelta(hours=2)

    @pytest.mark.parametrize("token", [None, "", "  "])
    def test_blank_token(self, token):
        with pytest.raises(ValidationError, match="Access token must not be blank"):
            CallerTokenIdentity(token)

    def test_malformed_token(self):
        with pytest.raises(ValidationError, match="not a valid JWT"):
            CallerTokenIdentity("not.a.jwt").check()

    def test_token_without_expiry(self):
        with pytest.raises(ValidationError, match="no expiry claim"):
            CallerTokenIdentity(make_token(expires_in=None)).check()

    def test_caller_identity_helper(self):
        assert caller_identity(None) is None
        assert isinstance(caller_identity(make_token()), CallerTokenIdentity)


class TestClientCredentialsIdentity:
    @pytest.mark.asyncio
    async def test_fresh_token_per_attempt(self):
        source = CountingTokenSource()
        identity = ClientCredentialsIdentity(source)

        first = await identity.access_token("req-1")
        second = await identity.access_token("req-1")

        assert (first, second) == ("minted-1", "minted-2")
        assert source.request_ids == ["req-1", "req-1"]
