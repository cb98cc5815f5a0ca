"""
Blink Debit client: one entry point wiring transport, identity and retry.

    async with BlinkDebitClient() as client:
        response = await client.single_consents.create_single_consent(request)

Configuration comes from ``blink_debit.config.settings`` (``BLINKPAY_*``
environment variables) unless a ``Settings`` instance is passed in.
"""

import logging
from typing import Optional

from blink_debit.clients import QuickPaymentsApiClient, RefundsApiClient, SingleConsentsApiClient
from blink_debit.config import Settings, settings as default_settings
from blink_debit.engine.executor import ApiExecutor
from blink_debit.engine.identity import ClientCredentialsIdentity, IdentityProvider
from blink_debit.engine.retry import RetryPolicy
from blink_debit.providers.base import Transport
from blink_debit.providers.httpx_transport import HttpxTransport
from blink_debit.providers.oauth import ClientCredentialsTokenSource

logger = logging.getLogger("blink_debit.client")


class BlinkDebitClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[Transport] = None,
        identity: Optional[IdentityProvider] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        """
        Args:
            settings: Client configuration, defaults to the environment.
            transport: Defaults to an ``HttpxTransport`` on ``settings.debit_url``.
            identity: Defaults to client-credentials tokens when
                ``settings.client_id`` is set. Without either, every call
                must pass its own ``access_token``.
            retry_policy: Defaults to the settings' retry bounds, or no
                retries when ``settings.retry_enabled`` is false.
        """
        self.settings = settings or default_settings
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(
            self.settings.debit_url, self.settings.timeout_seconds
        )

        if identity is None and self.settings.client_id:
            identity = ClientCredentialsIdentity(
                ClientCredentialsTokenSource(
                    self._transport,
                    self.settings.client_id,
                    self.settings.client_secret,
                    token_path=self.settings.token_path,
                )
            )

        if retry_policy is None and self.settings.retry_enabled:
            retry_policy = RetryPolicy.from_settings(self.settings)

        executor = ApiExecutor(
            self._transport,
            identity=identity,
            retry_policy=retry_policy,
            path_prefix=self.settings.api_path_prefix,
        )
        self.single_consents = SingleConsentsApiClient(executor)
        self.quick_payments = QuickPaymentsApiClient(executor)
        self.refunds = RefundsApiClient(executor)

        logger.debug(
            "Blink Debit client for %s (retries=%s)",
            self.settings.debit_url,
            retry_policy.max_retries if retry_policy else 0,
        )

    async def aclose(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    async def __aenter__(self) -> "BlinkDebitClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
