"""
OAuth2 client-credentials token source.

Exchanges the merchant's client ID and secret for a short-lived bearer
token. A new token is requested on every call; there is no cache.
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import TypeAdapter

from blink_debit.engine.executor import (
    APPLICATION_JSON,
    REQUEST_ID,
    USER_AGENT,
    decode_body,
    error_from_response,
)
from blink_debit.errors import ValidationError
from blink_debit.providers.base import TokenSource, Transport

logger = logging.getLogger("blink_debit.oauth")

CLIENT_CREDENTIALS = "client_credentials"


@dataclass
class AccessTokenResponse:
    access_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    scope: Optional[str] = None


ACCESS_TOKEN_RESPONSE = TypeAdapter(AccessTokenResponse)


class ClientCredentialsTokenSource(TokenSource):
    def __init__(
        self,
        transport: Transport,
        client_id: str,
        client_secret: str,
        token_path: str = "/oauth2/token",
    ) -> None:
        self._transport = transport
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_path = token_path

    async def fetch_token(self, request_id: str) -> str:
        if not self._client_id or not self._client_secret:
            raise ValidationError("Client ID and client secret must be configured")

        body = json.dumps(
            {
                "client_id": self._client_id,
                "client_secret": self._client_secret,
                "grant_type": CLIENT_CREDENTIALS,
            }
        ).encode("utf-8")
        headers = {
            REQUEST_ID: request_id,
            "Accept": APPLICATION_JSON,
            "Content-Type": APPLICATION_JSON,
            "User-Agent": USER_AGENT,
        }

        response = await self._transport.send("POST", self._token_path, headers, body)
        if not response.is_success:
            logger.error("Token request %s failed with %d", request_id, response.status_code)
            raise error_from_response(response)

        token: AccessTokenResponse = decode_body(ACCESS_TOKEN_RESPONSE, response)
        logger.debug("Issued %s token for request %s", token.token_type, request_id)
        return token.access_token
