"""
Abstract collaborators the client core talks to.

The core never opens sockets or mints tokens itself. It hands a fully built
request to a ``Transport`` and asks a ``TokenSource`` for bearer tokens.
``HttpxTransport`` and ``ClientCredentialsTokenSource`` are the production
implementations; tests substitute their own.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TransportResponse:
    """Raw HTTP response handed back by a transport."""

    status_code: int
    content: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class Transport(ABC):
    """Sends one HTTP request and returns status, headers and body."""

    @abstractmethod
    async def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        content: Optional[bytes] = None,
    ) -> TransportResponse:
        """
        Send a request relative to the transport's base URL.

        Implementations must be safe to share between concurrent calls.

        Raises:
            NetworkError: On timeouts, connection failures and other
                transport-level errors. HTTP error statuses are returned,
                not raised.
        """
        ...


class TokenSource(ABC):
    """Issues short-lived bearer tokens from a stored credential."""

    @abstractmethod
    async def fetch_token(self, request_id: str) -> str:
        """
        Return a fresh access token.

        Raises:
            HttpError: The token endpoint rejected the credential.
            NetworkError: The token endpoint could not be reached.
        """
        ...
