"""
Typed failures raised by the Blink Debit client.

Every failure says whether the request reached the wire:
  - ValidationError / ExpiredTokenError are raised before anything is sent.
  - HttpError / NetworkError / DecodeError happen after the request was sent.

Only errors flagged ``retriable`` are retried by the retry policy.
"""

from typing import Optional

RETRIABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class BlinkDebitError(Exception):
    """Base exception for all client errors."""

    sent: bool = False
    retriable: bool = False


class ValidationError(BlinkDebitError):
    """The request failed client-side validation and was never sent."""

    def __init__(self, message: str, errors: Optional[list[tuple[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ExpiredTokenError(BlinkDebitError):
    """The caller-supplied access token expired before the call was made."""

    def __init__(self, message: str = "Access token has expired, generate a new one"):
        super().__init__(message)


class HttpError(BlinkDebitError):
    """The API answered with a non-2xx status."""

    sent = True

    def __init__(self, status_code: int, message: str, retry_after: Optional[float] = None):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.retry_after = retry_after
        self.retriable = status_code in RETRIABLE_STATUS_CODES


class NetworkError(BlinkDebitError):
    """The transport failed (timeout, connection reset, DNS)."""

    sent = True
    retriable = True


class DecodeError(BlinkDebitError):
    """A 2xx response body could not be decoded into the expected type."""

    sent = True
