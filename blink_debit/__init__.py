"""Async Python client for the Blink Debit API."""

from blink_debit.client import BlinkDebitClient
from blink_debit.errors import (
    BlinkDebitError,
    DecodeError,
    ExpiredTokenError,
    HttpError,
    NetworkError,
    ValidationError,
)

__all__ = [
    "BlinkDebitClient",
    "BlinkDebitError",
    "DecodeError",
    "ExpiredTokenError",
    "HttpError",
    "NetworkError",
    "ValidationError",
]
