"""Enumerations for the Blink Debit domain model."""

from enum import Enum


class AuthFlowType(str, Enum):
    """How the customer authorises a consent."""

    REDIRECT = "redirect"
    DECOUPLED = "decoupled"
    GATEWAY = "gateway"


class FlowHintType(str, Enum):
    """Steering hint for the gateway flow."""

    REDIRECT = "redirect"
    DECOUPLED = "decoupled"


class RefundType(str, Enum):
    """Supported refund shapes."""

    FULL_REFUND = "full_refund"
    PARTIAL_REFUND = "partial_refund"
    ACCOUNT_NUMBER = "account_number"


class Bank(str, Enum):
    """Banks reachable through the API."""

    ANZ = "ANZ"
    ASB = "ASB"
    BNZ = "BNZ"
    KIWIBANK = "Kiwibank"
    PNZ = "PNZ"
    WESTPAC = "Westpac"


class IdentifierType(str, Enum):
    """Customer identifier used by decoupled flows."""

    PHONE_NUMBER = "phone_number"
    CONSENT_ID = "consent_id"


class Currency(str, Enum):
    NZD = "NZD"


class ConsentStatus(str, Enum):
    """Lifecycle states of a consent."""

    AWAITING_AUTHORISATION = "AwaitingAuthorisation"
    AUTHORISED = "Authorised"
    CONSUMED = "Consumed"
    REJECTED = "Rejected"
    REVOKED = "Revoked"
    FAILED = "Failed"
    GATEWAY_AWAITING_SUBMISSION = "GatewayAwaitingSubmission"
    GATEWAY_TIMED_OUT = "GatewayTimeout"


class RefundStatus(str, Enum):
    """Lifecycle states of a refund."""

    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"
