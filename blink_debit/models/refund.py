"""Refund request variants and refund results."""

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import Field, TypeAdapter

from blink_debit.models.common import Amount, Pcr, TaggedVariant
from blink_debit.models.enums import RefundStatus


@dataclass
class AccountNumberRefundRequest(TaggedVariant):
    """Asks for the payer's account number so the merchant can refund manually."""

    payment_id: Optional[UUID] = None
    type: Literal["account_number"] = "account_number"


@dataclass
class FullRefundRequest(TaggedVariant):
    payment_id: Optional[UUID] = None
    pcr: Optional[Pcr] = None
    consent_redirect: Optional[str] = None  # Where the merchant authorises the refund payment
    type: Literal["full_refund"] = "full_refund"


@dataclass
class PartialRefundRequest(TaggedVariant):
    payment_id: Optional[UUID] = None
    pcr: Optional[Pcr] = None
    amount: Optional[Amount] = None
    consent_redirect: Optional[str] = None
    type: Literal["partial_refund"] = "partial_refund"


RefundDetail = Annotated[
    Union[AccountNumberRefundRequest, FullRefundRequest, PartialRefundRequest],
    Field(discriminator="type"),
]


@dataclass
class RefundResponse:
    refund_id: UUID


@dataclass
class Refund:
    """A refund as returned by the API."""

    refund_id: UUID
    status: RefundStatus
    creation_timestamp: datetime
    status_updated_timestamp: datetime
    detail: RefundDetail
    account_number: Optional[str] = None


REFUND_DETAIL = TypeAdapter(RefundDetail)
REFUND_RESPONSE = TypeAdapter(RefundResponse)
REFUND = TypeAdapter(Refund)
