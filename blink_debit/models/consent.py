"""
Consent and quick payment models.

Authorisation flows and flow hints are closed tagged unions keyed on
``type``. Pydantic picks the concrete class from the discriminator when
decoding, and serialises whichever concrete class was built.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union
from uuid import UUID

from pydantic import Field, TypeAdapter

from blink_debit.models.common import Amount, Pcr, TaggedVariant
from blink_debit.models.enums import Bank, ConsentStatus, IdentifierType


@dataclass
class RedirectFlowHint(TaggedVariant):
    bank: Optional[Bank] = None
    type: Literal["redirect"] = "redirect"


@dataclass
class DecoupledFlowHint(TaggedVariant):
    bank: Optional[Bank] = None
    identifier_type: Optional[IdentifierType] = None
    identifier_value: Optional[str] = None
    type: Literal["decoupled"] = "decoupled"


FlowHint = Annotated[Union[RedirectFlowHint, DecoupledFlowHint], Field(discriminator="type")]


@dataclass
class RedirectFlow(TaggedVariant):
    """Customer is redirected to their bank to authorise."""

    bank: Optional[Bank] = None
    redirect_uri: Optional[str] = None
    type: Literal["redirect"] = "redirect"


@dataclass
class DecoupledFlow(TaggedVariant):
    """Customer authorises out of band, e.g. in their banking app."""

    bank: Optional[Bank] = None
    identifier_type: Optional[IdentifierType] = None
    identifier_value: Optional[str] = None
    callback_url: Optional[str] = None
    type: Literal["decoupled"] = "decoupled"


@dataclass
class GatewayFlow(TaggedVariant):
    """Customer picks a bank on the hosted gateway page."""

    redirect_uri: Optional[str] = None
    flow_hint: Optional[FlowHint] = None
    type: Literal["gateway"] = "gateway"


AuthFlowDetail = Annotated[
    Union[RedirectFlow, DecoupledFlow, GatewayFlow], Field(discriminator="type")
]


@dataclass
class AuthFlow:
    detail: Optional[AuthFlowDetail] = None


@dataclass
class SingleConsentRequest:
    """Request body for a single (one-off) payment consent."""

    flow: Optional[AuthFlow] = None
    pcr: Optional[Pcr] = None
    amount: Optional[Amount] = None
    type: Literal["single"] = "single"


@dataclass
class QuickPaymentRequest:
    """Request body for a quick payment (consent and payment in one step)."""

    flow: Optional[AuthFlow] = None
    pcr: Optional[Pcr] = None
    amount: Optional[Amount] = None
    type: Literal["single"] = "single"


@dataclass
class CreateConsentResponse:
    consent_id: UUID
    redirect_uri: Optional[str] = None


@dataclass
class Consent:
    """A consent as returned by the API."""

    consent_id: UUID
    status: ConsentStatus
    creation_timestamp: datetime
    status_updated_timestamp: datetime
    detail: SingleConsentRequest
    accounts: Optional[list[dict[str, Any]]] = None
    payments: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class CreateQuickPaymentResponse:
    quick_payment_id: UUID
    redirect_uri: Optional[str] = None


@dataclass
class QuickPaymentResponse:
    quick_payment_id: UUID
    consent: Consent


SINGLE_CONSENT_REQUEST = TypeAdapter(SingleConsentRequest)
QUICK_PAYMENT_REQUEST = TypeAdapter(QuickPaymentRequest)
CREATE_CONSENT_RESPONSE = TypeAdapter(CreateConsentResponse)
CONSENT = TypeAdapter(Consent)
CREATE_QUICK_PAYMENT_RESPONSE = TypeAdapter(CreateQuickPaymentResponse)
QUICK_PAYMENT_RESPONSE = TypeAdapter(QuickPaymentResponse)
