"""
Client-side request validation.

Runs before anything is sent. Checks fail fast in a fixed order so the
first violation always produces the same message:

  1. Top-level request or identifier is present
  2. Nested objects are present (flow, flow detail, PCR, amount)
  3. Flow-specific rules (redirect, decoupled, gateway and its hint)
  4. PCR: particulars present, then the 12-character limit
  5. Amount: currency present
  6. Schema sweep over the declared field constraints

Step 6 is the only one that reports every violation at once. It also
returns the normalised request (e.g. string payment IDs become UUIDs),
which is what gets sent.
"""

import dataclasses
import logging
from decimal import Decimal, InvalidOperation
from typing import Never, NoReturn, Optional, Union
from uuid import UUID

import pydantic
from pydantic import TypeAdapter

from blink_debit.errors import ValidationError
from blink_debit.models.common import PCR_MAX_LENGTH, Amount, Pcr
from blink_debit.models.consent import (
    QUICK_PAYMENT_REQUEST,
    SINGLE_CONSENT_REQUEST,
    AuthFlow,
    DecoupledFlow,
    DecoupledFlowHint,
    GatewayFlow,
    QuickPaymentRequest,
    RedirectFlow,
    RedirectFlowHint,
    SingleConsentRequest,
)
from blink_debit.models.enums import (
    AuthFlowType,
    Bank,
    Currency,
    FlowHintType,
    IdentifierType,
    RefundType,
)
from blink_debit.models.refund import (
    REFUND_DETAIL,
    AccountNumberRefundRequest,
    FullRefundRequest,
    PartialRefundRequest,
    RefundDetail,
)

logger = logging.getLogger("blink_debit.validation")

# Simplified entry points truncate PCR input to this length before validating
PCR_TRUNCATE_LENGTH = 20

ConsentLike = Union[SingleConsentRequest, QuickPaymentRequest]


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _unsupported(value: Never, kind: str) -> NoReturn:
    raise ValidationError(f"Unsupported {kind}: {type(value).__name__}")


def validate_id(value: Optional[Union[UUID, str]], label: str) -> str:
    """Check a path identifier and return it as a string."""
    if value is None or _blank(str(value)):
        raise ValidationError(f"{label} must not be null")
    return str(value)


def validate_consent_request(request: Optional[SingleConsentRequest]) -> SingleConsentRequest:
    if request is None:
        raise ValidationError("Consent request must not be null")
    _validate_consent_body(request)
    return _sweep(SINGLE_CONSENT_REQUEST, request, "single consent")


def validate_quick_payment_request(request: Optional[QuickPaymentRequest]) -> QuickPaymentRequest:
    if request is None:
        raise ValidationError("Quick payment request must not be null")
    _validate_consent_body(request)
    return _sweep(QUICK_PAYMENT_REQUEST, request, "quick payment")


def validate_refund_request(request: Optional[RefundDetail]) -> RefundDetail:
    """
    Validate any refund variant.

    Raises:
        ValidationError: On the first failing rule, or with every schema
            violation when only the final sweep fails.
    """
    if request is None:
        raise ValidationError("Refund request must not be null")

    _validate_refund_body(request)
    return _sweep(REFUND_DETAIL, request, "refund")


def _validate_refund_body(request) -> None:
    if getattr(request, "payment_id", None) is None:
        raise ValidationError("Payment ID must not be null")

    match request:
        case AccountNumberRefundRequest():
            pass
        case FullRefundRequest():
            _validate_pcr(request.pcr)
        case PartialRefundRequest():
            if request.pcr is None:
                raise ValidationError("PCR must not be null")
            if request.amount is None:
                raise ValidationError("Amount must not be null")
            _validate_pcr(request.pcr)
            _validate_amount(request.amount)
        case _:
            _unsupported(request, "refund type")


def _validate_consent_body(request: ConsentLike) -> None:
    flow = request.flow
    if flow is None:
        raise ValidationError("Flow must not be null")
    if flow.detail is None:
        raise ValidationError("Authorisation flow detail must not be null")
    if request.pcr is None:
        raise ValidationError("PCR must not be null")
    if request.amount is None:
        raise ValidationError("Amount must not be null")

    _validate_flow_detail(flow.detail)
    _validate_pcr(request.pcr)
    _validate_amount(request.amount)


def _validate_flow_detail(detail) -> None:
    match detail:
        case RedirectFlow():
            if detail.bank is None:
                raise ValidationError("Bank must not be null")
            if _blank(detail.redirect_uri):
                raise ValidationError("Redirect URI must not be blank")
        case DecoupledFlow():
            if detail.bank is None:
                raise ValidationError("Bank must not be null")
            if detail.identifier_type is None:
                raise ValidationError("Identifier type must not be null")
            if _blank(detail.identifier_value):
                raise ValidationError("Identifier value must not be blank")
            if _blank(detail.callback_url):
                raise ValidationError("Callback/webhook URL must not be blank")
        case GatewayFlow():
            if _blank(detail.redirect_uri):
                raise ValidationError("Redirect URI must not be blank")
            if detail.flow_hint is not None:
                _validate_flow_hint(detail.flow_hint)
        case _:
            _unsupported(detail, "authorisation flow detail")


def _validate_flow_hint(hint) -> None:
    if getattr(hint, "bank", None) is None:
        raise ValidationError("Bank must not be null")
    if getattr(hint, "type", None) is None:
        raise ValidationError("Flow hint type must not be null")

    match hint:
        case RedirectFlowHint():
            pass
        case DecoupledFlowHint():
            if hint.identifier_type is None:
                raise ValidationError("Identifier type must not be null")
            if _blank(hint.identifier_value):
                raise ValidationError("Identifier value must not be blank")
        case _:
            _unsupported(hint, "flow hint")


def _validate_pcr(pcr: Optional[Pcr]) -> None:
    if pcr is None:
        raise ValidationError("PCR must not be null")

    if _blank(pcr.particulars):
        raise ValidationError("Particulars must have at least 1 character")

    if any(
        value is not None and len(value) > PCR_MAX_LENGTH
        for value in (pcr.particulars, pcr.code, pcr.reference)
    ):
        raise ValidationError(f"PCR must not exceed {PCR_MAX_LENGTH} characters")


def _validate_amount(amount: Optional[Amount]) -> None:
    if amount is None:
        raise ValidationError("Amount must not be null")
    if amount.currency is None:
        raise ValidationError("Currency must not be null")


def _sweep(adapter: TypeAdapter, request, kind: str):
    try:
        return adapter.validate_python(dataclasses.asdict(request))
    except pydantic.ValidationError as exc:
        errors = [
            (".".join(str(part) for part in err["loc"]), err["msg"]) for err in exc.errors()
        ]
        joined = ", ".join(f"{name}: {message}" for name, message in errors)
        logger.error("Validation failed for %s request: %s", kind, joined)
        raise ValidationError(f"Validation failed for {kind} request: {joined}", errors) from None


# Simplified entry points


def parse_total(total: Optional[str]) -> Amount:
    """Wrap a caller-supplied total into an NZD amount."""
    if _blank(total):
        raise ValidationError("Total is not a valid amount")
    text = str(total).strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValidationError("Total is not a valid amount") from None
    if not value.is_finite():
        raise ValidationError("Total is not a valid amount")
    return Amount(currency=Currency.NZD, total=text)


def _truncate(value: Optional[str]) -> Optional[str]:
    return value[:PCR_TRUNCATE_LENGTH] if value is not None else None


def build_flow_hint(
    flow_hint_type: Optional[FlowHintType],
    bank: Optional[Bank],
    identifier_type: Optional[IdentifierType] = None,
    identifier_value: Optional[str] = None,
):
    if flow_hint_type is None:
        return None
    try:
        hint_type = FlowHintType(flow_hint_type)
    except ValueError:
        raise ValidationError(f"Unsupported flow hint type: {flow_hint_type}") from None

    match hint_type:
        case FlowHintType.REDIRECT:
            return RedirectFlowHint(bank=bank)
        case FlowHintType.DECOUPLED:
            return DecoupledFlowHint(
                bank=bank,
                identifier_type=identifier_type,
                identifier_value=identifier_value,
            )
        case _:
            _unsupported(hint_type, "flow hint type")


def build_consent_request(
    flow_type: Optional[AuthFlowType],
    bank: Optional[Bank],
    redirect_uri: Optional[str],
    particulars: Optional[str],
    code: Optional[str],
    reference: Optional[str],
    total: Optional[str],
    flow_hint_type: Optional[FlowHintType] = None,
    identifier_type: Optional[IdentifierType] = None,
    identifier_value: Optional[str] = None,
    callback_url: Optional[str] = None,
    model: type[ConsentLike] = SingleConsentRequest,
) -> ConsentLike:
    """
    Build a consent (or quick payment) request from flat fields.

    Runs the fail-fast rules (flow, PCR, currency) before parsing ``total``,
    so a bad total never hides an earlier violation. The schema sweep is
    left to ``validate_consent_request`` / ``validate_quick_payment_request``.
    """
    if flow_type is None:
        raise ValidationError("Authorisation flow type must not be null")
    try:
        auth_flow_type = AuthFlowType(flow_type)
    except ValueError:
        raise ValidationError(f"Unsupported authorisation flow type: {flow_type}") from None

    match auth_flow_type:
        case AuthFlowType.REDIRECT:
            detail = RedirectFlow(bank=bank, redirect_uri=redirect_uri)
        case AuthFlowType.DECOUPLED:
            detail = DecoupledFlow(
                bank=bank,
                identifier_type=identifier_type,
                identifier_value=identifier_value,
                callback_url=callback_url,
            )
        case AuthFlowType.GATEWAY:
            detail = GatewayFlow(
                redirect_uri=redirect_uri,
                flow_hint=build_flow_hint(flow_hint_type, bank, identifier_type, identifier_value),
            )
        case _:
            _unsupported(auth_flow_type, "authorisation flow type")

    request = model(
        flow=AuthFlow(detail=detail),
        pcr=Pcr(
            particulars=_truncate(particulars),
            code=_truncate(code),
            reference=_truncate(reference),
        ),
        amount=Amount(currency=Currency.NZD),
    )
    _validate_consent_body(request)
    request.amount = parse_total(total)
    return request


def build_refund_request(
    refund_type: Optional[RefundType],
    payment_id: Optional[Union[UUID, str]],
    redirect_uri: Optional[str] = None,
    particulars: Optional[str] = None,
    code: Optional[str] = None,
    reference: Optional[str] = None,
    total: Optional[str] = None,
):
    """Build a refund variant from flat fields, checking PCR before the total."""
    if refund_type is None:
        raise ValidationError("Refund type must not be null")
    if payment_id is None:
        raise ValidationError("Payment ID must not be null")
    try:
        kind = RefundType(refund_type)
    except ValueError:
        raise ValidationError(f"Unsupported refund type: {refund_type}") from None

    match kind:
        case RefundType.ACCOUNT_NUMBER:
            return AccountNumberRefundRequest(payment_id=payment_id)
        case RefundType.FULL_REFUND:
            if _blank(redirect_uri):
                raise ValidationError("Redirect URI must not be blank")
            request = FullRefundRequest(
                payment_id=payment_id,
                pcr=Pcr(particulars=particulars, code=code, reference=reference),
                consent_redirect=redirect_uri,
            )
            _validate_refund_body(request)
            return request
        case RefundType.PARTIAL_REFUND:
            if _blank(redirect_uri):
                raise ValidationError("Redirect URI must not be blank")
            request = PartialRefundRequest(
                payment_id=payment_id,
                pcr=Pcr(particulars=particulars, code=code, reference=reference),
                amount=Amount(currency=Currency.NZD),
                consent_redirect=redirect_uri,
            )
            _validate_refund_body(request)
            request.amount = parse_total(total)
            return request
        case _:
            _unsupported(kind, "refund type")
