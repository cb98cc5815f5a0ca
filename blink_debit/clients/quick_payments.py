"""
Quick payments API: consent and payment in one step.

POST   /quick-payments        Create a quick payment.
GET    /quick-payments/{id}   Retrieve a quick payment with its consent.
DELETE /quick-payments/{id}   Revoke a quick payment.
"""

from typing import Optional, Union
from uuid import UUID

from blink_debit.engine.executor import ApiCall, ApiExecutor
from blink_debit.engine.identity import caller_identity, resolve_correlation_id
from blink_debit.engine.validation import (
    build_consent_request,
    validate_id,
    validate_quick_payment_request,
)
from blink_debit.models.consent import (
    CREATE_QUICK_PAYMENT_RESPONSE,
    QUICK_PAYMENT_REQUEST,
    QUICK_PAYMENT_RESPONSE,
    CreateQuickPaymentResponse,
    QuickPaymentRequest,
    QuickPaymentResponse,
)
from blink_debit.models.enums import AuthFlowType, Bank, FlowHintType, IdentifierType

QUICK_PAYMENTS_PATH = "/quick-payments"


class QuickPaymentsApiClient:
    def __init__(self, executor: ApiExecutor) -> None:
        self._executor = executor

    async def create_quick_payment(
        self,
        request: Optional[QuickPaymentRequest],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> CreateQuickPaymentResponse:
        validated = validate_quick_payment_request(request)
        call = ApiCall(
            method="POST",
            path=QUICK_PAYMENTS_PATH,
            request_id=resolve_correlation_id(request_id),
            body=validated,
            body_adapter=QUICK_PAYMENT_REQUEST,
            response_adapter=CREATE_QUICK_PAYMENT_RESPONSE,
        )
        return await self._executor.execute(call, caller_identity(access_token))

    async def create_quick_payment_from_fields(
        self,
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
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> CreateQuickPaymentResponse:
        request = build_consent_request(
            flow_type,
            bank,
            redirect_uri,
            particulars,
            code,
            reference,
            total,
            flow_hint_type=flow_hint_type,
            identifier_type=identifier_type,
            identifier_value=identifier_value,
            callback_url=callback_url,
            model=QuickPaymentRequest,
        )
        return await self.create_quick_payment(request, request_id, access_token)

    async def get_quick_payment(
        self,
        quick_payment_id: Optional[Union[UUID, str]],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> QuickPaymentResponse:
        quick_payment_id = validate_id(quick_payment_id, "Quick payment ID")
        call = ApiCall(
            method="GET",
            path=QUICK_PAYMENTS_PATH + "/{quick_payment_id}",
            request_id=resolve_correlation_id(request_id),
            path_params={"quick_payment_id": quick_payment_id},
            response_adapter=QUICK_PAYMENT_RESPONSE,
        )
        return await self._executor.execute(call, caller_identity(access_token))

    async def revoke_quick_payment(
        self,
        quick_payment_id: Optional[Union[UUID, str]],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> None:
        quick_payment_id = validate_id(quick_payment_id, "Quick payment ID")
        call = ApiCall(
            method="DELETE",
            path=QUICK_PAYMENTS_PATH + "/{quick_payment_id}",
            request_id=resolve_correlation_id(request_id),
            path_params={"quick_payment_id": quick_payment_id},
        )
        await self._executor.execute(call, caller_identity(access_token))
