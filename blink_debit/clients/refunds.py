"""
Refunds API.

POST /refunds        Create a full, partial or account-number refund.
GET  /refunds/{id}   Retrieve a refund.

Refund calls carry the request-id header only, no interaction ID.
"""

from typing import Optional, Union
from uuid import UUID

from blink_debit.engine.executor import ApiCall, ApiExecutor
from blink_debit.engine.identity import caller_identity, resolve_correlation_id
from blink_debit.engine.validation import (
    build_refund_request,
    validate_id,
    validate_refund_request,
)
from blink_debit.models.enums import RefundType
from blink_debit.models.refund import (
    REFUND,
    REFUND_DETAIL,
    REFUND_RESPONSE,
    Refund,
    RefundDetail,
    RefundResponse,
)

REFUNDS_PATH = "/refunds"


class RefundsApiClient:
    def __init__(self, executor: ApiExecutor) -> None:
        self._executor = executor

    async def create_refund(
        self,
        request: Optional[RefundDetail],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> RefundResponse:
        """
        Create a refund.

        Raises:
            ValidationError: The refund is invalid; nothing was sent.
        """
        validated = validate_refund_request(request)
        call = ApiCall(
            method="POST",
            path=REFUNDS_PATH,
            request_id=resolve_correlation_id(request_id),
            body=validated,
            body_adapter=REFUND_DETAIL,
            response_adapter=REFUND_RESPONSE,
            interaction_id=False,
        )
        return await self._executor.execute(call, caller_identity(access_token))

    async def create_refund_from_fields(
        self,
        refund_type: Optional[RefundType],
        payment_id: Optional[Union[UUID, str]],
        redirect_uri: Optional[str] = None,
        particulars: Optional[str] = None,
        code: Optional[str] = None,
        reference: Optional[str] = None,
        total: Optional[str] = None,
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> RefundResponse:
        """
        Create a refund from flat fields.

        Account-number refunds only need ``payment_id``. Full and partial
        refunds also need ``redirect_uri`` and the PCR; partial refunds need
        ``total`` (NZD).
        """
        request = build_refund_request(
            refund_type,
            payment_id,
            redirect_uri=redirect_uri,
            particulars=particulars,
            code=code,
            reference=reference,
            total=total,
        )
        return await self.create_refund(request, request_id, access_token)

    async def get_refund(
        self,
        refund_id: Optional[Union[UUID, str]],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Refund:
        refund_id = validate_id(refund_id, "Refund ID")
        call = ApiCall(
            method="GET",
            path=REFUNDS_PATH + "/{refund_id}",
            request_id=resolve_correlation_id(request_id),
            path_params={"refund_id": refund_id},
            response_adapter=REFUND,
            interaction_id=False,
        )
        return await self._executor.execute(call, caller_identity(access_token))
