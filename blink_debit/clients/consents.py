"""
Single consents API.

POST   /single-consents        Create a consent for the customer to authorise.
GET    /single-consents/{id}   Retrieve a consent and its current status.
DELETE /single-consents/{id}   Revoke a consent.
"""

from typing import Optional, Union
from uuid import UUID

from blink_debit.engine.executor import ApiCall, ApiExecutor
from blink_debit.engine.identity import caller_identity, resolve_correlation_id
from blink_debit.engine.validation import (
    build_consent_request,
    validate_consent_request,
    validate_id,
)
from blink_debit.models.consent import (
    CONSENT,
    CREATE_CONSENT_RESPONSE,
    SINGLE_CONSENT_REQUEST,
    Consent,
    CreateConsentResponse,
    SingleConsentRequest,
)
from blink_debit.models.enums import AuthFlowType, Bank, FlowHintType, IdentifierType

SINGLE_CONSENTS_PATH = "/single-consents"


class SingleConsentsApiClient:
    def __init__(self, executor: ApiExecutor) -> None:
        self._executor = executor

    async def create_single_consent(
        self,
        request: Optional[SingleConsentRequest],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> CreateConsentResponse:
        """
        Create a single payment consent that goes to the customer for approval.

        A successful response does not mean the consent is authorised; poll
        ``get_single_consent`` with the returned ID for its status.

        Args:
            request: The consent request.
            request_id: Optional correlation ID, generated when blank.
            access_token: Optional caller-owned bearer token. When omitted
                the client's stored credentials are used.

        Raises:
            ValidationError: The request is invalid; nothing was sent.
            ExpiredTokenError: ``access_token`` has expired; nothing was sent.
        """
        validated = validate_consent_request(request)
        call = ApiCall(
            method="POST",
            path=SINGLE_CONSENTS_PATH,
            request_id=resolve_correlation_id(request_id),
            body=validated,
            body_adapter=SINGLE_CONSENT_REQUEST,
            response_adapter=CREATE_CONSENT_RESPONSE,
        )
        return await self._executor.execute(call, caller_identity(access_token))

    async def create_single_consent_from_fields(
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
    ) -> CreateConsentResponse:
        """Create a consent from flat fields, in NZD."""
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
        )
        return await self.create_single_consent(request, request_id, access_token)

    async def get_single_consent(
        self,
        consent_id: Optional[Union[UUID, str]],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> Consent:
        consent_id = validate_id(consent_id, "Consent ID")
        call = ApiCall(
            method="GET",
            path=SINGLE_CONSENTS_PATH + "/{consent_id}",
            request_id=resolve_correlation_id(request_id),
            path_params={"consent_id": consent_id},
            response_adapter=CONSENT,
        )
        return await self._executor.execute(call, caller_identity(access_token))

    async def revoke_single_consent(
        self,
        consent_id: Optional[Union[UUID, str]],
        request_id: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> None:
        consent_id = validate_id(consent_id, "Consent ID")
        call = ApiCall(
            method="DELETE",
            path=SINGLE_CONSENTS_PATH + "/{consent_id}",
            request_id=resolve_correlation_id(request_id),
            path_params={"consent_id": consent_id},
        )
        await self._executor.execute(call, caller_identity(access_token))
