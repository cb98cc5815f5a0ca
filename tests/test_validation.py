"""Tests for client-side request validation."""

import uuid

import pytest

from blink_debit.engine.validation import (
    build_consent_request,
    build_refund_request,
    parse_total,
    validate_consent_request,
    validate_id,
    validate_quick_payment_request,
    validate_refund_request,
)
from blink_debit.errors import ValidationError
from blink_debit.models import (
    AccountNumberRefundRequest,
    Amount,
    AuthFlow,
    AuthFlowType,
    Bank,
    Currency,
    DecoupledFlow,
    DecoupledFlowHint,
    FlowHintType,
    FullRefundRequest,
    GatewayFlow,
    IdentifierType,
    PartialRefundRequest,
    Pcr,
    QuickPaymentRequest,
    RedirectFlow,
    RedirectFlowHint,
    RefundType,
    SingleConsentRequest,
)

from conftest import REDIRECT_URI


def _pcr(**overrides):
    fields = {"particulars": "particulars", "code": "code", "reference": "reference"}
    fields.update(overrides)
    return Pcr(**fields)


def _amount(total="25.00"):
    return Amount(currency=Currency.NZD, total=total)


def _consent(detail=None, pcr=None, amount=None):
    return SingleConsentRequest(
        flow=AuthFlow(detail=detail or RedirectFlow(bank=Bank.PNZ, redirect_uri=REDIRECT_URI)),
        pcr=pcr or _pcr(),
        amount=amount or _amount(),
    )


def _message(func, *args, **kwargs):
    with pytest.raises(ValidationError) as exc_info:
        func(*args, **kwargs)
    return str(exc_info.value)


class TestRefundValidation:
    def test_null_request(self):
        assert _message(validate_refund_request, None) == "Refund request must not be null"

    @pytest.mark.parametrize(
        "request_cls", [AccountNumberRefundRequest, FullRefundRequest, PartialRefundRequest]
    )
    def test_null_payment_id_for_every_variant(self, request_cls):
        request = request_cls()
        assert _message(validate_refund_request, request) == "Payment ID must not be null"

    def test_account_number_refund_only_needs_payment_id(self):
        payment_id = uuid.uuid4()
        result = validate_refund_request(AccountNumberRefundRequest(payment_id=payment_id))
        assert result == AccountNumberRefundRequest(payment_id=payment_id)

    def test_full_refund_null_pcr(self):
        request = FullRefundRequest(payment_id=uuid.uuid4())
        assert _message(validate_refund_request, request) == "PCR must not be null"

    @pytest.mark.parametrize("particulars", [None, "", "   "])
    def test_blank_particulars(self, particulars):
        request = FullRefundRequest(payment_id=uuid.uuid4(), pcr=_pcr(particulars=particulars))
        assert _message(validate_refund_request, request) == "Particulars must have at least 1 character"

    @pytest.mark.parametrize("field", ["particulars", "code", "reference"])
    def test_pcr_field_too_long(self, field):
        pcr = _pcr(**{field: "x" * 13})
        request = FullRefundRequest(payment_id=uuid.uuid4(), pcr=pcr)
        assert _message(validate_refund_request, request) == "PCR must not exceed 12 characters"

    def test_pcr_at_limit_is_valid(self):
        pcr = Pcr(particulars="x" * 12, code="y" * 12, reference="z" * 12)
        validate_refund_request(FullRefundRequest(payment_id=uuid.uuid4(), pcr=pcr))

    def test_partial_refund_null_amount(self):
        request = PartialRefundRequest(payment_id=uuid.uuid4(), pcr=_pcr())
        assert _message(validate_refund_request, request) == "Amount must not be null"

    def test_partial_refund_null_currency(self):
        request = PartialRefundRequest(
            payment_id=uuid.uuid4(), pcr=_pcr(), amount=Amount(total="1.00")
        )
        assert _message(validate_refund_request, request) == "Currency must not be null"

    def test_unsupported_refund_type(self):
        class Other:
            payment_id = uuid.uuid4()

        assert _message(validate_refund_request, Other()) == "Unsupported refund type: Other"


class TestRefundRuleOrder:
    def test_missing_pcr_reported_before_missing_amount(self):
        request = PartialRefundRequest(payment_id=uuid.uuid4())
        assert _message(validate_refund_request, request) == "PCR must not be null"

    def test_missing_amount_reported_before_pcr_content(self):
        request = PartialRefundRequest(payment_id=uuid.uuid4(), pcr=_pcr(particulars=""))
        assert _message(validate_refund_request, request) == "Amount must not be null"

    def test_particulars_reported_before_length(self):
        request = FullRefundRequest(
            payment_id=uuid.uuid4(), pcr=_pcr(particulars="", code="x" * 20)
        )
        assert _message(validate_refund_request, request) == "Particulars must have at least 1 character"


class TestSchemaSweep:
    def test_all_violations_reported_together(self):
        request = PartialRefundRequest(
            payment_id="not-a-uuid", pcr=_pcr(), amount=_amount(total="abc")
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_refund_request(request)

        error = exc_info.value
        assert error.message.startswith("Validation failed for refund request: ")
        fields = [name for name, _ in error.errors]
        assert len(fields) == 2
        assert any(name.endswith("payment_id") for name in fields)
        assert any(name.endswith("amount.total") for name in fields)

    def test_sweep_normalises_the_request(self):
        payment_id = uuid.uuid4()
        result = validate_refund_request(
            FullRefundRequest(payment_id=str(payment_id), pcr=_pcr())
        )
        assert isinstance(result, FullRefundRequest)
        assert result.payment_id == payment_id

    def test_consent_total_pattern(self):
        message = _message(validate_consent_request, _consent(amount=_amount(total="25")))
        assert message.startswith("Validation failed for single consent request: ")
        assert "amount.total" in message

    def test_consent_missing_total(self):
        request = _consent(amount=Amount(currency=Currency.NZD))
        with pytest.raises(ValidationError) as exc_info:
            validate_consent_request(request)
        assert exc_info.value.errors == [("amount.total", "Input should be a valid string")]

    def test_partial_refund_missing_total(self):
        request = PartialRefundRequest(
            payment_id=uuid.uuid4(), pcr=_pcr(), amount=Amount(currency=Currency.NZD)
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_refund_request(request)
        fields = [name for name, _ in exc_info.value.errors]
        assert len(fields) == 1
        assert fields[0].endswith("amount.total")


class TestConsentValidation:
    def test_null_request(self):
        assert _message(validate_consent_request, None) == "Consent request must not be null"

    def test_null_quick_payment_request(self):
        assert _message(validate_quick_payment_request, None) == "Quick payment request must not be null"

    def test_null_flow(self):
        request = SingleConsentRequest(pcr=_pcr(), amount=_amount())
        assert _message(validate_consent_request, request) == "Flow must not be null"

    def test_null_flow_detail(self):
        request = SingleConsentRequest(flow=AuthFlow(), pcr=_pcr(), amount=_amount())
        assert _message(validate_consent_request, request) == "Authorisation flow detail must not be null"

    def test_null_pcr(self):
        request = _consent()
        request.pcr = None
        assert _message(validate_consent_request, request) == "PCR must not be null"

    def test_null_amount_reported_before_flow_rules(self):
        request = _consent(detail=RedirectFlow(bank=Bank.PNZ, redirect_uri=""))
        request.amount = None
        assert _message(validate_consent_request, request) == "Amount must not be null"

    def test_valid_redirect_consent(self):
        request = _consent()
        assert validate_consent_request(request) == request

    def test_valid_quick_payment(self):
        request = QuickPaymentRequest(
            flow=AuthFlow(detail=GatewayFlow(redirect_uri=REDIRECT_URI)),
            pcr=_pcr(),
            amount=_amount(),
        )
        assert validate_quick_payment_request(request) == request


class TestFlowRules:
    def test_redirect_null_bank(self):
        request = _consent(detail=RedirectFlow(redirect_uri=REDIRECT_URI))
        assert _message(validate_consent_request, request) == "Bank must not be null"

    @pytest.mark.parametrize("redirect_uri", [None, "", "  "])
    def test_redirect_blank_uri(self, redirect_uri):
        request = _consent(detail=RedirectFlow(bank=Bank.PNZ, redirect_uri=redirect_uri))
        assert _message(validate_consent_request, request) == "Redirect URI must not be blank"

    def test_decoupled_rules_in_order(self):
        detail = DecoupledFlow()
        request = _consent(detail=detail)
        assert _message(validate_consent_request, request) == "Bank must not be null"

        detail.bank = Bank.BNZ
        assert _message(validate_consent_request, request) == "Identifier type must not be null"

        detail.identifier_type = IdentifierType.PHONE_NUMBER
        assert _message(validate_consent_request, request) == "Identifier value must not be blank"

        detail.identifier_value = "+64-259531933"
        assert _message(validate_consent_request, request) == "Callback/webhook URL must not be blank"

        detail.callback_url = "https://www.mymerchant.co.nz/callback"
        validate_consent_request(request)

    def test_gateway_blank_redirect_uri(self):
        request = _consent(detail=GatewayFlow(redirect_uri=" "))
        assert _message(validate_consent_request, request) == "Redirect URI must not be blank"

    def test_gateway_without_hint(self):
        validate_consent_request(_consent(detail=GatewayFlow(redirect_uri=REDIRECT_URI)))

    def test_gateway_hint_without_bank(self):
        detail = GatewayFlow(redirect_uri=REDIRECT_URI, flow_hint=RedirectFlowHint())
        assert _message(validate_consent_request, _consent(detail=detail)) == "Bank must not be null"

    def test_gateway_hint_without_type(self):
        hint = RedirectFlowHint(bank=Bank.PNZ)
        hint.type = None
        detail = GatewayFlow(redirect_uri=REDIRECT_URI, flow_hint=hint)
        assert _message(validate_consent_request, _consent(detail=detail)) == "Flow hint type must not be null"

    def test_gateway_hint_bank_checked_before_type(self):
        hint = RedirectFlowHint()
        hint.type = None
        detail = GatewayFlow(redirect_uri=REDIRECT_URI, flow_hint=hint)
        assert _message(validate_consent_request, _consent(detail=detail)) == "Bank must not be null"

    def test_gateway_decoupled_hint_rules(self):
        hint = DecoupledFlowHint(bank=Bank.ASB)
        request = _consent(detail=GatewayFlow(redirect_uri=REDIRECT_URI, flow_hint=hint))
        assert _message(validate_consent_request, request) == "Identifier type must not be null"

        hint.identifier_type = IdentifierType.CONSENT_ID
        assert _message(validate_consent_request, request) == "Identifier value must not be blank"

        hint.identifier_value = str(uuid.uuid4())
        validate_consent_request(request)


class TestIdentifiers:
    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_missing_identifier(self, value):
        assert _message(validate_id, value, "Refund ID") == "Refund ID must not be null"

    def test_uuid_rendered_as_string(self):
        refund_id = uuid.uuid4()
        assert validate_id(refund_id, "Refund ID") == str(refund_id)


class TestSimplifiedBuilders:
    @pytest.mark.parametrize("total", [None, "", "abc.de", "/!@#$%^&*()[{}]/=',.\"<>`~;:|\\", "NaN"])
    def test_invalid_total(self, total):
        assert _message(parse_total, total) == "Total is not a valid amount"

    def test_total_wrapped_in_nzd(self):
        assert parse_total("25.00") == Amount(currency=Currency.NZD, total="25.00")

    def test_refund_type_required(self):
        assert _message(build_refund_request, None, uuid.uuid4()) == "Refund type must not be null"

    def test_refund_payment_id_required(self):
        message = _message(build_refund_request, RefundType.ACCOUNT_NUMBER, None)
        assert message == "Payment ID must not be null"

    @pytest.mark.parametrize("refund_type", [RefundType.FULL_REFUND, RefundType.PARTIAL_REFUND])
    @pytest.mark.parametrize("redirect_uri", [None, ""])
    def test_refund_redirect_uri_required(self, refund_type, redirect_uri):
        message = _message(
            build_refund_request, refund_type, uuid.uuid4(), redirect_uri, "particulars",
            "code", "reference", "25.00",
        )
        assert message == "Redirect URI must not be blank"

    def test_partial_refund_built(self):
        payment_id = uuid.uuid4()
        request = build_refund_request(
            RefundType.PARTIAL_REFUND, payment_id, REDIRECT_URI, "particulars", "code",
            "reference", "10.50",
        )
        assert request == PartialRefundRequest(
            payment_id=payment_id,
            pcr=_pcr(),
            amount=Amount(currency=Currency.NZD, total="10.50"),
            consent_redirect=REDIRECT_URI,
        )

    def test_consent_flow_type_required(self):
        message = _message(
            build_consent_request, None, Bank.PNZ, REDIRECT_URI, "p", "c", "r", "1.00"
        )
        assert message == "Authorisation flow type must not be null"

    def test_long_pcr_is_rejected(self):
        message = _message(
            build_consent_request,
            AuthFlowType.REDIRECT, Bank.PNZ, REDIRECT_URI, "x" * 30, "code", "reference", "1.00",
        )
        assert message == "PCR must not exceed 12 characters"

    def test_flow_rules_reported_before_total(self):
        message = _message(
            build_consent_request,
            AuthFlowType.REDIRECT, Bank.PNZ, "", "particulars", "code", "reference", "abc",
        )
        assert message == "Redirect URI must not be blank"

    def test_pcr_rules_reported_before_total(self):
        message = _message(
            build_consent_request,
            AuthFlowType.GATEWAY, Bank.PNZ, REDIRECT_URI, "", "code", "reference", None,
        )
        assert message == "Particulars must have at least 1 character"

    def test_partial_refund_pcr_reported_before_total(self):
        message = _message(
            build_refund_request,
            RefundType.PARTIAL_REFUND, uuid.uuid4(), REDIRECT_URI, "x" * 13, "code", "reference", "abc",
        )
        assert message == "PCR must not exceed 12 characters"

    def test_gateway_with_decoupled_hint(self):
        request = build_consent_request(
            AuthFlowType.GATEWAY,
            Bank.WESTPAC,
            REDIRECT_URI,
            "particulars",
            "code",
            "reference",
            "1.25",
            flow_hint_type=FlowHintType.DECOUPLED,
            identifier_type=IdentifierType.PHONE_NUMBER,
            identifier_value="+64-259531933",
        )
        assert request.flow.detail == GatewayFlow(
            redirect_uri=REDIRECT_URI,
            flow_hint=DecoupledFlowHint(
                bank=Bank.WESTPAC,
                identifier_type=IdentifierType.PHONE_NUMBER,
                identifier_value="+64-259531933",
            ),
        )
        validate_consent_request(request)

    def test_quick_payment_model(self):
        request = build_consent_request(
            AuthFlowType.REDIRECT, Bank.PNZ, REDIRECT_URI, "p", "c", "r", "1.00",
            model=QuickPaymentRequest,
        )
        assert isinstance(request, QuickPaymentRequest)
