from blink_debit.models.common import Amount, Pcr
from blink_debit.models.consent import (
    AuthFlow,
    AuthFlowDetail,
    Consent,
    CreateConsentResponse,
    CreateQuickPaymentResponse,
    DecoupledFlow,
    DecoupledFlowHint,
    FlowHint,
    GatewayFlow,
    QuickPaymentRequest,
    QuickPaymentResponse,
    RedirectFlow,
    RedirectFlowHint,
    SingleConsentRequest,
)
from blink_debit.models.enums import (
    AuthFlowType,
    Bank,
    ConsentStatus,
    Currency,
    FlowHintType,
    IdentifierType,
    RefundStatus,
    RefundType,
)
from blink_debit.models.refund import (
    AccountNumberRefundRequest,
    FullRefundRequest,
    PartialRefundRequest,
    Refund,
    RefundDetail,
    RefundResponse,
)

__all__ = [
    "AccountNumberRefundRequest",
    "Amount",
    "AuthFlow",
    "AuthFlowDetail",
    "AuthFlowType",
    "Bank",
    "Consent",
    "ConsentStatus",
    "CreateConsentResponse",
    "CreateQuickPaymentResponse",
    "Currency",
    "DecoupledFlow",
    "DecoupledFlowHint",
    "FlowHint",
    "FlowHintType",
    "FullRefundRequest",
    "GatewayFlow",
    "IdentifierType",
    "PartialRefundRequest",
    "Pcr",
    "QuickPaymentRequest",
    "QuickPaymentResponse",
    "RedirectFlow",
    "RedirectFlowHint",
    "Refund",
    "RefundDetail",
    "RefundResponse",
    "RefundStatus",
    "RefundType",
    "SingleConsentRequest",
]
