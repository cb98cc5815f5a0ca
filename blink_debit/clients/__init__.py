from blink_debit.clients.consents import SingleConsentsApiClient
from blink_debit.clients.quick_payments import QuickPaymentsApiClient
from blink_debit.clients.refunds import RefundsApiClient

__all__ = ["QuickPaymentsApiClient", "RefundsApiClient", "SingleConsentsApiClient"]
