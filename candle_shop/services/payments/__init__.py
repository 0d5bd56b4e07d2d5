"""
Payment gateways
"""
from functools import lru_cache
from typing import Optional

from candle_shop.config import settings
from candle_shop.errors import PaymentGatewayError
from candle_shop.services.payments.base import PaymentGateway
from candle_shop.services.payments.mock_gateway import MockPaymentGateway
from candle_shop.services.payments.razorpay_client import RazorpayClient
from candle_shop.services.payments.store import InMemoryTransactionStore, TransactionStore


class PaymentGateways:
    """Resolves the gateway that serves a given payment method"""
    
    def __init__(self, razorpay: Optional[RazorpayClient] = None, mock: Optional[MockPaymentGateway] = None):
        self.razorpay = razorpay
        self.mock = mock
    
    @property
    def mode(self) -> str:
        if self.razorpay and self.mock:
            return "razorpay+mock"
        if self.razorpay:
            return "razorpay"
        return "mock" if self.mock else "disabled"
    
    def for_method(self, payment_method: str) -> PaymentGateway:
        """
        Razorpay serves 'razorpay' orders when configured; everything else
        falls back to the mock gateway if it is enabled.
        
        Raises:
            PaymentGatewayError: If no gateway can serve the method
        """
        if payment_method == "razorpay" and self.razorpay:
            return self.razorpay
        if self.mock:
            return self.mock
        raise PaymentGatewayError("No payment gateway available")


def build_payment_gateways(store: Optional[TransactionStore] = None) -> PaymentGateways:
    razorpay = None
    if settings.razorpay_configured:
        razorpay = RazorpayClient(
            key_id=settings.RAZORPAY_KEY_ID,
            key_secret=settings.RAZORPAY_KEY_SECRET,
            base_url=settings.RAZORPAY_API_URL,
            timeout=settings.GATEWAY_TIMEOUT,
        )
    mock = None
    if settings.MOCK_PAYMENTS_ENABLED:
        mock = MockPaymentGateway(
            store=store or InMemoryTransactionStore(),
            delay=settings.MOCK_PAYMENT_DELAY,
            success_rate=settings.MOCK_PAYMENT_SUCCESS_RATE,
        )
    return PaymentGateways(razorpay=razorpay, mock=mock)


@lru_cache
def get_payment_gateways() -> PaymentGateways:
    """Dependency returning the process-wide gateways"""
    return build_payment_gateways()


__all__ = [
    "PaymentGateway",
    "PaymentGateways",
    "MockPaymentGateway",
    "RazorpayClient",
    "TransactionStore",
    "InMemoryTransactionStore",
    "build_payment_gateways",
    "get_payment_gateways",
]
