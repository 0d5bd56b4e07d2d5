"""
Payment gateway interface
"""
from abc import ABC, abstractmethod
from typing import Optional

from candle_shop.schemas.order import PaymentOrder, RefundResult


class PaymentGateway(ABC):
    """Operations the order workflow needs from a payment provider"""
    
    name: str = "gateway"
    
    @abstractmethod
    async def create_order(self, amount: int, currency: str, receipt: Optional[str] = None) -> PaymentOrder:
        """Create a provider-side order for ``amount`` minor currency units"""
    
    @abstractmethod
    async def verify_payment(self, payment_id: str, order_id: str, signature: str) -> bool:
        """Check that a client-reported payment really belongs to ``order_id``"""
    
    @abstractmethod
    async def refund_payment(self, payment_id: str, amount: Optional[int] = None) -> RefundResult:
        """Refund a captured payment (full refund when ``amount`` is None)"""
