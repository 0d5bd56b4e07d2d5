"""
Mock payment gateway.

Stands in for Razorpay in test and demo deployments. Verification only
checks that the simulator itself processed the order id, so it offers no
authenticity guarantee and must never be enabled in production.
"""
import asyncio
import random
import time
from typing import Optional

from candle_shop.errors import BadRequestError, PaymentGatewayError
from candle_shop.logging_config import get_logger
from candle_shop.schemas.order import MockPaymentResult, PaymentOrder, RefundResult
from candle_shop.services.payments.base import PaymentGateway
from candle_shop.services.payments.store import TransactionStore

logger = get_logger("candle_shop.payments.mock")


class MockPaymentGateway(PaymentGateway):
    """Simulated gateway backed by an injected transaction store"""
    
    name = "mock"
    
    def __init__(
        self,
        store: TransactionStore,
        delay: float = 1.0,
        success_rate: float = 0.9,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.delay = delay
        self.success_rate = success_rate
        self.rng = rng or random.Random()
    
    def generate_transaction_id(self) -> str:
        return f"mock_{int(time.time() * 1000)}_{self.rng.randrange(1_000_000)}"
    
    async def create_order(self, amount: int, currency: str, receipt: Optional[str] = None) -> PaymentOrder:
        order_id = self.generate_transaction_id()
        self.store.issue(order_id)
        logger.info("mock_order_created", order_id=order_id, amount=amount, currency=currency)
        return PaymentOrder(id=order_id, amount=amount, currency=currency, mock=True, receipt=receipt)
    
    async def process_payment(self, order_id: str) -> MockPaymentResult:
        """
        Simulate the customer paying for a mock order
        
        Raises:
            BadRequestError: If the id was never issued or is already paid
            PaymentGatewayError: If the simulated payment fails
        """
        if not self.store.is_issued(order_id):
            raise BadRequestError("Unknown transaction ID")
        if self.store.is_consumed(order_id):
            raise BadRequestError("Transaction ID already processed")
        
        await asyncio.sleep(self.delay)
        
        if self.rng.random() >= self.success_rate:
            logger.warning("mock_payment_failed", order_id=order_id)
            raise PaymentGatewayError("Mock payment failed")
        
        if not self.store.consume(order_id):
            raise BadRequestError("Transaction ID already processed")
        
        result = MockPaymentResult(
            razorpay_payment_id=self.generate_transaction_id(),
            razorpay_order_id=order_id,
            razorpay_signature=self.generate_transaction_id(),
        )
        logger.info("mock_payment_processed", order_id=order_id, payment_id=result.razorpay_payment_id)
        return result
    
    async def verify_payment(self, payment_id: str, order_id: str, signature: str) -> bool:
        is_valid = self.store.is_consumed(order_id)
        logger.info("mock_payment_verified", payment_id=payment_id, order_id=order_id, valid=is_valid)
        return is_valid
    
    async def refund_payment(self, payment_id: str, amount: Optional[int] = None) -> RefundResult:
        await asyncio.sleep(self.delay)
        refund = RefundResult(
            id=self.generate_transaction_id(),
            payment_id=payment_id,
            status="processed",
            mock=True,
        )
        logger.info("mock_payment_refunded", payment_id=payment_id, refund_id=refund.id)
        return refund
