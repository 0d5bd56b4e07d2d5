"""
HTTP client for the Razorpay Orders and Payments API
"""
import hashlib
import hmac
from typing import Optional

import httpx

from candle_shop.errors import PaymentGatewayError
from candle_shop.logging_config import get_logger
from candle_shop.schemas.order import PaymentOrder, RefundResult
from candle_shop.services.payments.base import PaymentGateway

logger = get_logger(__name__)


class RazorpayClient(PaymentGateway):
    """Client for communicating with Razorpay"""
    
    name = "razorpay"
    
    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = "https://api.razorpay.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
    
    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            auth=(self.key_id, self.key_secret),
            timeout=self.timeout,
            transport=self.transport,
        )
    
    async def _post(self, path: str, payload: dict) -> dict:
        try:
            async with self._client() as client:
                response = await client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error("razorpay_unreachable", path=path, error=str(e))
            raise PaymentGatewayError(f"Payment gateway unavailable: {e}")
        
        if response.status_code not in (200, 201):
            description = None
            try:
                description = response.json().get("error", {}).get("description")
            except ValueError:
                pass
            logger.error("razorpay_request_failed", path=path, status=response.status_code, description=description)
            raise PaymentGatewayError(description or f"Unexpected status code: {response.status_code}")
        
        return response.json()
    
    async def create_order(self, amount: int, currency: str, receipt: Optional[str] = None) -> PaymentOrder:
        """
        Create a Razorpay order
        
        Args:
            amount: Amount in the smallest currency unit
            currency: ISO currency code
            receipt: Our order reference
        
        Raises:
            PaymentGatewayError: If Razorpay is unreachable or rejects the request
        """
        payload = {"amount": amount, "currency": currency}
        if receipt:
            payload["receipt"] = receipt
        data = await self._post("/orders", payload)
        logger.info("razorpay_order_created", gateway_order_id=data["id"], amount=amount)
        return PaymentOrder(
            id=data["id"],
            amount=data.get("amount", amount),
            currency=data.get("currency", currency),
            receipt=data.get("receipt", receipt),
        )
    
    def expected_signature(self, order_id: str, payment_id: str) -> str:
        message = f"{order_id}|{payment_id}".encode("utf-8")
        return hmac.new(self.key_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()
    
    async def verify_payment(self, payment_id: str, order_id: str, signature: str) -> bool:
        """Checkout signature is HMAC-SHA256(key_secret, "<order_id>|<payment_id>") in hex"""
        expected = self.expected_signature(order_id, payment_id)
        return hmac.compare_digest(expected, signature or "")
    
    async def refund_payment(self, payment_id: str, amount: Optional[int] = None) -> RefundResult:
        payload = {} if amount is None else {"amount": amount}
        data = await self._post(f"/payments/{payment_id}/refund", payload)
        logger.info("razorpay_refund_created", payment_id=payment_id, refund_id=data["id"])
        return RefundResult(
            id=data["id"],
            payment_id=data.get("payment_id", payment_id),
            status=data.get("status", "processed"),
        )
