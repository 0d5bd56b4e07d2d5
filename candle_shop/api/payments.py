"""
Mock payment endpoints (test/demo deployments only)
"""
from fastapi import APIRouter, Depends

from candle_shop.api.deps import get_current_user, require_admin
from candle_shop.errors import NotFoundError
from candle_shop.models.user import User
from candle_shop.schemas.common import ApiResponse
from candle_shop.schemas.order import MockPaymentResult, RefundResult
from candle_shop.services.payments import MockPaymentGateway, PaymentGateways, get_payment_gateways

router = APIRouter(prefix="/payments/mock", tags=["payments"])


def get_mock_gateway(gateways: PaymentGateways = Depends(get_payment_gateways)) -> MockPaymentGateway:
    if gateways.mock is None:
        raise NotFoundError("Mock payments are disabled")
    return gateways.mock


@router.post("/{payment_order_id}/process", response_model=ApiResponse[MockPaymentResult], summary="Simulate payment")
async def process_mock_payment(
    payment_order_id: str,
    user: User = Depends(get_current_user),
    gateway: MockPaymentGateway = Depends(get_mock_gateway)
):
    """
    Play the gateway checkout for a mock payment order
    
    The result is what the client then sends to ``PUT /orders/{id}/pay``.
    """
    return ApiResponse(data=await gateway.process_payment(payment_order_id))


@router.post("/{payment_id}/refund", response_model=ApiResponse[RefundResult], summary="Simulate refund")
async def refund_mock_payment(
    payment_id: str,
    admin: User = Depends(require_admin),
    gateway: MockPaymentGateway = Depends(get_mock_gateway)
):
    return ApiResponse(data=await gateway.refund_payment(payment_id))
