"""
Order API endpoints
"""
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
from typing import List

from candle_shop.api.deps import get_current_user, require_admin
from candle_shop.database import get_db
from candle_shop.models.user import User
from candle_shop.services.notification_service import NotificationService, get_notification_service
from candle_shop.services.order_service import OrderService
from candle_shop.services.payments import PaymentGateways, get_payment_gateways
from candle_shop.schemas.common import ApiResponse
from candle_shop.schemas.order import (
    DeliveryUpdate,
    OrderCreate,
    OrderCreated,
    OrderResponse,
    OrderStatusUpdate,
    PaymentConfirmation
)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    gateways: PaymentGateways = Depends(get_payment_gateways),
    notifier: NotificationService = Depends(get_notification_service),
) -> OrderService:
    """Dependency to get OrderService instance; emails run after the response is sent"""
    return OrderService(db, gateways, notifier, schedule=background_tasks.add_task)


@router.post("", response_model=ApiResponse[OrderCreated], status_code=status.HTTP_201_CREATED, summary="Create order")
async def create_order(
    order_data: OrderCreate,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order
    
    Process:
    1. Price the cart (free shipping above 100, 15% tax)
    2. Save order as pending
    3. Create the payment-provider order the client pays against
    
    - **order_items**: line items (required, non-empty)
    - **shipping_address**: address, city, postal_code, country
    - **payment_method**: razorpay or mock
    """
    return ApiResponse(data=await service.create_order(user, order_data))


@router.get("/myorders", response_model=ApiResponse[List[OrderResponse]], summary="Get my orders")
def get_my_orders(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    return ApiResponse(data=service.get_my_orders(user))


@router.get("", response_model=ApiResponse[List[OrderResponse]], summary="Get all orders")
def get_orders(
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    return ApiResponse(data=service.get_all_orders())


@router.get("/{order_id}", response_model=ApiResponse[OrderResponse], summary="Get order by ID")
def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Owner or admin only"""
    return ApiResponse(data=service.get_order(order_id, user))


@router.put("/{order_id}/pay", response_model=ApiResponse[OrderResponse], summary="Confirm payment")
async def pay_order(
    order_id: int,
    confirmation: PaymentConfirmation,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Verify the gateway payment result and mark the order paid
    
    - **razorpay_payment_id**, **razorpay_order_id**, **razorpay_signature**: from checkout
    """
    return ApiResponse(data=await service.confirm_payment(order_id, user, confirmation))


@router.put("/{order_id}/deliver", response_model=ApiResponse[OrderResponse], summary="Mark delivered")
def deliver_order(
    order_id: int,
    delivery: DeliveryUpdate,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    return ApiResponse(data=service.mark_delivered(order_id, delivery.tracking_number))


@router.put("/{order_id}/status", response_model=ApiResponse[OrderResponse], summary="Update order status")
def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status
    
    - **status**: pending, processing, shipped, delivered or cancelled
    """
    return ApiResponse(data=service.update_status(order_id, status_data.status))
