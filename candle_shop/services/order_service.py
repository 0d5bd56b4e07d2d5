"""
Order Service - Business Logic Layer
"""
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from candle_shop.config import settings
from candle_shop.errors import BadRequestError, NotAuthorizedError, NotFoundError, PaymentVerificationError
from candle_shop.logging_config import get_logger
from candle_shop.models.base import utcnow
from candle_shop.models.order import Order, OrderItem
from candle_shop.models.user import User
from candle_shop.repositories.order_repository import OrderRepository
from candle_shop.repositories.product_repository import ProductRepository
from candle_shop.schemas.order import OrderCreate, OrderCreated, OrderResponse, PaymentConfirmation
from candle_shop.services.notification_service import NotificationService
from candle_shop.services.payments import PaymentGateways
from candle_shop.services.pricing import calculate_prices

logger = get_logger(__name__)


def _run_now(func: Callable, *args) -> None:
    func(*args)


class OrderService:
    """Service layer for the order lifecycle"""
    
    def __init__(
        self,
        db: Session,
        gateways: PaymentGateways,
        notifier: NotificationService,
        schedule: Optional[Callable] = None,
    ):
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.gateways = gateways
        self.notifier = notifier
        # Notifications go through ``schedule`` so the API can defer them past the response
        self.schedule = schedule or _run_now
    
    def _get_or_404(self, order_id: int, for_update: bool = False) -> Order:
        order = self.repository.get_by_id(order_id, for_update=for_update)
        if not order:
            raise NotFoundError("Order not found")
        return order
    
    @staticmethod
    def _check_access(order: Order, user: User) -> None:
        if order.user_id != user.id and not user.is_admin:
            raise NotAuthorizedError("Not authorized")
    
    async def create_order(self, user: User, order_data: OrderCreate) -> OrderCreated:
        """
        Create new order
        
        Steps:
        1. Reject an empty cart
        2. Price the client-supplied line items
        3. Save the order as pending
        4. Create the payment-provider order for the total in minor units
        5. On gateway failure delete the order again and re-raise
        
        Raises:
            BadRequestError: If there are no order items
            PaymentGatewayError: If the payment order could not be created
        """
        if not order_data.order_items:
            raise BadRequestError("No order items")
        
        prices = calculate_prices(order_data.order_items)
        address = order_data.shipping_address
        
        order = Order(
            user_id=user.id,
            items=[
                OrderItem(
                    product_id=item.product_id,
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in order_data.order_items
            ],
            shipping_address=address.address,
            shipping_city=address.city,
            shipping_postal_code=address.postal_code,
            shipping_country=address.country,
            payment_method=order_data.payment_method,
            items_price=prices.items_price,
            shipping_price=prices.shipping_price,
            tax_price=prices.tax_price,
            total_price=prices.total_price,
            status="pending",
        )
        order = self.repository.create(order)
        logger.info("order_created", order_id=order.id, user_id=user.id, total=order.total_price)
        
        try:
            gateway = self.gateways.for_method(order.payment_method)
            payment_order = await gateway.create_order(
                prices.amount_minor,
                settings.PAYMENT_CURRENCY,
                receipt=str(order.id),
            )
        except Exception as e:
            # Compensating delete; not atomic with the insert above
            logger.error("payment_order_failed", order_id=order.id, error=str(e))
            self.repository.delete(order)
            raise
        
        order.payment_order_id = payment_order.id
        order = self.repository.save(order)
        logger.info("payment_order_created", order_id=order.id, gateway=gateway.name, payment_order_id=payment_order.id)
        
        return OrderCreated(order=OrderResponse.from_order(order), payment_order=payment_order)
    
    def get_order(self, order_id: int, user: User) -> OrderResponse:
        order = self._get_or_404(order_id)
        self._check_access(order, user)
        return OrderResponse.from_order(order, include_user=True)
    
    def get_my_orders(self, user: User) -> List[OrderResponse]:
        return [OrderResponse.from_order(o) for o in self.repository.get_by_user(user.id)]
    
    def get_all_orders(self) -> List[OrderResponse]:
        return [OrderResponse.from_order(o, include_user=True) for o in self.repository.get_all()]
    
    async def confirm_payment(self, order_id: int, user: User, confirmation: PaymentConfirmation) -> OrderResponse:
        """
        Verify a client-reported payment and mark the order paid
        
        Raises:
            NotFoundError: If order not found
            NotAuthorizedError: If caller is neither the owner nor an admin
            PaymentVerificationError: If the gateway does not vouch for the payment
        """
        order = self._get_or_404(order_id, for_update=True)
        self._check_access(order, user)
        
        gateway = self.gateways.for_method(order.payment_method)
        
        if order.payment_order_id and confirmation.razorpay_order_id != order.payment_order_id:
            is_valid = False
        else:
            is_valid = await gateway.verify_payment(
                confirmation.razorpay_payment_id,
                confirmation.razorpay_order_id,
                confirmation.razorpay_signature,
            )
        
        if not is_valid:
            logger.warning("payment_verification_failed", order_id=order.id, gateway=gateway.name)
            raise PaymentVerificationError("Invalid payment verification")
        
        newly_paid = self._apply_payment(order, confirmation)
        response = OrderResponse.from_order(order)
        
        if newly_paid:
            self.schedule(
                self.notifier.send_order_confirmation,
                response,
                order.user.name,
                order.user.email,
            )
        return response
    
    def _apply_payment(self, order: Order, confirmation: PaymentConfirmation) -> bool:
        """
        Record the payment and take the items out of stock
        
        Only the unpaid -> paid transition has side effects, so a repeated
        confirmation is a no-op. Returns True when the order was newly paid.
        """
        if order.is_paid:
            logger.info("payment_already_applied", order_id=order.id)
            return False
        
        order.is_paid = True
        order.paid_at = utcnow()
        order.razorpay_payment_id = confirmation.razorpay_payment_id
        order.razorpay_order_id = confirmation.razorpay_order_id
        order.razorpay_signature = confirmation.razorpay_signature
        order.payment_status = "completed"
        order.payer_email = confirmation.email_address
        
        # Product rows are always locked in ascending id order
        for item in sorted(order.items, key=lambda i: i.product_id):
            result = self.product_repository.decrement_stock(item.product_id, item.quantity)
            if result is None:
                logger.warning("stock_product_missing", order_id=order.id, product_id=item.product_id)
                continue
            product, shortfall = result
            if shortfall:
                logger.warning(
                    "stock_shortfall",
                    order_id=order.id,
                    product_id=product.id,
                    shortfall=shortfall,
                )
        
        self.repository.save(order)
        logger.info("payment_applied", order_id=order.id, payment_id=order.razorpay_payment_id)
        return True
    
    def mark_delivered(self, order_id: int, tracking_number: str) -> OrderResponse:
        order = self._get_or_404(order_id)
        
        order.is_delivered = True
        order.delivered_at = utcnow()
        order.status = "delivered"
        order.tracking_number = tracking_number
        order = self.repository.save(order)
        logger.info("order_delivered", order_id=order.id, tracking_number=tracking_number)
        
        response = OrderResponse.from_order(order)
        self.schedule(
            self.notifier.send_shipping_confirmation,
            response,
            order.user.name,
            order.user.email,
            tracking_number,
        )
        return response
    
    def update_status(self, order_id: int, new_status: str) -> OrderResponse:
        """Overwrite the status; any value is reachable from any other"""
        order = self._get_or_404(order_id)
        old_status = order.status
        order.status = new_status
        order = self.repository.save(order)
        logger.info("order_status_changed", order_id=order.id, old_status=old_status, new_status=new_status)
        return OrderResponse.from_order(order)
