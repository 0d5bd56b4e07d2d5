"""
Notification Service - order emails
"""
import smtplib
from email.message import EmailMessage
from html import escape

from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from candle_shop.config import settings
from candle_shop.logging_config import get_logger
from candle_shop.schemas.order import OrderResponse

logger = get_logger(__name__)

TRANSIENT_SMTP_ERRORS = (
    smtplib.SMTPServerDisconnected,
    smtplib.SMTPConnectError,
    ConnectionError,
    TimeoutError,
)


def _address_html(order: OrderResponse) -> str:
    address = order.shipping_address
    return "<br>\n".join(
        escape(part) for part in (address.address, address.city, address.postal_code, address.country)
    )


class NotificationService:
    """
    Sends order emails
    
    Every public ``send_*`` method is fire-and-forget: delivery errors are
    logged and reported as ``False``, never raised.
    """
    
    def __init__(self, email_service: str = None):
        self.email_service = email_service or settings.EMAIL_SERVICE
    
    def send_order_confirmation(self, order: OrderResponse, customer_name: str, customer_email: str) -> bool:
        """Email sent once an order's payment is confirmed"""
        items_html = "\n".join(
            f"<p>{escape(item.name)} x {item.quantity} - ${item.price * item.quantity:.2f}</p>"
            for item in order.order_items
        )
        subject = f"Order Confirmation - Order #{order.id}"
        body = f"""
<h1>Thank you for your order!</h1>
<p>Hi {escape(customer_name)},</p>
<p>We're happy to let you know that we've received your order.</p>

<h2>Order Details:</h2>
<p>Order Number: {order.id}</p>
<p>Order Date: {order.created_at:%Y-%m-%d}</p>

<h3>Items:</h3>
{items_html}

<p>Subtotal: ${order.items_price:.2f}</p>
<p>Shipping: ${order.shipping_price:.2f}</p>
<p>Tax: ${order.tax_price:.2f}</p>
<p><strong>Total: ${order.total_price:.2f}</strong></p>

<h3>Shipping Address:</h3>
<p>{_address_html(order)}</p>

<p>We'll send you another email when your order ships.</p>
<p>Thank you for shopping with {escape(settings.EMAIL_FROM_NAME)}!</p>
"""
        return self._deliver(customer_email, subject, body, order.id, "order_confirmation")
    
    def send_shipping_confirmation(
        self, order: OrderResponse, customer_name: str, customer_email: str, tracking_number: str
    ) -> bool:
        """Email sent when an admin marks the order delivered"""
        subject = f"Your Order Has Shipped - Order #{order.id}"
        body = f"""
<h1>Your Order is on its way!</h1>
<p>Hi {escape(customer_name)},</p>
<p>Great news! Your order has been shipped.</p>

<h2>Shipping Details:</h2>
<p>Order Number: {order.id}</p>
<p>Tracking Number: {escape(tracking_number or '')}</p>

<h3>Shipping Address:</h3>
<p>{_address_html(order)}</p>

<p>Thank you for shopping with {escape(settings.EMAIL_FROM_NAME)}!</p>
"""
        return self._deliver(customer_email, subject, body, order.id, "shipping_confirmation")
    
    def _deliver(self, to: str, subject: str, body: str, order_id: int, kind: str) -> bool:
        try:
            if self.email_service == "console":
                self._send_console_notification(to, subject, body, order_id)
            elif self.email_service == "smtp":
                self._send_smtp_notification(to, subject, body)
            else:
                logger.error("unknown_email_service", email_service=self.email_service)
                return False
        except Exception as e:
            logger.error("email_send_failed", kind=kind, order_id=order_id, to=to, error=str(e))
            return False
        
        logger.info("email_sent", kind=kind, order_id=order_id, to=to)
        return True
    
    def _send_console_notification(self, to: str, subject: str, body: str, order_id: int) -> None:
        """Development backend: log the email instead of sending it"""
        logger.info("email_console", to=to, subject=subject, order_id=order_id, body=body)
    
    @retry(
        stop=stop_after_attempt(settings.EMAIL_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(TRANSIENT_SMTP_ERRORS),
        reraise=True
    )
    def _send_smtp_notification(self, to: str, subject: str, body: str) -> None:
        """Send an HTML email through the configured SMTP relay"""
        message = EmailMessage()
        message["From"] = f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_USER or 'no-reply@localhost'}>"
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(body, subtype="html")
        
        smtp_class = smtplib.SMTP_SSL if settings.EMAIL_PORT == 465 else smtplib.SMTP
        with smtp_class(settings.EMAIL_HOST, settings.EMAIL_PORT, timeout=10) as smtp:
            if smtp_class is smtplib.SMTP and settings.EMAIL_PORT == 587:
                smtp.starttls()
            if settings.EMAIL_USER and settings.EMAIL_PASS:
                smtp.login(settings.EMAIL_USER, settings.EMAIL_PASS)
            smtp.send_message(message)


def get_notification_service() -> NotificationService:
    """Dependency to get NotificationService instance"""
    return NotificationService()
