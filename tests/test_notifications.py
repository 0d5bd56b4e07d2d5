"""Tests for order emails."""

import smtplib
from datetime import datetime, timezone

import pytest

from candle_shop.schemas.order import OrderResponse
from candle_shop.services.notification_service import NotificationService


@pytest.fixture
def order() -> OrderResponse:
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return OrderResponse(
        id=7,
        user_id=1,
        order_items=[
            {"product_id": 1, "name": "Lavender <Dream>", "price": 25.0, "quantity": 2, "image": "/img/l.jpg"},
        ],
        shipping_address={"address": "12 Wick Street", "city": "Pune", "postal_code": "411001", "country": "India"},
        payment_method="mock",
        payment_order_id="mock_1_abc",
        payment_result=None,
        items_price=50.0,
        tax_price=7.5,
        shipping_price=10.0,
        total_price=67.5,
        is_paid=True,
        paid_at=now,
        is_delivered=False,
        delivered_at=None,
        status="processing",
        tracking_number=None,
        created_at=now,
        updated_at=now,
    )


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        pass

    def send_message(self, message):
        self.messages.append(message)


class RejectingSMTP(FakeSMTP):
    def send_message(self, message):
        raise smtplib.SMTPRecipientsRefused({"jane@example.com": (550, b"No such user")})


def test_console_backend_reports_success(order):
    service = NotificationService(email_service="console")
    assert service.send_order_confirmation(order, "Jane Doe", "jane@example.com") is True
    assert service.send_shipping_confirmation(order, "Jane Doe", "jane@example.com", "TRK123") is True


def test_unknown_backend_reports_failure(order):
    service = NotificationService(email_service="carrier-pigeon")
    assert service.send_order_confirmation(order, "Jane Doe", "jane@example.com") is False


def test_smtp_sends_html_message(order, monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    service = NotificationService(email_service="smtp")

    assert service.send_order_confirmation(order, "Jane Doe", "jane@example.com") is True

    smtp = FakeSMTP.instances[-1]
    assert smtp.started_tls is True
    message = smtp.messages[0]
    assert message["To"] == "jane@example.com"
    assert message["Subject"] == "Order Confirmation - Order #7"
    html = message.get_body(preferencelist=("html",)).get_content()
    assert "Lavender &lt;Dream&gt; x 2 - $50.00" in html
    assert "Total: $67.50" in html


def test_smtp_failure_is_swallowed(order, monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", RejectingSMTP)
    service = NotificationService(email_service="smtp")

    assert service.send_shipping_confirmation(order, "Jane Doe", "jane@example.com", "TRK123") is False
