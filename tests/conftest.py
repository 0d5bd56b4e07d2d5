"""
Pytest configuration and fixtures.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["MOCK_PAYMENTS_ENABLED"] = "true"
os.environ["MOCK_PAYMENT_DELAY"] = "0"
os.environ["EMAIL_SERVICE"] = "console"

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from candle_shop.database import Base, get_db
from candle_shop.main import app
from candle_shop.models.product import Product
from candle_shop.models.user import User
from candle_shop.services.auth_service import create_access_token, hash_password
from candle_shop.services.notification_service import NotificationService, get_notification_service
from candle_shop.services.payments import (
    InMemoryTransactionStore,
    MockPaymentGateway,
    PaymentGateways,
    get_payment_gateways,
)


class RecordingNotifier(NotificationService):
    """Notifier that records what would have been sent"""

    def __init__(self):
        super().__init__(email_service="console")
        self.sent: List[Dict[str, Any]] = []

    def send_order_confirmation(self, order, customer_name, customer_email):
        self.sent.append({"kind": "order_confirmation", "order_id": order.id, "to": customer_email})
        return True

    def send_shipping_confirmation(self, order, customer_name, customer_email, tracking_number):
        self.sent.append({
            "kind": "shipping_confirmation",
            "order_id": order.id,
            "to": customer_email,
            "tracking_number": tracking_number,
        })
        return True


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def mock_gateway():
    return MockPaymentGateway(InMemoryTransactionStore(), delay=0, success_rate=1.0)


@pytest.fixture
def gateways(mock_gateway):
    return PaymentGateways(mock=mock_gateway)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(session_factory, gateways, notifier):
    """Test client wired to the in-memory database, mock gateway and recording notifier"""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateways] = lambda: gateways
    app.dependency_overrides[get_notification_service] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db, name: str, email: str, role: str = "user") -> User:
    user = User(name=name, email=email, password_hash=hash_password("secret123"), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def customer(db) -> User:
    return _make_user(db, "Jane Doe", "jane@example.com")


@pytest.fixture
def other_customer(db) -> User:
    return _make_user(db, "John Roe", "john@example.com")


@pytest.fixture
def admin(db) -> User:
    return _make_user(db, "Admin", "admin@example.com", role="admin")


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def make_product(db):
    """Factory inserting a product directly through the session"""

    def _make(**overrides) -> Product:
        fields = {
            "name": "Lavender Dream",
            "description": "Soy wax candle",
            "price": 25.0,
            "images": ["/img/lavender.jpg"],
            "category": "Scented",
            "scent": "Lavender",
            "stock": 10,
            "featured": False,
            "height": 10.0,
            "diameter": 7.5,
            "burn_time": 40.0,
        }
        fields.update(overrides)
        product = Product(**fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def product_payload() -> Dict[str, Any]:
    return {
        "name": "Vanilla Bean",
        "description": "Hand-poured vanilla candle",
        "price": 30.0,
        "images": ["/img/vanilla.jpg"],
        "category": "Scented",
        "scent": "Vanilla",
        "stock": 5,
        "featured": True,
        "dimensions": {"height": 9.0, "diameter": 8.0},
        "burn_time": 45,
    }


def order_payload(product: Product, quantity: int = 1, payment_method: str = "mock") -> Dict[str, Any]:
    return {
        "order_items": [
            {
                "product_id": product.id,
                "name": product.name,
                "price": product.price,
                "quantity": quantity,
                "image": product.images[0],
            }
        ],
        "shipping_address": {
            "address": "12 Wick Street",
            "city": "Pune",
            "postal_code": "411001",
            "country": "India",
        },
        "payment_method": payment_method,
    }
