"""Tests for the auth API."""

import pytest

from candle_shop.errors import BadRequestError
from candle_shop.repositories.user_repository import UserRepository
from candle_shop.services.auth_service import create_access_token
from tests.conftest import auth_headers, order_payload


class TestRegisterAndLogin:
    def test_register(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "New User", "email": "New@Example.com", "password": "secret123"},
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["email"] == "new@example.com"
        assert data["role"] == "user"
        assert data["token"]
        assert "password_hash" not in data

    def test_duplicate_email(self, client, customer):
        response = client.post(
            "/api/auth/register",
            json={"name": "Again", "email": "JANE@example.com", "password": "secret123"},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "User already exists"}

    def test_short_password(self, client):
        response = client.post(
            "/api/auth/register", json={"name": "X", "email": "x@example.com", "password": "123"}
        )
        assert response.status_code == 400

    def test_login(self, client, customer):
        response = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "secret123"})
        assert response.status_code == 200
        token = response.json()["data"]["token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["data"]["email"] == "jane@example.com"

    def test_wrong_password(self, client, customer):
        response = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestTokens:
    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_token_for_deleted_user(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {create_access_token(4242)}"})
        assert response.status_code == 401


class TestProfile:
    def test_update_profile(self, client, customer):
        response = client.put(
            "/api/auth/profile",
            json={"name": "Jane Smith", "password": "newsecret"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Jane Smith"

        login = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "newsecret"})
        assert login.status_code == 200

    def test_email_taken(self, client, customer, other_customer):
        response = client.put(
            "/api/auth/profile", json={"email": "john@example.com"}, headers=auth_headers(customer)
        )
        assert response.status_code == 400


class TestAdminUsers:
    def test_list_users(self, client, customer, admin):
        response = client.get("/api/auth/users", headers=auth_headers(admin))
        assert response.status_code == 200
        assert {u["email"] for u in response.json()["data"]} == {"jane@example.com", "admin@example.com"}

    def test_list_users_forbidden(self, client, customer):
        assert client.get("/api/auth/users", headers=auth_headers(customer)).status_code == 403

    def test_delete_user(self, client, customer, admin):
        response = client.delete(f"/api/auth/users/{customer.id}", headers=auth_headers(admin))
        assert response.status_code == 200
        assert client.get("/api/auth/me", headers=auth_headers(customer)).status_code == 401

    def test_cannot_delete_self(self, client, admin):
        response = client.delete(f"/api/auth/users/{admin.id}", headers=auth_headers(admin))
        assert response.status_code == 400

    def test_cannot_delete_user_with_orders(self, client, customer, admin, make_product):
        client.post("/api/orders", json=order_payload(make_product()), headers=auth_headers(customer))
        response = client.delete(f"/api/auth/users/{customer.id}", headers=auth_headers(admin))
        assert response.status_code == 400

    def test_delete_missing_user(self, client, admin):
        assert client.delete("/api/auth/users/999", headers=auth_headers(admin)).status_code == 404


class TestUniqueEmail:
    """The unique index backs up the lookup done before inserting"""

    def test_create_duplicate_raises_bad_request(self, db, customer):
        repository = UserRepository(db)
        with pytest.raises(BadRequestError, match="User already exists"):
            repository.create(name="Racer", email="jane@example.com", password_hash="x")
        assert repository.get_by_email("jane@example.com").name == "Jane Doe"

    def test_update_to_taken_email_raises_bad_request(self, db, customer, other_customer):
        repository = UserRepository(db)
        with pytest.raises(BadRequestError, match="Email already in use"):
            repository.update(other_customer, {"email": "jane@example.com"})
        db.expire_all()
        assert repository.get_by_id(other_customer.id).email == "john@example.com"
