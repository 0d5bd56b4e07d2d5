"""Tests for the catalog and reviews API."""

import math

from candle_shop.models.product import Product
from tests.conftest import auth_headers


class TestListProducts:
    def test_pagination_newest_first(self, client, make_product):
        for i in range(30):
            make_product(name=f"Candle {i:02d}")

        response = client.get("/api/products", params={"page": 2})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["page"] == 2
        assert body["total"] == 30
        assert body["pages"] == math.ceil(30 / 12)
        names = [p["name"] for p in body["data"]]
        assert names == [f"Candle {i:02d}" for i in range(17, 5, -1)]

    def test_last_page_is_partial(self, client, make_product):
        for i in range(13):
            make_product(name=f"Candle {i:02d}")
        body = client.get("/api/products", params={"page": 2}).json()
        assert body["pages"] == 2
        assert [p["name"] for p in body["data"]] == ["Candle 00"]

    def test_empty_catalog(self, client):
        body = client.get("/api/products").json()
        assert body == {"success": True, "data": [], "page": 1, "pages": 0, "total": 0}

    def test_keyword_is_case_insensitive_substring(self, client, make_product):
        make_product(name="Lavender Dream")
        make_product(name="Midnight Lavender")
        make_product(name="Sea Salt")

        body = client.get("/api/products", params={"keyword": "LAVEN"}).json()
        assert body["total"] == 2
        assert {p["name"] for p in body["data"]} == {"Lavender Dream", "Midnight Lavender"}

    def test_keyword_wildcards_match_literally(self, client, make_product):
        make_product(name="Lavender Dream")
        make_product(name="Sea Salt")
        make_product(name="100% Soy_Wax")

        for keyword in ("%", "_"):
            body = client.get("/api/products", params={"keyword": keyword}).json()
            assert [p["name"] for p in body["data"]] == ["100% Soy_Wax"]

        assert client.get("/api/products", params={"keyword": "Sea_Salt"}).json()["total"] == 0

    def test_category_scent_and_price_filters(self, client, make_product):
        make_product(name="A", category="Scented", scent="Rose", price=20)
        make_product(name="B", category="Scented", scent="Vanilla", price=35)
        make_product(name="C", category="Decorative", scent=None, price=50)

        assert client.get("/api/products", params={"category": "Decorative"}).json()["total"] == 1
        assert client.get("/api/products", params={"scent": "Rose"}).json()["total"] == 1

        body = client.get("/api/products", params={"minPrice": 25, "maxPrice": 50}).json()
        assert {p["name"] for p in body["data"]} == {"B", "C"}

    def test_featured_limited_to_six(self, client, make_product):
        for i in range(8):
            make_product(name=f"Featured {i}", featured=True)
        make_product(name="Plain")

        body = client.get("/api/products/featured").json()
        assert len(body["data"]) == 6
        assert all(p["featured"] for p in body["data"])


class TestGetProduct:
    def test_found(self, client, make_product):
        product = make_product()
        body = client.get(f"/api/products/{product.id}").json()
        assert body["data"]["name"] == "Lavender Dream"
        assert body["data"]["dimensions"] == {"height": 10.0, "diameter": 7.5}

    def test_not_found(self, client):
        response = client.get("/api/products/999")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}


class TestAdminProducts:
    def test_create(self, client, admin, product_payload):
        response = client.post("/api/products", json=product_payload, headers=auth_headers(admin))
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Vanilla Bean"
        assert data["rating"] == 0
        assert data["num_reviews"] == 0
        assert data["reviews"] == []

    def test_scented_requires_scent(self, client, admin, product_payload):
        product_payload.pop("scent")
        response = client.post("/api/products", json=product_payload, headers=auth_headers(admin))
        assert response.status_code == 400

    def test_unscented_without_scent(self, client, admin, product_payload):
        product_payload.pop("scent")
        product_payload["category"] = "Unscented"
        response = client.post("/api/products", json=product_payload, headers=auth_headers(admin))
        assert response.status_code == 201

    def test_requires_at_least_one_image(self, client, admin, product_payload):
        product_payload["images"] = []
        response = client.post("/api/products", json=product_payload, headers=auth_headers(admin))
        assert response.status_code == 400

    def test_negative_price_rejected(self, client, admin, product_payload):
        product_payload["price"] = -1
        response = client.post("/api/products", json=product_payload, headers=auth_headers(admin))
        assert response.status_code == 400

    def test_non_admin_forbidden(self, client, customer, product_payload):
        response = client.post("/api/products", json=product_payload, headers=auth_headers(customer))
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized as an admin"

    def test_anonymous_unauthorized(self, client, product_payload):
        response = client.post("/api/products", json=product_payload)
        assert response.status_code == 401

    def test_partial_update(self, client, admin, make_product):
        product = make_product(price=25.0)
        response = client.put(
            f"/api/products/{product.id}",
            json={"price": 27.5, "dimensions": {"height": 12, "diameter": 8}},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 27.5
        assert data["dimensions"] == {"height": 12.0, "diameter": 8.0}
        assert data["name"] == "Lavender Dream"

    def test_update_to_scented_needs_scent(self, client, admin, make_product):
        product = make_product(category="Decorative", scent=None)
        response = client.put(
            f"/api/products/{product.id}", json={"category": "Scented"}, headers=auth_headers(admin)
        )
        assert response.status_code == 400

    def test_delete(self, client, db, admin, make_product):
        product_id = make_product().id
        response = client.delete(f"/api/products/{product_id}", headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product removed successfully"}
        db.expire_all()
        assert db.query(Product).filter(Product.id == product_id).first() is None

    def test_delete_missing(self, client, admin):
        assert client.delete("/api/products/999", headers=auth_headers(admin)).status_code == 404


class TestReviews:
    def test_rating_is_mean_of_reviews(self, client, customer, other_customer, make_product):
        product = make_product()
        url = f"/api/products/{product.id}/reviews"

        first = client.post(url, json={"rating": 5, "comment": "Lovely"}, headers=auth_headers(customer))
        assert first.status_code == 201
        assert first.json() == {"success": True, "message": "Review added successfully"}
        client.post(url, json={"rating": 2, "comment": "Meh"}, headers=auth_headers(other_customer))

        data = client.get(f"/api/products/{product.id}").json()["data"]
        assert data["rating"] == 3.5
        assert data["num_reviews"] == 2
        assert len(data["reviews"]) == 2
        assert data["reviews"][0]["name"] == "Jane Doe"

    def test_second_review_rejected(self, client, customer, make_product):
        product = make_product()
        url = f"/api/products/{product.id}/reviews"

        client.post(url, json={"rating": 4, "comment": "Good"}, headers=auth_headers(customer))
        second = client.post(url, json={"rating": 1, "comment": "Changed my mind"}, headers=auth_headers(customer))

        assert second.status_code == 400
        assert second.json()["message"] == "Product already reviewed"
        data = client.get(f"/api/products/{product.id}").json()["data"]
        assert data["num_reviews"] == 1
        assert data["rating"] == 4
        assert data["reviews"][0]["comment"] == "Good"

    def test_rating_out_of_range(self, client, customer, make_product):
        product = make_product()
        response = client.post(
            f"/api/products/{product.id}/reviews",
            json={"rating": 6, "comment": "Too good"},
            headers=auth_headers(customer),
        )
        assert response.status_code == 400

    def test_requires_login(self, client, make_product):
        product = make_product()
        response = client.post(f"/api/products/{product.id}/reviews", json={"rating": 5, "comment": "x"})
        assert response.status_code == 401

    def test_missing_product(self, client, customer):
        response = client.post(
            "/api/products/999/reviews", json={"rating": 5, "comment": "x"}, headers=auth_headers(customer)
        )
        assert response.status_code == 404
