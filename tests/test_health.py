"""Tests for the health endpoints."""

from candle_shop import __version__


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "healthy"
    assert body["payments"] == "mock"
    assert body["email_service"] == "console"


def test_root(client):
    body = client.get("/").json()
    assert body["version"] == __version__
    assert body["docs"] == "/docs"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_error_envelope_in_openapi(client):
    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/api/orders/{order_id}/pay"]["put"]["responses"]
    for code in ("400", "401", "404"):
        ref = responses[code]["content"]["application/json"]["schema"]["$ref"]
        assert ref.endswith("/ErrorResponse")
    assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {"success", "message", "detail"}
