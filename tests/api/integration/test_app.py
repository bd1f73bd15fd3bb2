"""Integration tests for the assembled application."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    from app import app

    with TestClient(app) as client:
        yield client


class TestApplication:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "domain": "storefront"}

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-Id": "req-123"})
        assert response.headers["X-Request-Id"] == "req-123"

    def test_unknown_route(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert response.json()["message"] == "The Requested Url Does Not Exist"

    def test_cart_route_is_mounted(self, client):
        response = client.get("/cart/get-user-cart", headers={"X-User-Id": "user-1"})
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_missing_user_header(self, client):
        response = client.get("/cart/get-user-cart")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Unauthorized request"}
