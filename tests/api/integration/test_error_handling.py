"""Integration tests for the HTTP error envelope."""

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from protean.exceptions import ValidationError
from storefront.api import register_error_handlers
from storefront.api.errors import error_message
from storefront.errors import (
    EmptyCartError,
    ForbiddenError,
    NotFoundError,
    OrderStateError,
    OutOfStockError,
    PaymentGatewayError,
    WebhookSignatureError,
)

router = APIRouter()

_FAILURES = {
    "out-of-stock": OutOfStockError({"quantity": ["Insufficient quantity in stock"]}),
    "empty-cart": EmptyCartError({"cart": ["Your cart is empty"]}),
    "validation": ValidationError({"quantity": ["Invalid quantity"]}),
    "not-found": NotFoundError("Order not found"),
    "forbidden": ForbiddenError("Not authorized to view this order"),
    "state": OrderStateError("Cannot transition from Delivered to Shipped"),
    "signature": WebhookSignatureError("No signatures found"),
    "gateway": PaymentGatewayError("Gateway unavailable"),
    "unexpected": RuntimeError("boom"),
}


@router.get("/fail/{kind}")
async def fail(kind: str):
    raise _FAILURES[kind]


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(router)
    register_error_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


class TestErrorEnvelope:
    @pytest.mark.parametrize(
        "kind, status, message",
        [
            ("out-of-stock", 400, "Insufficient quantity in stock"),
            ("empty-cart", 400, "Your cart is empty"),
            ("validation", 400, "Invalid quantity"),
            ("not-found", 404, "Order not found"),
            ("forbidden", 403, "Not authorized to view this order"),
            ("state", 400, "Cannot transition from Delivered to Shipped"),
            ("signature", 400, "Webhook Error: No signatures found"),
            ("gateway", 500, "Gateway unavailable"),
            ("unexpected", 500, "Internal Server Error"),
        ],
    )
    def test_status_and_message(self, client, kind, status, message):
        response = client.get(f"/fail/{kind}")
        assert response.status_code == status
        assert response.json() == {"success": False, "message": message}

    def test_unknown_route(self, client):
        response = client.get("/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "The Requested Url Does Not Exist"}

    def test_stack_in_development(self, client, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "development")

        response = client.get("/fail/not-found")
        assert response.status_code == 404
        assert "NotFoundError" in response.json()["stack"]


class TestErrorMessage:
    def test_joins_field_messages(self):
        exc = ValidationError({"city": ["is required"], "phone": ["is required", "is too short"]})
        assert error_message(exc) == "is required; is required, is too short"

    def test_plain_exception(self):
        assert error_message(RuntimeError("boom")) == "boom"

    def test_exception_without_args(self):
        assert error_message(RuntimeError()) == "RuntimeError"
