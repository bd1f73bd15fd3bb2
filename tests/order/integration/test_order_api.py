"""Integration tests for the order endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.utils.globals import current_domain
from storefront.api import cart_router, order_router, register_error_handlers
from storefront.inventory.management import CreateProduct
from storefront.inventory.product import Product

USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}
ADMIN = {"X-User-Id": "admin-1", "X-User-Role": "admin"}

ADDRESS = {
    "full_address": "House 12, Street 4",
    "street": "Street 4",
    "city": "Lahore",
    "postal_code": "54000",
    "phone": "+92 300 1234567",
}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    register_error_handlers(app)
    return TestClient(app)


def _create_product(price=10.0, quantity=10):
    return current_domain.process(CreateProduct(title="Mug", price=price, quantity=quantity), asynchronous=False)


def _checkout(client, headers=USER, quantity=2, price=10.0):
    product_id = _create_product(price=price)
    client.patch(f"/cart/add-product-to-cart/{product_id}", json={"quantity": quantity}, headers=headers)
    response = client.post("/order/create-order", json=ADDRESS, headers=headers)
    assert response.status_code == 201
    return product_id, response.json()


class TestCreateOrderEndpoint:
    def test_create_order(self, client):
        product_id, order = _checkout(client)

        assert order["total_price"] == 20.0
        assert order["order_status"] == "Processing"
        assert order["payment_status"] == "Pending"
        assert order["payment_method"] == "Cash on Delivery"
        assert order["items"][0]["product_id"] == product_id
        assert order["shipping_address"]["city"] == "Lahore"

        cart = client.get("/cart/get-user-cart", headers=USER).json()
        assert cart["items"] == []

    def test_empty_cart(self, client):
        response = client.post("/order/create-order", json=ADDRESS, headers=USER)
        assert response.status_code == 400
        assert response.json()["message"] == "Your cart is empty"

    def test_missing_address_fields(self, client):
        product_id = _create_product()
        client.patch(f"/cart/add-product-to-cart/{product_id}", headers=USER)

        response = client.post("/order/create-order", json={"full_address": "House 12"}, headers=USER)
        assert response.status_code == 400
        assert response.json()["message"] == "Please fill all the fields"


class TestReadOrderEndpoints:
    def test_get_order(self, client):
        _, order = _checkout(client)

        response = client.get(f"/order/get-order/{order['order_id']}", headers=USER)
        assert response.status_code == 200
        assert response.json()["order_id"] == order["order_id"]

    def test_get_order_of_another_user(self, client):
        _, order = _checkout(client)

        response = client.get(f"/order/get-order/{order['order_id']}", headers=OTHER_USER)
        assert response.status_code == 403

    def test_get_unknown_order(self, client):
        response = client.get("/order/get-order/missing", headers=USER)
        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"

    def test_current_user_orders(self, client):
        _checkout(client)
        _checkout(client, headers=OTHER_USER)

        response = client.get("/order/get-current-user-orders", headers=USER)
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_current_user_without_orders(self, client):
        response = client.get("/order/get-current-user-orders", headers=USER)
        assert response.status_code == 404
        assert response.json()["message"] == "No orders found for this user"

    def test_all_orders_admin(self, client):
        _checkout(client)
        _checkout(client, headers=OTHER_USER)

        response = client.get("/order/get-all-orders-admin", headers=ADMIN)
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_all_orders_requires_admin(self, client):
        response = client.get("/order/get-all-orders-admin", headers=USER)
        assert response.status_code == 403


class TestUpdateOrderStatusEndpoint:
    def test_admin_ships_order(self, client):
        _, order = _checkout(client)

        response = client.patch(
            f"/order/update-order-status/{order['order_id']}",
            json={"order_status": "Shipped"},
            headers=ADMIN,
        )
        assert response.status_code == 200
        assert response.json() == {"status": "Shipped"}

    def test_invalid_transition(self, client):
        _, order = _checkout(client)

        response = client.patch(
            f"/order/update-order-status/{order['order_id']}",
            json={"order_status": "Delivered"},
            headers=ADMIN,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot transition from Processing to Delivered"

    def test_requires_admin(self, client):
        _, order = _checkout(client)

        response = client.patch(
            f"/order/update-order-status/{order['order_id']}",
            json={"order_status": "Shipped"},
            headers=USER,
        )
        assert response.status_code == 403


class TestCancelOrderEndpoint:
    def test_cancel_returns_items_to_cart(self, client):
        product_id, order = _checkout(client, quantity=3)

        response = client.patch(f"/order/cancel-order/{order['order_id']}", headers=USER)
        assert response.status_code == 200
        assert response.json()["order_status"] == "Cancelled"

        cart = client.get("/cart/get-user-cart", headers=USER).json()
        assert cart["items"][0]["quantity"] == 3
        assert current_domain.repository_for(Product).get(product_id).available_quantity == 7

    def test_cancel_shipped_order(self, client):
        _, order = _checkout(client)
        client.patch(
            f"/order/update-order-status/{order['order_id']}",
            json={"order_status": "Shipped"},
            headers=ADMIN,
        )

        response = client.patch(f"/order/cancel-order/{order['order_id']}", headers=USER)
        assert response.status_code == 400
        assert response.json()["message"] == "Only orders in 'Processing' status can be cancelled"

    def test_cancel_order_of_another_user(self, client):
        _, order = _checkout(client)

        response = client.patch(f"/order/cancel-order/{order['order_id']}", headers=OTHER_USER)
        assert response.status_code == 403
