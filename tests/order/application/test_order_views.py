"""Tests for the order read models."""

import pytest
from protean.utils.globals import current_domain
from storefront.cart.items import AddProductToCart
from storefront.errors import ForbiddenError, NotFoundError
from storefront.inventory.management import CreateProduct
from storefront.order.creation import PlaceOrder
from storefront.order.views import get_all_orders, get_order, get_user_orders


def _order_for(owner_id, price=10.0):
    product_id = current_domain.process(CreateProduct(title="Mug", price=price, quantity=10), asynchronous=False)
    current_domain.process(
        AddProductToCart(owner_id=owner_id, product_id=product_id, quantity=1),
        asynchronous=False,
    )
    return current_domain.process(
        PlaceOrder(owner_id=owner_id, full_address="House 12", city="Lahore", phone="0300"),
        asynchronous=False,
    )


class TestGetOrder:
    def test_owner_sees_order(self):
        order_id = _order_for("user-1")

        view = get_order(order_id, "user-1")
        assert view.order_id == order_id
        assert view.items[0].product.title == "Mug"
        assert view.shipping_address["city"] == "Lahore"

    def test_other_user_is_forbidden(self):
        order_id = _order_for("user-1")
        with pytest.raises(ForbiddenError):
            get_order(order_id, "user-2")

    def test_unknown_order(self):
        with pytest.raises(NotFoundError) as exc:
            get_order("missing", "user-1")
        assert exc.value.messages == "Order not found"


class TestListOrders:
    def test_user_orders(self):
        _order_for("user-1")
        _order_for("user-1")
        _order_for("user-2")

        assert len(get_user_orders("user-1")) == 2

    def test_user_without_orders(self):
        with pytest.raises(NotFoundError) as exc:
            get_user_orders("user-1")
        assert exc.value.messages == "No orders found for this user"

    def test_all_orders(self):
        _order_for("user-1")
        _order_for("user-2")

        assert {view.owner_id for view in get_all_orders()} == {"user-1", "user-2"}

    def test_no_orders_at_all(self):
        with pytest.raises(NotFoundError) as exc:
            get_all_orders()
        assert exc.value.messages == "No orders found"
