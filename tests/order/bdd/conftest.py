"""Shared BDD fixtures and step definitions for orders."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.items import AddProductToCart
from storefront.inventory.management import CreateProduct
from storefront.inventory.product import Product
from storefront.order.creation import PlaceOrder

ADDRESS = {"full_address": "House 12, Street 4", "city": "Lahore", "phone": "+92 300 1234567"}


@pytest.fixture()
def shopper():
    return "shopper-1"


@pytest.fixture()
def products():
    """Product ids keyed by title."""
    return {}


@pytest.fixture()
def placed():
    """Holds the id of the order placed in the scenario."""
    return {"order_id": None}


@given(parsers.cfparse('a product "{title}" priced {price:f} with {quantity:d} in stock'))
def product_in_stock(products, title, price, quantity):
    command = CreateProduct(title=title, price=price, quantity=quantity)
    products[title] = current_domain.process(command, asynchronous=False)


@given(parsers.cfparse('the shopper has {quantity:d} of "{title}" in the cart'))
def shopper_has_items(products, shopper, title, quantity):
    command = AddProductToCart(owner_id=shopper, product_id=products[title], quantity=quantity)
    current_domain.process(command, asynchronous=False)


@given("the shopper has checked out")
def shopper_checked_out(shopper, placed):
    placed["order_id"] = current_domain.process(PlaceOrder(owner_id=shopper, **ADDRESS), asynchronous=False)


@then(parsers.cfparse('"{title}" has {quantity:d} available'))
def product_has_available(products, title, quantity):
    product = current_domain.repository_for(Product).get(products[title])
    assert product.available_quantity == quantity
