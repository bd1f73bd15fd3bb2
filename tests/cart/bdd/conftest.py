"""Shared BDD fixtures and step definitions for the cart."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.cart import Cart
from storefront.cart.items import AddProductToCart
from storefront.inventory.management import CreateProduct
from storefront.inventory.product import Product

SHOPPER = "shopper-1"


@pytest.fixture()
def shopper():
    return SHOPPER


@pytest.fixture()
def products():
    """Product ids keyed by title."""
    return {}


@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


@given(parsers.cfparse('a product "{title}" priced {price:f} with {quantity:d} in stock'))
def product_in_stock(products, title, price, quantity):
    command = CreateProduct(title=title, price=price, quantity=quantity)
    products[title] = current_domain.process(command, asynchronous=False)


@given(parsers.cfparse('the shopper has {quantity:d} of "{title}" in the cart'))
def shopper_has_items(products, title, quantity):
    command = AddProductToCart(owner_id=SHOPPER, product_id=products[title], quantity=quantity)
    current_domain.process(command, asynchronous=False)


@then(parsers.cfparse('"{title}" has {quantity:d} available'))
def product_has_available(products, title, quantity):
    product = current_domain.repository_for(Product).get(products[title])
    assert product.available_quantity == quantity


@then(parsers.cfparse('the cart holds {quantity:d} of "{title}"'))
def cart_holds(products, title, quantity):
    cart = current_domain.repository_for(Cart).for_owner(SHOPPER)
    assert cart.item_for(products[title]).quantity == quantity


@then(parsers.cfparse('the cart does not hold "{title}"'))
def cart_does_not_hold(products, title):
    cart = current_domain.repository_for(Cart).for_owner(SHOPPER)
    assert cart is None or cart.item_for(products[title]) is None
