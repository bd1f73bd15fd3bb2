"""Application tests for product registration, repricing and restocking."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.errors import NotFoundError
from storefront.inventory.ledger import InventoryLedger
from storefront.inventory.management import CreateProduct, RestockProduct, UpdateProductPrice
from storefront.inventory.product import Product


def _create_product(**overrides):
    defaults = {"title": "Desk Lamp", "price": 24.0, "quantity": 10}
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


class TestCreateProductHandler:
    def test_create_product(self):
        product_id = _create_product(owner_id="admin-1", thumbnail="https://cdn.example.com/lamp.jpg")

        product = current_domain.repository_for(Product).get(product_id)
        assert product.title == "Desk Lamp"
        assert product.price == 24.0
        assert product.available_quantity == 10
        assert product.owner_id == "admin-1"

    def test_create_product_without_quantity(self):
        product_id = current_domain.process(CreateProduct(title="Pen", price=1.5), asynchronous=False)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.available_quantity == 0

    def test_create_product_writes_to_event_store(self):
        product_id = _create_product()

        messages = current_domain.event_store.store.read("storefront::product")
        created = [
            m
            for m in messages
            if m.metadata.headers.type.endswith("ProductCreated.v1") and m.data.get("product_id") == product_id
        ]
        assert len(created) == 1

    def test_title_is_required(self):
        with pytest.raises(ValidationError):
            CreateProduct(price=1.0)


class TestUpdateProductPriceHandler:
    def test_reprice(self):
        product_id = _create_product(price=24.0)
        current_domain.process(UpdateProductPrice(product_id=product_id, price=30.0), asynchronous=False)

        assert current_domain.repository_for(Product).get(product_id).price == 30.0

    def test_reprice_unknown_product(self):
        with pytest.raises(NotFoundError):
            current_domain.process(UpdateProductPrice(product_id="missing", price=30.0), asynchronous=False)


class TestRestockProductHandler:
    def test_restock_adds_to_available_quantity(self):
        product_id = _create_product(quantity=2)
        current_domain.process(RestockProduct(product_id=product_id, quantity=8), asynchronous=False)

        assert current_domain.repository_for(Product).get(product_id).available_quantity == 10

    def test_restock_requires_positive_quantity(self):
        with pytest.raises(ValidationError):
            RestockProduct(product_id="p-1", quantity=0)


class TestInventoryLedger:
    def test_unknown_product(self):
        with pytest.raises(NotFoundError) as exc:
            InventoryLedger().product("missing")
        assert "missing" in str(exc.value.messages)

    def test_reserve_persists(self):
        product_id = _create_product(quantity=4)
        InventoryLedger().reserve(product_id, 3)

        assert current_domain.repository_for(Product).get(product_id).available_quantity == 1

    def test_views_for_skips_unknown_ids(self):
        product_id = _create_product()
        views = current_domain.repository_for(Product).views_for([product_id, "missing"])

        assert list(views) == [product_id]
        assert views[product_id].title == "Desk Lamp"
