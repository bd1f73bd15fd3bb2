"""Product aggregate: the owner of available inventory.

Only the parts of a product the ordering flow depends on live here: the
display data shown in carts and orders, the current price, and the available
quantity. Every change to the available quantity goes through `reserve()`
or `release()`.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import OutOfStockError
from storefront.inventory.events import ProductCreated, ProductRepriced, StockReleased, StockReserved


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    thumbnail = String(max_length=1024)
    available_quantity = Integer(default=0, min_value=0)
    owner_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, title, price, available_quantity=0, description=None, thumbnail=None, owner_id=None):
        now = datetime.now(UTC)
        product = cls(
            title=title,
            description=description,
            price=price,
            thumbnail=thumbnail,
            available_quantity=available_quantity,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                title=product.title,
                price=product.price,
                available_quantity=product.available_quantity,
            )
        )
        return product

    def reserve(self, quantity):
        """Take `quantity` units out of available stock."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if self.available_quantity < quantity:
            raise OutOfStockError({"quantity": ["Insufficient quantity in stock"]})

        self.available_quantity -= quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                available_quantity=self.available_quantity,
            )
        )

    def release(self, quantity):
        """Return `quantity` units to available stock."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        self.available_quantity += quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReleased(
                product_id=str(self.id),
                quantity=quantity,
                available_quantity=self.available_quantity,
            )
        )

    def reprice(self, new_price):
        if new_price is None or new_price < 0:
            raise ValidationError({"price": ["Product price must be a positive number"]})

        previous_price = self.price
        self.price = new_price
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductRepriced(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
            )
        )
