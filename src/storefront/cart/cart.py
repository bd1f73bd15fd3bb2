"""Cart aggregate: one per user, created lazily on the first add.

A cart is never deleted. Checkout empties it, and cancelling an order puts
the order's quantities back into it. Cart lines only track quantities; stock
reservations for them are made by the command handlers through the
inventory ledger.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront
from storefront.errors import NotFoundError


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    owner_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, owner_id):
        now = datetime.now(UTC)
        return cls(owner_id=owner_id, created_at=now, updated_at=now)

    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _line(self, product_id):
        item = self.item_for(product_id)
        if item is None:
            raise NotFoundError("Product not found in cart")
        return item

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add a product, or grow its line if the product is already in the cart."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Invalid quantity"]})

        now = datetime.now(UTC)
        existing = self.item_for(product_id)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity, added_at=now))
            line_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def remove_item(self, product_id):
        """Drop a line entirely and return the quantity it held."""
        item = self._line(product_id)
        quantity = item.quantity

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )
        return quantity

    def increment_item(self, product_id, by=1):
        if by is None or by < 1:
            raise ValidationError({"increment_by": ["Invalid increment value"]})

        item = self._line(product_id)
        previous_quantity = item.quantity
        item.quantity += by
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=item.quantity,
            )
        )

    def decrement_item(self, product_id, by=1):
        """Shrink a line by `by`, removing it when nothing is left.

        Returns the quantity actually taken off the line, which is never more
        than the line held.
        """
        if by is None or by < 1:
            raise ValidationError({"decrement_by": ["Invalid decrement value"]})

        item = self._line(product_id)
        if item.quantity - by <= 0:
            return self.remove_item(product_id)

        previous_quantity = item.quantity
        item.quantity -= by
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=item.quantity,
            )
        )
        return by

    def restore_items(self, lines):
        """Merge `(product_id, quantity)` pairs back into the cart."""
        for product_id, quantity in lines:
            self.add_item(product_id, quantity)

    def clear(self):
        items_cleared = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                owner_id=str(self.owner_id),
                items_cleared=items_cleared,
            )
        )
