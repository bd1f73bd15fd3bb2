"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or an existing line grew."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart line was incremented or decremented."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed from the cart, usually at checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    items_cleared = Integer(required=True)
