"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was registered with its opening stock."""

    __version__ = 1

    product_id = Identifier(required=True)
    title = String(required=True)
    price = Float(required=True)
    available_quantity = Integer(required=True)


@storefront.event(part_of="Product")
class ProductRepriced:
    """The product's current price changed. Existing orders keep their price."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)


@storefront.event(part_of="Product")
class StockReserved:
    """Stock was taken out of the available quantity."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    available_quantity = Integer(required=True)


@storefront.event(part_of="Product")
class StockReleased:
    """Stock was put back into the available quantity."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    available_quantity = Integer(required=True)
