"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    item_count = Integer(required=True)
    total_price = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The owner cancelled an order that had not shipped yet."""

    __version__ = 1

    order_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusUpdated:
    """Staff moved the order to a new fulfillment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)


@storefront.event(part_of="Order")
class OrderPaid:
    """The payment provider confirmed payment for the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_reference = String()
    total_price = Float(required=True)
    paid_at = DateTime(required=True)
