"""Order aggregate: an immutable snapshot of a cart taken at checkout.

Items carry the unit price in force at checkout, and the total is computed
once when the order is placed. Later price changes never reach an existing
order.

Fulfillment status:
    PROCESSING → SHIPPED → DELIVERED
    PROCESSING → CANCELLED

Payment status:
    PENDING → PAID (only through payment reconciliation; terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.errors import ForbiddenError, OrderStateError
from storefront.order.events import OrderCancelled, OrderPaid, OrderPlaced, OrderStatusUpdated


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "Cash on Delivery"


_VALID_TRANSITIONS = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

_REQUIRED_ADDRESS_FIELDS = ("full_address", "city", "phone")


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, captured at checkout and never updated."""

    full_address = String(required=True, max_length=500)
    street = String(max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(max_length=20)
    phone = String(required=True, max_length=30)


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return round(self.price * self.quantity, 2)


def build_shipping_address(full_address=None, street=None, city=None, postal_code=None, phone=None):
    """Validate checkout address input and build the value object."""
    values = {
        "full_address": full_address,
        "street": street,
        "city": city,
        "postal_code": postal_code,
        "phone": phone,
    }
    if any(not (values[name] or "").strip() for name in _REQUIRED_ADDRESS_FIELDS):
        raise ValidationError({"shipping_address": ["Please fill all the fields"]})

    return ShippingAddress(**{name: value for name, value in values.items() if value})


@storefront.aggregate
class Order:
    owner_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.CASH_ON_DELIVERY.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    total_price = Float(required=True, min_value=0.0)
    payment_reference = String(max_length=255)
    paid_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def paid_orders_must_record_when_they_were_paid(self):
        if self.payment_status == PaymentStatus.PAID.value and self.paid_at is None:
            raise ValidationError({"payment_status": ["A paid order must record its payment time"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, owner_id, items_data, shipping_address):
        """Create an order from checked-out cart lines.

        Args:
            owner_id: The user checking out.
            items_data: List of dicts with product_id, quantity and price, where
                price is the product's price at this moment.
            shipping_address: A validated `ShippingAddress`.
        """
        now = datetime.now(UTC)
        total_price = round(sum(item["quantity"] * item["price"] for item in items_data), 2)

        order = cls(
            owner_id=owner_id,
            shipping_address=shipping_address,
            payment_method=PaymentMethod.CASH_ON_DELIVERY.value,
            payment_status=PaymentStatus.PENDING.value,
            order_status=OrderStatus.PROCESSING.value,
            total_price=total_price,
            created_at=now,
            updated_at=now,
        )
        for item in items_data:
            order.add_items(
                OrderItem(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                    price=item["price"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                owner_id=str(owner_id),
                item_count=len(items_data),
                total_price=total_price,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------
    def is_owned_by(self, user_id):
        return str(self.owner_id) == str(user_id)

    def ensure_visible_to(self, user_id):
        if not self.is_owned_by(user_id):
            raise ForbiddenError("Not authorized to view this order")

    # -------------------------------------------------------------------
    # Fulfillment
    # -------------------------------------------------------------------
    def cancel(self, requested_by):
        """Owner-driven cancellation, allowed only while the order is processing."""
        if not self.is_owned_by(requested_by):
            raise ForbiddenError("Not authorized to cancel this order")
        if OrderStatus(self.order_status) != OrderStatus.PROCESSING:
            raise OrderStateError("Only orders in 'Processing' status can be cancelled")

        now = datetime.now(UTC)
        self.order_status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                owner_id=str(self.owner_id),
                cancelled_at=now,
            )
        )

    def update_status(self, new_status):
        """Staff-driven status change, checked against the forward-only transition map."""
        try:
            target = OrderStatus(new_status)
        except ValueError as exc:
            allowed = ", ".join(status.value for status in OrderStatus)
            raise ValidationError({"order_status": [f"Order status must be one of: {allowed}"]}) from exc

        current = OrderStatus(self.order_status)
        if target not in _VALID_TRANSITIONS[current]:
            raise OrderStateError(f"Cannot transition from {current.value} to {target.value}")

        self.order_status = target.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusUpdated(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
            )
        )

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    @property
    def is_paid(self):
        return PaymentStatus(self.payment_status) == PaymentStatus.PAID

    def ensure_payable_by(self, user_id):
        """Guard for opening a payment session with the provider."""
        if not self.is_owned_by(user_id):
            raise ForbiddenError("Not authorized to pay for this order")
        if self.is_paid:
            raise OrderStateError("Order has already been paid")
        if OrderStatus(self.order_status) == OrderStatus.CANCELLED:
            raise OrderStateError("Cancelled orders cannot be paid")

    def mark_paid(self, payment_reference=None):
        """Settle the order. Returns False, changing nothing, if it was already paid."""
        if self.is_paid:
            return False

        now = datetime.now(UTC)
        with atomic_change(self):
            self.payment_status = PaymentStatus.PAID.value
            self.payment_reference = payment_reference
            self.paid_at = now
            self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                payment_reference=payment_reference,
                total_price=self.total_price,
                paid_at=now,
            )
        )
        return True
