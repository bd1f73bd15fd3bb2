"""Storefront bounded context: inventory, shopping cart, orders and payments.

Products own their available stock, carts hold reservations against it,
checkout freezes a cart into an Order, and payment notifications from the
external provider settle the order's payment status.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
