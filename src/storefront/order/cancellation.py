"""Order cancellation: command and handler.

Cancelling returns the order's quantities to the owner's cart. Stock is not
released here: it left the ledger when the items were first added to the
cart, and the restored cart lines hold it again until they are removed.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.order.views import load_order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        orders = current_domain.repository_for(Order)
        order = load_order(command.order_id)
        order.cancel(requested_by=command.requested_by)

        carts = current_domain.repository_for(Cart)
        cart = carts.for_owner(command.requested_by) or Cart.create(owner_id=command.requested_by)
        cart.restore_items((str(item.product_id), item.quantity) for item in order.items)

        orders.add(order)
        carts.add(cart)

        logger.info("order_cancelled", order_id=str(order.id), owner_id=str(order.owner_id))
