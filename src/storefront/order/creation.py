"""Checkout: converts the owner's cart into an order."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.errors import EmptyCartError
from storefront.inventory.ledger import InventoryLedger
from storefront.order.order import Order, build_shipping_address

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    owner_id = Identifier(required=True)
    full_address = String(max_length=500)
    street = String(max_length=255)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    phone = String(max_length=30)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        shipping_address = build_shipping_address(
            full_address=command.full_address,
            street=command.street,
            city=command.city,
            postal_code=command.postal_code,
            phone=command.phone,
        )

        carts = current_domain.repository_for(Cart)
        cart = carts.for_owner(command.owner_id)
        if cart is None or not cart.items:
            raise EmptyCartError({"cart": ["Your cart is empty"]})

        # Stock was already taken at cart-add time; checkout only reads prices.
        ledger = InventoryLedger()
        items_data = [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "price": ledger.product(item.product_id).price,
            }
            for item in cart.items
        ]

        order = Order.place(
            owner_id=command.owner_id,
            items_data=items_data,
            shipping_address=shipping_address,
        )
        cart.clear()

        current_domain.repository_for(Order).add(order)
        carts.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            owner_id=str(command.owner_id),
            total_price=order.total_price,
        )
        return str(order.id)
