"""Order read models: orders with their items resolved to live product data."""

from dataclasses import dataclass
from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import NotFoundError
from storefront.inventory.product import Product
from storefront.inventory.repository import ProductView
from storefront.order.order import Order


@dataclass(frozen=True)
class OrderItemView:
    product_id: str
    product: ProductView | None
    quantity: int
    price: float


@dataclass(frozen=True)
class OrderView:
    order_id: str
    owner_id: str
    items: list[OrderItemView]
    shipping_address: dict
    payment_method: str
    payment_status: str
    order_status: str
    total_price: float
    payment_reference: str | None
    created_at: datetime | None


def _shipping_address_of(order):
    address = order.shipping_address
    if address is None:
        return {}
    return {
        "full_address": address.full_address,
        "street": address.street,
        "city": address.city,
        "postal_code": address.postal_code,
        "phone": address.phone,
    }


def _views(orders):
    products = current_domain.repository_for(Product).views_for(
        item.product_id for order in orders for item in order.items
    )
    return [
        OrderView(
            order_id=str(order.id),
            owner_id=str(order.owner_id),
            items=[
                OrderItemView(
                    product_id=str(item.product_id),
                    product=products.get(str(item.product_id)),
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ],
            shipping_address=_shipping_address_of(order),
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            order_status=order.order_status,
            total_price=order.total_price,
            payment_reference=order.payment_reference,
            created_at=order.created_at,
        )
        for order in orders
    ]


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError as exc:
        raise NotFoundError("Order not found") from exc


def get_order(order_id, requester_id) -> OrderView:
    order = load_order(order_id)
    order.ensure_visible_to(requester_id)
    return _views([order])[0]


def get_user_orders(owner_id) -> list[OrderView]:
    orders = current_domain.repository_for(Order).for_owner(owner_id)
    if not orders:
        raise NotFoundError("No orders found for this user")
    return _views(orders)


def get_all_orders() -> list[OrderView]:
    orders = current_domain.repository_for(Order).everything()
    if not orders:
        raise NotFoundError("No orders found")
    return _views(orders)
