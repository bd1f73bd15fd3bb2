"""Payment sessions: opens a hosted checkout page for an order."""

import os

import structlog
from protean.utils.globals import current_domain

from storefront.gateway import get_gateway
from storefront.gateway.port import CheckoutLine, CheckoutSession, PaymentGateway
from storefront.inventory.product import Product
from storefront.order.views import load_order

logger = structlog.get_logger(__name__)

DEFAULT_CLIENT_URL = "http://localhost:5173"


def _client_url() -> str:
    return os.environ.get("CLIENT_URL", DEFAULT_CLIENT_URL).rstrip("/")


def create_payment_session(order_id, requester_id, gateway: PaymentGateway | None = None) -> CheckoutSession:
    """Open a checkout session priced from the order's frozen item prices."""
    order = load_order(order_id)
    order.ensure_payable_by(requester_id)

    products = current_domain.repository_for(Product).views_for(item.product_id for item in order.items)
    line_items = []
    for item in order.items:
        product = products.get(str(item.product_id))
        line_items.append(
            CheckoutLine(
                name=product.title if product else f"Product {item.product_id}",
                image=product.thumbnail if product else None,
                unit_amount=round(item.price * 100),
                quantity=item.quantity,
            )
        )

    gateway = gateway or get_gateway()
    session = gateway.create_checkout_session(
        order_id=str(order.id),
        line_items=line_items,
        success_url=f"{_client_url()}/payment-success",
        cancel_url=f"{_client_url()}/payment-cancel",
    )

    logger.info("payment_session_created", order_id=str(order.id), session_id=session.session_id)
    return session
