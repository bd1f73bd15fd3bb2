"""Inventory ledger: reservations and releases against product stock.

The ledger never opens its own transaction. It is called from command
handlers, which Protean runs inside a unit of work, so the product write it
makes commits or rolls back together with the cart or order write of the
same handler.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import NotFoundError
from storefront.inventory.product import Product

logger = structlog.get_logger(__name__)


class InventoryLedger:
    def __init__(self):
        self.products = current_domain.repository_for(Product)

    def product(self, product_id) -> Product:
        try:
            return self.products.get(str(product_id))
        except ObjectNotFoundError as exc:
            raise NotFoundError(f"Product {product_id} not found") from exc

    def reserve(self, product_id, quantity) -> Product:
        """Decrement available stock, failing with `OutOfStockError` if there is not enough."""
        product = self.product(product_id)
        product.reserve(quantity)
        self.products.add(product)

        logger.debug(
            "stock_reserved",
            product_id=str(product_id),
            quantity=quantity,
            available_quantity=product.available_quantity,
        )
        return product

    def release(self, product_id, quantity) -> Product:
        """Increment available stock."""
        product = self.product(product_id)
        product.release(quantity)
        self.products.add(product)

        logger.debug(
            "stock_released",
            product_id=str(product_id),
            quantity=quantity,
            available_quantity=product.available_quantity,
        )
        return product
