"""Cart read model: the cart joined with live product data.

Totals use each product's current price and are recomputed on every read;
nothing here is persisted.
"""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.inventory.product import Product
from storefront.inventory.repository import ProductView


@dataclass(frozen=True)
class CartLineView:
    product_id: str
    product: ProductView | None
    quantity: int

    @property
    def line_total(self) -> float:
        if self.product is None:
            return 0.0
        return round(self.product.price * self.quantity, 2)


@dataclass(frozen=True)
class CartView:
    owner_id: str
    cart_id: str | None = None
    items: list[CartLineView] = field(default_factory=list)

    @property
    def total_amount(self) -> float:
        return round(sum(line.line_total for line in self.items), 2)


def get_cart(owner_id) -> CartView:
    cart = current_domain.repository_for(Cart).for_owner(owner_id)
    if cart is None:
        return CartView(owner_id=str(owner_id))

    products = current_domain.repository_for(Product).views_for(item.product_id for item in cart.items)
    return CartView(
        owner_id=str(cart.owner_id),
        cart_id=str(cart.id),
        items=[
            CartLineView(
                product_id=str(item.product_id),
                product=products.get(str(item.product_id)),
                quantity=item.quantity,
            )
            for item in cart.items
        ],
    )
