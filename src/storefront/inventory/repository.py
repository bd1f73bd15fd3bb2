"""Product repository and the read-only product view shared by cart and order reads."""

from dataclasses import dataclass

from storefront.domain import storefront
from storefront.inventory.product import Product


@dataclass(frozen=True)
class ProductView:
    """Live display data for a product referenced by a cart line or order item."""

    id: str
    title: str
    price: float
    thumbnail: str | None
    available_quantity: int

    @classmethod
    def of(cls, product: Product) -> "ProductView":
        return cls(
            id=str(product.id),
            title=product.title,
            price=product.price,
            thumbnail=product.thumbnail,
            available_quantity=product.available_quantity,
        )


@storefront.repository(part_of=Product)
class ProductRepository:
    def views_for(self, product_ids) -> dict[str, ProductView]:
        """Resolve product ids to views. Ids without a product are left out."""
        ids = list({str(product_id) for product_id in product_ids})
        if not ids:
            return {}

        products = self._dao.query.filter(id__in=ids).all().items
        return {str(product.id): ProductView.of(product) for product in products}
