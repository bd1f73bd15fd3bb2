from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_owner(self, owner_id) -> Cart | None:
        """Return the owner's cart, or None if they never added anything."""
        carts = self._dao.query.filter(owner_id=str(owner_id)).all().items
        return carts[0] if carts else None
