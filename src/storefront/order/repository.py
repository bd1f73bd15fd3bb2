from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_owner(self, owner_id) -> list[Order]:
        orders = self._dao.query.filter(owner_id=str(owner_id)).all().items
        return sorted(orders, key=lambda order: order.created_at, reverse=True)

    def everything(self) -> list[Order]:
        orders = self._dao.query.all().items
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
