"""Per-user state for Locust scenarios. Nothing is shared between users."""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Ids a simulated shopper collects along its journey."""

    user_id: str
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
