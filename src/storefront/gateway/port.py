"""Payment gateway port (abstract interface).

Defines the contract every payment gateway adapter implements, so the fake
gateway (dev/test) and the Stripe gateway (production) are interchangeable
without touching domain or API code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutLine:
    """One line of a hosted checkout page, priced in minor currency units."""

    name: str
    unit_amount: int
    quantity: int
    image: str | None = None


@dataclass(frozen=True)
class CheckoutSession:
    """A hosted checkout session the client is redirected to."""

    session_id: str
    url: str


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[CheckoutLine],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Open a hosted checkout session tagged with the order id."""
        ...

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> dict:
        """Verify a webhook payload against its signature and return the parsed event.

        Raises `WebhookSignatureError` when the payload cannot be trusted.
        """
        ...
