"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing
- StripeGateway when STRIPE_SECRET_KEY is configured
"""

import os

from storefront.gateway.fake_adapter import FakeGateway
from storefront.gateway.port import PaymentGateway
from storefront.gateway.stripe_adapter import StripeGateway

_current_gateway: PaymentGateway | None = None


def gateway_from_environment() -> PaymentGateway:
    """Build the gateway the environment asks for."""
    api_key = os.environ.get("STRIPE_SECRET_KEY")
    if not api_key:
        return FakeGateway()
    return StripeGateway(
        api_key=api_key,
        webhook_secret=os.environ.get("STRIPE_WEBHOOK_SECRET"),
        currency=os.environ.get("STRIPE_CURRENCY", "pkr"),
    )


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = gateway_from_environment()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Install `gateway` for every later `get_gateway()` call."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Forget the installed gateway so the next call rebuilds it from the environment."""
    global _current_gateway
    _current_gateway = None
