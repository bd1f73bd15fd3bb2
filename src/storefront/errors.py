"""Domain errors raised by the storefront aggregates and handlers.

Every error builds on a Protean exception so callers that only know about
Protean's taxonomy still catch them. The HTTP layer maps each class to a
status code in `storefront.api.errors`.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


class OutOfStockError(ValidationError):
    """Requested quantity exceeds the product's available stock."""


class EmptyCartError(ValidationError):
    """Checkout was attempted on a cart without items."""


class NotFoundError(ObjectNotFoundError):
    """A referenced product, cart, cart line or order does not exist."""


class ForbiddenError(InvalidOperationError):
    """The requester does not own the resource or lacks the required role."""


class OrderStateError(InvalidOperationError):
    """The order's current status does not allow the requested transition."""


class WebhookSignatureError(Exception):
    """A payment notification failed authenticity verification."""


class PaymentGatewayError(Exception):
    """The payment provider could not be reached or rejected the request."""
