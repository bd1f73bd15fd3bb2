"""Payment reconciliation: settles orders from payment provider notifications.

The provider expects every delivered event to be acknowledged. Only
`checkout.session.completed` changes state; every other event type is logged
and acknowledged. A completed checkout for an order that is already paid is
a no-op, so redelivered events never settle an order twice.
"""

from enum import Enum

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"

# Acknowledged and logged without touching any order
INFORMATIONAL_EVENTS = frozenset(
    {
        "payment_intent.succeeded",
        "payment_intent.created",
        "charge.succeeded",
        "charge.updated",
    }
)


class ReconciliationOutcome(Enum):
    PAID = "paid"
    ALREADY_PAID = "already_paid"
    ORDER_NOT_FOUND = "order_not_found"
    IGNORED = "ignored"


@storefront.command(part_of="Order")
class RecordOrderPayment:
    order_id = Identifier(required=True)
    payment_reference = String(max_length=255)
    event_id = String(max_length=255)


@storefront.command_handler(part_of=Order)
class RecordOrderPaymentHandler:
    @handle(RecordOrderPayment)
    def record_order_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        if not order.mark_paid(payment_reference=command.payment_reference):
            logger.info(
                "payment_event_duplicate",
                order_id=str(command.order_id),
                event_id=command.event_id,
            )
            return ReconciliationOutcome.ALREADY_PAID.value

        repo.add(order)
        logger.info(
            "order_payment_reconciled",
            order_id=str(command.order_id),
            event_id=command.event_id,
            payment_reference=command.payment_reference,
        )
        return ReconciliationOutcome.PAID.value


def _reconcile_checkout_completed(event: dict) -> ReconciliationOutcome:
    session = (event.get("data") or {}).get("object") or {}
    order_id = (session.get("metadata") or {}).get("order_id")
    if not order_id:
        logger.warning("checkout_session_without_order", event_id=event.get("id"), session_id=session.get("id"))
        return ReconciliationOutcome.IGNORED

    try:
        result = current_domain.process(
            RecordOrderPayment(
                order_id=order_id,
                payment_reference=session.get("id"),
                event_id=event.get("id"),
            ),
            asynchronous=False,
        )
    except ObjectNotFoundError:
        logger.warning("payment_for_unknown_order", order_id=order_id, event_id=event.get("id"))
        return ReconciliationOutcome.ORDER_NOT_FOUND

    return ReconciliationOutcome(result)


def reconcile_event(event: dict) -> ReconciliationOutcome:
    """Apply a verified provider event to order payment state."""
    event_type = event.get("type")

    if event_type == CHECKOUT_SESSION_COMPLETED:
        return _reconcile_checkout_completed(event)

    payload = (event.get("data") or {}).get("object") or {}
    if event_type in INFORMATIONAL_EVENTS:
        logger.info("payment_event_received", event_type=event_type, object_id=payload.get("id"))
    else:
        logger.warning("payment_event_unhandled", event_type=event_type, event_id=event.get("id"))
    return ReconciliationOutcome.IGNORED
