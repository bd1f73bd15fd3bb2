"""Stripe payment gateway adapter.

Uses the stripe-python SDK to open hosted Checkout Sessions and to verify
webhook payloads with the endpoint's signing secret.
"""

import json

import stripe

from storefront.errors import PaymentGatewayError, WebhookSignatureError
from storefront.gateway.port import CheckoutLine, CheckoutSession, PaymentGateway


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, webhook_secret: str | None, currency: str = "pkr") -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.currency = currency

    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[CheckoutLine],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                payment_method_types=["card"],
                line_items=[self._line_item(line) for line in line_items],
                mode="payment",
                success_url=success_url,
                cancel_url=cancel_url,
                metadata={"order_id": order_id},
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError(f"Error creating payment session: {exc}") from exc

        return CheckoutSession(session_id=session.id, url=session.url)

    def _line_item(self, line: CheckoutLine) -> dict:
        product_data = {"name": line.name}
        if line.image:
            product_data["images"] = [line.image]
        return {
            "price_data": {
                "currency": self.currency,
                "product_data": product_data,
                "unit_amount": line.unit_amount,
            },
            "quantity": line.quantity,
        }

    def construct_event(self, payload: bytes, signature: str) -> dict:
        if not self.webhook_secret:
            raise PaymentGatewayError("Webhook secret not set")

        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except ValueError as exc:
            raise WebhookSignatureError(f"Invalid payload: {exc}") from exc
        except stripe.SignatureVerificationError as exc:
            raise WebhookSignatureError(str(exc)) from exc

        return json.loads(payload)
