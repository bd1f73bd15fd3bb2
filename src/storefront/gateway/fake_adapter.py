"""Fake payment gateway for development and testing.

Creates checkout sessions without any external calls and accepts webhook
payloads signed with the literal signature `test-signature`.
"""

import json
from uuid import uuid4

from storefront.errors import PaymentGatewayError, WebhookSignatureError
from storefront.gateway.port import CheckoutLine, CheckoutSession, PaymentGateway

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[CheckoutLine],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "order_id": order_id,
                "line_items": line_items,
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )

        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        session_id = f"cs_test_{uuid4().hex[:16]}"
        return CheckoutSession(session_id=session_id, url=f"https://checkout.example.test/pay/{session_id}")

    def construct_event(self, payload: bytes, signature: str) -> dict:
        if signature != TEST_SIGNATURE:
            raise WebhookSignatureError("No signatures found matching the expected signature for payload")
        try:
            return json.loads(payload)
        except ValueError as exc:
            raise WebhookSignatureError("Invalid payload") from exc
