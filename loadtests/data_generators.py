"""Faker-based payloads for the storefront load scenarios.

Payloads match the field names of the API's pydantic request schemas.
"""

import json
import random
import uuid

from faker import Faker

fake = Faker()

WEBHOOK_TEST_SIGNATURE = "test-signature"


def shopper_id() -> str:
    return f"lt-user-{uuid.uuid4().hex[:8]}"


def admin_headers() -> dict:
    return {"X-User-Id": "lt-admin", "X-User-Role": "admin"}


def shopper_headers(user_id: str) -> dict:
    return {"X-User-Id": user_id}


def product_data(quantity: int | None = None) -> dict:
    return {
        "title": fake.catch_phrase()[:255],
        "description": fake.paragraph(nb_sentences=3),
        "price": round(random.uniform(1, 500), 2),
        "thumbnail": fake.image_url(),
        "quantity": quantity if quantity is not None else random.randint(50, 500),
    }


def shipping_address() -> dict:
    return {
        "full_address": fake.street_address(),
        "street": fake.street_name(),
        "city": fake.city(),
        "postal_code": fake.postcode(),
        "phone": fake.phone_number()[:30],
    }


def checkout_completed_event(order_id: str) -> str:
    """Body of a `checkout.session.completed` notification, as the provider would send it."""
    session_id = f"cs_test_{uuid.uuid4().hex[:16]}"
    return json.dumps(
        {
            "id": f"evt_{uuid.uuid4().hex[:16]}",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": {"id": session_id, "metadata": {"order_id": order_id}}},
        }
    )
